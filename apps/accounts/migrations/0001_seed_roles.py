# Data migration to seed the site roles as auth groups

from django.db import migrations


ROLES = ['Admin', 'User', 'Moderator']


def seed_roles(apps, schema_editor):
    Group = apps.get_model('auth', 'Group')

    for name in ROLES:
        Group.objects.get_or_create(name=name)


def reverse_seed(apps, schema_editor):
    Group = apps.get_model('auth', 'Group')
    Group.objects.filter(name__in=ROLES).delete()


class Migration(migrations.Migration):
    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.RunPython(seed_roles, reverse_seed),
    ]
