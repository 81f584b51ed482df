from django.contrib import admin
from .models import FamilyTree, Person, TreeMember, Relationship, TreeCollaborator, Media


class TreeMemberInline(admin.TabularInline):
    model = TreeMember
    extra = 0
    raw_id_fields = ['person']


class TreeCollaboratorInline(admin.TabularInline):
    model = TreeCollaborator
    extra = 0
    raw_id_fields = ['user']
    readonly_fields = ['invited_at']


@admin.register(FamilyTree)
class FamilyTreeAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'is_public', 'created_at', 'updated_at']
    list_filter = ['is_public', 'created_at']
    search_fields = ['name', 'description', 'owner__username', 'owner__email']
    date_hierarchy = 'created_at'
    inlines = [TreeMemberInline, TreeCollaboratorInline]


class MediaInline(admin.TabularInline):
    model = Media
    extra = 0
    fields = ['file_name', 'media_type', 'caption', 'file_size', 'uploaded_at']
    readonly_fields = ['file_size', 'uploaded_at']


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    list_display = ['last_name', 'first_name', 'birth_date', 'death_date', 'gender']
    search_fields = ['first_name', 'last_name', 'maiden_name', 'birth_place']
    inlines = [MediaInline]


@admin.register(Relationship)
class RelationshipAdmin(admin.ModelAdmin):
    list_display = ['parent', 'child', 'type', 'created_at']
    list_filter = ['type']
    raw_id_fields = ['parent', 'child']


@admin.register(TreeCollaborator)
class TreeCollaboratorAdmin(admin.ModelAdmin):
    list_display = ['tree', 'user', 'permission', 'invited_at']
    list_filter = ['permission']
    search_fields = ['tree__name', 'user__email']


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    list_display = ['file_name', 'person', 'media_type', 'size_display', 'uploaded_at']
    list_filter = ['media_type']
    search_fields = ['file_name', 'caption', 'content_hash']
