from django.db import models
from django.contrib.auth.models import User


class FamilyTree(models.Model):
    """A named genealogy collection owned by exactly one user."""
    name = models.CharField(max_length=200)
    description = models.TextField(max_length=1000, blank=True, null=True)
    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='owned_trees'
    )
    is_public = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='trees_owner_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} (owner: {self.owner_id})"


class Person(models.Model):
    """
    A person record.

    People are not owned by a tree; TreeMember rows place them in trees.
    Removing a person from a tree deletes the membership only.
    """
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True, null=True)
    last_name = models.CharField(max_length=100)
    maiden_name = models.CharField(max_length=100, blank=True, null=True)

    birth_date = models.DateField(null=True, blank=True)
    birth_place = models.CharField(max_length=200, blank=True, null=True)
    death_date = models.DateField(null=True, blank=True)
    death_place = models.CharField(max_length=200, blank=True, null=True)

    gender = models.CharField(max_length=20, blank=True, null=True)
    biography = models.TextField(blank=True, null=True, help_text="Sanitized rich text")
    profile_photo_url = models.CharField(max_length=500, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'people'

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class TreeMember(models.Model):
    """Membership of a person in a tree."""
    tree = models.ForeignKey(
        FamilyTree,
        on_delete=models.CASCADE,
        related_name='members'
    )
    person = models.ForeignKey(
        Person,
        on_delete=models.CASCADE,
        related_name='tree_memberships'
    )

    class Meta:
        unique_together = ['tree', 'person']

    def __str__(self):
        return f"person {self.person_id} in tree {self.tree_id}"


class Relationship(models.Model):
    """Directed parent -> child edge between two people."""
    TYPE_BIOLOGICAL = 'Biological'
    TYPE_ADOPTED = 'Adopted'
    TYPE_STEP = 'Step'
    TYPE_FOSTER = 'Foster'

    TYPE_CHOICES = [
        (TYPE_BIOLOGICAL, 'Biological'),
        (TYPE_ADOPTED, 'Adopted'),
        (TYPE_STEP, 'Step'),
        (TYPE_FOSTER, 'Foster'),
    ]

    # related_name is from the point of view of the referenced person:
    # person.parent_relationships are the edges where they are the parent.
    parent = models.ForeignKey(
        Person,
        on_delete=models.CASCADE,
        related_name='parent_relationships'
    )
    child = models.ForeignKey(
        Person,
        on_delete=models.CASCADE,
        related_name='child_relationships'
    )
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_BIOLOGICAL)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['parent', 'child']
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(parent=models.F('child')),
                name='relationship_not_self'
            )
        ]

    def __str__(self):
        return f"{self.parent_id} -> {self.child_id} ({self.type})"


class TreeCollaborator(models.Model):
    """
    Permission grant for a non-owner user on one tree.

    Uniqueness of (tree, user) is enforced by the database so that two
    concurrent share requests cannot create duplicate grants.
    """
    PERMISSION_VIEW = 'View'
    PERMISSION_EDIT = 'Edit'
    PERMISSION_ADMIN = 'Admin'

    PERMISSION_CHOICES = [
        (PERMISSION_VIEW, 'View'),
        (PERMISSION_EDIT, 'Edit'),
        (PERMISSION_ADMIN, 'Admin'),
    ]

    tree = models.ForeignKey(
        FamilyTree,
        on_delete=models.CASCADE,
        related_name='collaborators'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='tree_grants'
    )
    permission = models.CharField(
        max_length=10,
        choices=PERMISSION_CHOICES,
        default=PERMISSION_VIEW
    )
    invited_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['tree', 'user']
        ordering = ['invited_at']

    def __str__(self):
        return f"user {self.user_id} on tree {self.tree_id} ({self.permission})"


class Media(models.Model):
    """
    File metadata attached to a person.

    `file_path` is a content-addressed storage name; several rows may
    point at the same blob.
    """
    TYPE_PHOTO = 'Photo'
    TYPE_DOCUMENT = 'Document'
    TYPE_VIDEO = 'Video'

    MEDIA_TYPE_CHOICES = [
        (TYPE_PHOTO, 'Photo'),
        (TYPE_DOCUMENT, 'Document'),
        (TYPE_VIDEO, 'Video'),
    ]

    person = models.ForeignKey(
        Person,
        on_delete=models.CASCADE,
        related_name='media_files'
    )
    file_name = models.CharField(max_length=255)
    file_path = models.CharField(max_length=500)
    content_hash = models.CharField(max_length=64, help_text="SHA-256 of the file content")
    file_size = models.PositiveIntegerField(help_text="Size in bytes")
    caption = models.CharField(max_length=500, blank=True, null=True)
    media_type = models.CharField(max_length=10, choices=MEDIA_TYPE_CHOICES, default=TYPE_PHOTO)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'media'
        ordering = ['-uploaded_at']
        indexes = [
            models.Index(fields=['file_path'], name='trees_media_path_idx'),
        ]

    def __str__(self):
        return f"{self.file_name} ({self.media_type})"

    @property
    def size_display(self):
        """Return human-readable file size."""
        size = self.file_size
        for unit in ['B', 'KB', 'MB', 'GB']:
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} TB"
