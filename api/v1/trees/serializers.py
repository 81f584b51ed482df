"""
Family tree serializers for the Family Tree API.
"""
from rest_framework import serializers

from apps.trees.models import FamilyTree, Person, Relationship, TreeCollaborator, Media
from apps.trees.services import MediaService


# =============================================================================
# Trees
# =============================================================================

class TreeInputSerializer(serializers.Serializer):
    """Input for creating or updating a tree."""
    name = serializers.CharField(min_length=1, max_length=200)
    description = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, allow_null=True
    )
    is_public = serializers.BooleanField(required=False, default=False)


class TreeSummarySerializer(serializers.ModelSerializer):
    """Tree list item."""
    member_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = FamilyTree
        fields = ['id', 'name', 'description', 'is_public', 'member_count', 'created_at']
        read_only_fields = fields


class TreeDetailSerializer(serializers.ModelSerializer):
    """Full tree representation."""
    owner_id = serializers.IntegerField(read_only=True)
    owner_username = serializers.SerializerMethodField()
    member_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = FamilyTree
        fields = [
            'id', 'name', 'description', 'owner_id', 'owner_username',
            'is_public', 'created_at', 'updated_at', 'member_count'
        ]
        read_only_fields = fields

    def get_owner_username(self, obj):
        owner = getattr(obj, 'owner', None)
        return owner.username if owner else 'Unknown'


class ShareTreeSerializer(serializers.Serializer):
    """Share a tree with another user."""
    user_email = serializers.EmailField()
    permission = serializers.ChoiceField(choices=TreeCollaborator.PERMISSION_CHOICES)


class CollaboratorSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(source='user.email', read_only=True)

    class Meta:
        model = TreeCollaborator
        fields = ['id', 'user_id', 'username', 'email', 'permission', 'invited_at']
        read_only_fields = fields


# =============================================================================
# People
# =============================================================================

class PersonInputSerializer(serializers.Serializer):
    """Input for creating or updating a person."""
    first_name = serializers.CharField(min_length=1, max_length=100)
    middle_name = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    last_name = serializers.CharField(min_length=1, max_length=100)
    maiden_name = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    birth_date = serializers.DateField(required=False, allow_null=True)
    birth_place = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    death_date = serializers.DateField(required=False, allow_null=True)
    death_place = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    gender = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    # Left untrimmed so the service decides what counts as blank
    biography = serializers.CharField(
        max_length=5000, required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class PersonSummarySerializer(serializers.ModelSerializer):
    """Tree member list item."""

    class Meta:
        model = Person
        fields = ['id', 'first_name', 'last_name', 'birth_date', 'death_date', 'profile_photo_url']
        read_only_fields = fields


class RelationshipSerializer(serializers.ModelSerializer):
    parent_id = serializers.IntegerField(read_only=True)
    parent_name = serializers.CharField(source='parent.full_name', read_only=True)
    child_id = serializers.IntegerField(read_only=True)
    child_name = serializers.CharField(source='child.full_name', read_only=True)

    class Meta:
        model = Relationship
        fields = ['id', 'parent_id', 'parent_name', 'child_id', 'child_name', 'type']
        read_only_fields = fields


class RelationshipCreateSerializer(serializers.Serializer):
    parent_id = serializers.IntegerField()
    child_id = serializers.IntegerField()
    type = serializers.ChoiceField(
        choices=Relationship.TYPE_CHOICES, default=Relationship.TYPE_BIOLOGICAL
    )


class MediaSerializer(serializers.ModelSerializer):
    """Media file metadata."""
    person_id = serializers.IntegerField(read_only=True)
    url = serializers.SerializerMethodField()
    size_display = serializers.CharField(read_only=True)

    class Meta:
        model = Media
        fields = [
            'id', 'person_id', 'file_name', 'file_path', 'url', 'caption',
            'media_type', 'file_size', 'size_display', 'uploaded_at'
        ]
        read_only_fields = fields

    def get_url(self, obj):
        media_service = self.context.get('media_service') or MediaService()
        url = media_service.url_for(obj)
        request = self.context.get('request')
        if request and url.startswith('/'):
            return request.build_absolute_uri(url)
        return url


class MediaUploadSerializer(serializers.Serializer):
    file = serializers.FileField(allow_empty_file=True)
    caption = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    media_type = serializers.ChoiceField(choices=Media.MEDIA_TYPE_CHOICES, default=Media.TYPE_PHOTO)


class PersonDetailSerializer(serializers.ModelSerializer):
    """Person with parents, children and media."""
    parents = RelationshipSerializer(source='child_relationships', many=True, read_only=True)
    children = RelationshipSerializer(source='parent_relationships', many=True, read_only=True)
    media_files = MediaSerializer(many=True, read_only=True)

    class Meta:
        model = Person
        fields = [
            'id', 'first_name', 'middle_name', 'last_name', 'maiden_name',
            'birth_date', 'birth_place', 'death_date', 'death_place',
            'gender', 'biography', 'profile_photo_url', 'created_at',
            'parents', 'children', 'media_files'
        ]
        read_only_fields = fields
