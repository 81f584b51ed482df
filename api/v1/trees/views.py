"""
Family tree views for the Family Tree API.

Views validate input, call the tree services and translate service
outcomes into HTTP responses.
"""
from rest_framework import status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.trees.results import NOT_FOUND, PERMISSION, VALIDATION
from apps.trees.services import FamilyMemberService, FamilyTreeService, MediaService

from .serializers import (
    TreeInputSerializer, TreeSummarySerializer, TreeDetailSerializer,
    ShareTreeSerializer, CollaboratorSerializer,
    PersonInputSerializer, PersonSummarySerializer, PersonDetailSerializer,
    RelationshipSerializer, RelationshipCreateSerializer,
    MediaSerializer, MediaUploadSerializer,
)

STATUS_BY_CATEGORY = {
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    PERMISSION: status.HTTP_403_FORBIDDEN,
    VALIDATION: status.HTTP_400_BAD_REQUEST,
}


def error_response(error):
    """Map a ServiceError to an error response."""
    return Response(
        {'error': error.message},
        status=STATUS_BY_CATEGORY.get(error.category, status.HTTP_400_BAD_REQUEST)
    )


class TreeServiceMixin:
    tree_service_class = FamilyTreeService

    def get_tree_service(self):
        return self.tree_service_class()


class MemberServiceMixin:
    member_service_class = FamilyMemberService

    def get_member_service(self):
        return self.member_service_class()


class MediaServiceMixin:
    media_service_class = MediaService

    def get_media_service(self):
        return self.media_service_class()


# =============================================================================
# Trees
# =============================================================================

class TreeListCreateView(TreeServiceMixin, APIView):
    """
    List trees owned by or shared with the current user, or create one.
    """

    @extend_schema(summary="List my trees", responses=TreeSummarySerializer(many=True))
    def get(self, request):
        result = self.get_tree_service().list_user_trees(request.user.id)
        return Response(TreeSummarySerializer(result.value, many=True).data)

    @extend_schema(summary="Create tree", request=TreeInputSerializer, responses=TreeDetailSerializer)
    def post(self, request):
        serializer = TreeInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_tree_service().create_tree(request.user.id, serializer.validated_data)
        if not result.ok:
            return error_response(result.error)

        return Response(TreeDetailSerializer(result.value).data, status=status.HTTP_201_CREATED)


class TreeDetailView(TreeServiceMixin, APIView):
    """
    Get, update or delete a tree.
    """

    @extend_schema(summary="Get tree", responses=TreeDetailSerializer)
    def get(self, request, tree_id):
        result = self.get_tree_service().get_tree(tree_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(TreeDetailSerializer(result.value).data)

    @extend_schema(summary="Update tree", request=TreeInputSerializer, responses=TreeDetailSerializer)
    def put(self, request, tree_id):
        serializer = TreeInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_tree_service().update_tree(tree_id, request.user.id, serializer.validated_data)
        if not result.ok:
            return error_response(result.error)
        return Response(TreeDetailSerializer(result.value).data)

    @extend_schema(summary="Delete tree")
    def delete(self, request, tree_id):
        result = self.get_tree_service().delete_tree(tree_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ShareTreeView(TreeServiceMixin, APIView):
    """
    Share a tree with another user by email.
    """

    @extend_schema(summary="Share tree", request=ShareTreeSerializer, responses=CollaboratorSerializer)
    def post(self, request, tree_id):
        serializer = ShareTreeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_tree_service().share_tree(
            tree_id,
            request.user.id,
            serializer.validated_data['user_email'],
            serializer.validated_data['permission'],
        )
        if not result.ok:
            return error_response(result.error)

        return Response(CollaboratorSerializer(result.value).data, status=status.HTTP_201_CREATED)


class CollaboratorListView(TreeServiceMixin, APIView):

    @extend_schema(summary="List collaborators", responses=CollaboratorSerializer(many=True))
    def get(self, request, tree_id):
        result = self.get_tree_service().list_collaborators(tree_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(CollaboratorSerializer(result.value, many=True).data)


class CollaboratorDetailView(TreeServiceMixin, APIView):

    @extend_schema(summary="Remove collaborator")
    def delete(self, request, tree_id, collaborator_id):
        result = self.get_tree_service().remove_collaborator(tree_id, collaborator_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Members
# =============================================================================

class MemberListCreateView(MemberServiceMixin, APIView):
    """
    List the people in a tree, or add a new person to it.
    """

    @extend_schema(summary="List tree members", responses=PersonSummarySerializer(many=True))
    def get(self, request, tree_id):
        result = self.get_member_service().list_members(tree_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(PersonSummarySerializer(result.value, many=True).data)

    @extend_schema(summary="Add person to tree", request=PersonInputSerializer, responses=PersonDetailSerializer)
    def post(self, request, tree_id):
        serializer = PersonInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_member_service().add_person(tree_id, request.user.id, serializer.validated_data)
        if not result.ok:
            return error_response(result.error)

        return Response(
            PersonDetailSerializer(result.value, context={'request': request}).data,
            status=status.HTTP_201_CREATED
        )


class MemberDetailView(MemberServiceMixin, APIView):
    """
    Get, update or remove a person in a tree.
    """

    @extend_schema(summary="Get person", responses=PersonDetailSerializer)
    def get(self, request, tree_id, person_id):
        result = self.get_member_service().get_person(tree_id, person_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(PersonDetailSerializer(result.value, context={'request': request}).data)

    @extend_schema(summary="Update person", request=PersonInputSerializer, responses=PersonDetailSerializer)
    def put(self, request, tree_id, person_id):
        serializer = PersonInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_member_service().update_person(
            tree_id, person_id, request.user.id, serializer.validated_data
        )
        if not result.ok:
            return error_response(result.error)
        return Response(PersonDetailSerializer(result.value, context={'request': request}).data)

    @extend_schema(summary="Remove person from tree")
    def delete(self, request, tree_id, person_id):
        result = self.get_member_service().remove_person(tree_id, person_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Relationships
# =============================================================================

class RelationshipListCreateView(MemberServiceMixin, APIView):

    @extend_schema(summary="List relationships", responses=RelationshipSerializer(many=True))
    def get(self, request, tree_id):
        result = self.get_member_service().list_relationships(tree_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(RelationshipSerializer(result.value, many=True).data)

    @extend_schema(summary="Add relationship", request=RelationshipCreateSerializer,
                   responses=RelationshipSerializer)
    def post(self, request, tree_id):
        serializer = RelationshipCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_member_service().add_relationship(
            tree_id,
            request.user.id,
            serializer.validated_data['parent_id'],
            serializer.validated_data['child_id'],
            serializer.validated_data['type'],
        )
        if not result.ok:
            return error_response(result.error)

        return Response(RelationshipSerializer(result.value).data, status=status.HTTP_201_CREATED)


class RelationshipDetailView(MemberServiceMixin, APIView):

    @extend_schema(summary="Remove relationship")
    def delete(self, request, tree_id, relationship_id):
        result = self.get_member_service().remove_relationship(tree_id, relationship_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Media
# =============================================================================

class MediaListCreateView(MediaServiceMixin, APIView):
    """
    List or upload media files for a person.
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(summary="List media files", responses=MediaSerializer(many=True))
    def get(self, request, tree_id, person_id):
        media_service = self.get_media_service()
        result = media_service.list_media(tree_id, person_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        context = {'request': request, 'media_service': media_service}
        return Response(MediaSerializer(result.value, many=True, context=context).data)

    @extend_schema(summary="Upload media file", request=MediaUploadSerializer, responses=MediaSerializer)
    def post(self, request, tree_id, person_id):
        serializer = MediaUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        media_service = self.get_media_service()
        result = media_service.upload_media(
            tree_id,
            person_id,
            request.user.id,
            serializer.validated_data['file'],
            serializer.validated_data['media_type'],
            serializer.validated_data.get('caption'),
        )
        if not result.ok:
            return error_response(result.error)

        context = {'request': request, 'media_service': media_service}
        return Response(MediaSerializer(result.value, context=context).data, status=status.HTTP_201_CREATED)


class MediaDetailView(MediaServiceMixin, APIView):

    @extend_schema(summary="Delete media file")
    def delete(self, request, tree_id, person_id, media_id):
        result = self.get_media_service().delete_media(tree_id, person_id, media_id, request.user.id)
        if not result.ok:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)
