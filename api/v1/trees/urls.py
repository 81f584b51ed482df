"""
Family tree URL patterns for the Family Tree API.
"""
from django.urls import path

from .views import (
    TreeListCreateView, TreeDetailView, ShareTreeView,
    CollaboratorListView, CollaboratorDetailView,
    MemberListCreateView, MemberDetailView,
    RelationshipListCreateView, RelationshipDetailView,
    MediaListCreateView, MediaDetailView,
)

urlpatterns = [
    # Trees
    path('', TreeListCreateView.as_view(), name='tree_list'),
    path('<int:tree_id>/', TreeDetailView.as_view(), name='tree_detail'),

    # Sharing
    path('<int:tree_id>/share/', ShareTreeView.as_view(), name='tree_share'),
    path('<int:tree_id>/collaborators/', CollaboratorListView.as_view(), name='collaborator_list'),
    path('<int:tree_id>/collaborators/<int:collaborator_id>/', CollaboratorDetailView.as_view(),
         name='collaborator_detail'),

    # Members
    path('<int:tree_id>/members/', MemberListCreateView.as_view(), name='member_list'),
    path('<int:tree_id>/members/<int:person_id>/', MemberDetailView.as_view(), name='member_detail'),

    # Media
    path('<int:tree_id>/members/<int:person_id>/media/', MediaListCreateView.as_view(), name='media_list'),
    path('<int:tree_id>/members/<int:person_id>/media/<int:media_id>/', MediaDetailView.as_view(),
         name='media_detail'),

    # Relationships
    path('<int:tree_id>/relationships/', RelationshipListCreateView.as_view(), name='relationship_list'),
    path('<int:tree_id>/relationships/<int:relationship_id>/', RelationshipDetailView.as_view(),
         name='relationship_detail'),
]
