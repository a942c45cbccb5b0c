from django.urls import path

from .views import (
    CategoryListView,
    ActivityListCreateView,
    ActivityDetailView,
    CompleteActivityView,
    MyCreatedActivitiesView,
    MyJoinedActivitiesView,
    RecommendationsView,
    JoinActivityView,
    ApprovedParticipantsView,
    PendingRequestsView,
    MyParticipationStatusView,
    ParticipantDecisionView,
)

urlpatterns = [
    path("", ActivityListCreateView.as_view(), name="activity-list"),
    path("categories/", CategoryListView.as_view(), name="activity-categories"),
    path("recommendations/", RecommendationsView.as_view(), name="activity-recommendations"),
    path("me/created/", MyCreatedActivitiesView.as_view(), name="my-created-activities"),
    path("me/joined/", MyJoinedActivitiesView.as_view(), name="my-joined-activities"),

    path("<int:activity_id>/", ActivityDetailView.as_view(), name="activity-detail"),
    path("<int:activity_id>/complete/", CompleteActivityView.as_view(), name="activity-complete"),

    # Participation
    path(
        "<int:activity_id>/participants/",
        ApprovedParticipantsView.as_view(),
        name="activity-participants",
    ),
    path(
        "<int:activity_id>/participants/join/",
        JoinActivityView.as_view(),
        name="activity-join",
    ),
    path(
        "<int:activity_id>/participants/pending/",
        PendingRequestsView.as_view(),
        name="activity-pending-requests",
    ),
    path(
        "<int:activity_id>/participants/my-status/",
        MyParticipationStatusView.as_view(),
        name="activity-my-status",
    ),
    path(
        "<int:activity_id>/participants/<int:participant_id>/approve/",
        ParticipantDecisionView.as_view(),
        {"action": "approve"},
        name="activity-participant-approve",
    ),
    path(
        "<int:activity_id>/participants/<int:participant_id>/reject/",
        ParticipantDecisionView.as_view(),
        {"action": "reject"},
        name="activity-participant-reject",
    ),
]
