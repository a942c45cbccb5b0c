from .activities import (
    CategoryListView,
    ActivityListCreateView,
    ActivityDetailView,
    CompleteActivityView,
    MyCreatedActivitiesView,
    MyJoinedActivitiesView,
)
from .participants import (
    JoinActivityView,
    ApprovedParticipantsView,
    PendingRequestsView,
    MyParticipationStatusView,
    ParticipantDecisionView,
)
from .recommendations import RecommendationsView
