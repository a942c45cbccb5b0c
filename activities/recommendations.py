# activities/recommendations.py
"""
Personalized activity recommendations.

Candidates come from the user's preferred categories (profile interests
plus categories of activities they were approved for). Each candidate is
scored by `score_activity`, a pure function of the activity, the user and
the clock, then ranked highest first. Nothing here writes to the database.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Set

from django.conf import settings

from users.services import ProfileService
from . import datetime_utils
from .models import Activity, Participant

logger = logging.getLogger("huddle.activities")


# Scoring weights
CATEGORY_MATCH_POINTS = 30
SKILL_MATCH_POINTS = 20
LOCATION_MATCH_POINTS = 25
CREATOR_RATING_MULTIPLIER = 5
AGE_MATCH_POINTS = 10

# Urgency bonus: (max whole days until start, points)
URGENCY_TIERS = [
    (7, 15),
    (14, 10),
]

FALLBACK_POOL_FACTOR = 2


def clamp_limit(limit) -> int:
    """Coerce a requested limit into [0, RECOMMENDATION_MAX_LIMIT]."""
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        limit = settings.RECOMMENDATION_DEFAULT_LIMIT
    return max(0, min(limit, settings.RECOMMENDATION_MAX_LIMIT))


def preferred_categories(user) -> Set[str]:
    profile = ProfileService.get_profile(user)
    categories = set(profile.interest_tokens()) if profile else set()

    categories.update(
        Participant.objects.filter(
            user=user,
            status=Participant.STATUS_APPROVED,
        ).values_list("activity__category", flat=True)
    )
    categories.discard(None)
    categories.discard("")
    return categories


def candidate_pool(user, categories: Set[str], limit: int) -> List[Activity]:
    """
    OPEN, live activities the user has not created and never asked to join.

    Without preferences the pool is the `2 * limit` most recent OPEN
    activities, taken before the exclusions are applied.
    """
    qs = (
        Activity.objects
        .filter(status=Activity.STATUS_OPEN, deleted=False)
        .select_related("creator", "creator__profile")
        .order_by("-created_at", "-id")
    )

    if categories:
        qs = qs.filter(category__in=categories)
    else:
        qs = qs[:limit * FALLBACK_POOL_FACTOR]

    engaged_ids = set(
        Participant.objects.filter(user=user).values_list("activity_id", flat=True)
    )

    return [
        activity for activity in qs
        if activity.creator_id != user.id and activity.id not in engaged_ids
    ]


def _urgency_points(scheduled_at: Optional[datetime], now: datetime) -> int:
    days = datetime_utils.days_until(scheduled_at, now)
    if days is None:
        return 0
    for max_days, points in URGENCY_TIERS:
        if days <= max_days:
            return points
    return 0


def _age_fits(age: Optional[int], activity: Activity) -> bool:
    if age is None:
        return False
    if activity.min_age is not None and age < activity.min_age:
        return False
    if activity.max_age is not None and age > activity.max_age:
        return False
    return True


def score_activity(activity: Activity, user, categories: Iterable[str], now: datetime) -> float:
    """
    Relevance of `activity` for `user`.

    Pure: reads only its arguments (and already-loaded profile relations),
    so the same inputs always produce the same score.
    """
    score = 0.0
    profile = ProfileService.get_profile(user)

    if activity.category in categories:
        score += CATEGORY_MATCH_POINTS

    if (
        profile is not None
        and profile.skill_level
        and activity.required_skill_level
        and profile.skill_level == activity.required_skill_level
    ):
        score += SKILL_MATCH_POINTS

    if (
        profile is not None
        and profile.location
        and activity.location
        and profile.location.lower() in activity.location.lower()
    ):
        score += LOCATION_MATCH_POINTS

    score += ProfileService.get_rating(activity.creator) * CREATOR_RATING_MULTIPLIER

    if _age_fits(getattr(user, "age", None), activity):
        score += AGE_MATCH_POINTS

    score += _urgency_points(activity.scheduled_at, now)

    return score


def get_recommendations(user_id, limit=None, now: Optional[datetime] = None) -> List[Activity]:
    """
    Ranked recommendations for a user, at most `limit` long.

    Raises NotFound for an unknown user. Ties keep pool order (newest first).
    """
    user = ProfileService.get_user(user_id)
    limit = clamp_limit(settings.RECOMMENDATION_DEFAULT_LIMIT if limit is None else limit)
    if limit == 0:
        return []
    now = now or datetime_utils.now()

    categories = preferred_categories(user)
    pool = candidate_pool(user, categories, limit)

    scored = [(score_activity(activity, user, categories, now), activity) for activity in pool]
    # sorted() is stable, equal scores keep pool order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)

    logger.debug(
        f"Recommendations: user={user.id}, preferences={len(categories)}, "
        f"pool={len(pool)}, returned={min(limit, len(scored))}"
    )
    return [activity for _, activity in scored[:limit]]
