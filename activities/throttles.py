# activities/throttles.py

from rest_framework.throttling import SimpleRateThrottle


class ActivityCreateThrottle(SimpleRateThrottle):
    """
    Throttle activity creation per user.

    Scope key: 'activity-create'
    Cache key shape:
      throttle_activity-create_u<user_id>
    """
    scope = "activity-create"

    def get_cache_key(self, request, view):
        # Only throttle POST (activity creation)
        if request.method != "POST":
            return None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        return f"throttle_{self.scope}_u{user.id}"


class ActivityJoinThrottle(SimpleRateThrottle):
    """
    Throttle join requests per user.

    Scope key: 'activity-join'
    Cache key shape:
      throttle_activity-join_u<user_id>
    """
    scope = "activity-join"

    def get_cache_key(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        return f"throttle_{self.scope}_u{user.id}"


class RecommendationThrottle(SimpleRateThrottle):
    """
    Throttle recommendation reads per user.

    Scope key: 'recommendations'
    """
    scope = "recommendations"

    def get_cache_key(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        return f"throttle_{self.scope}_u{user.id}"
