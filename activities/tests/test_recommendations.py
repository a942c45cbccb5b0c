from datetime import datetime, timedelta

from django.test import TestCase, override_settings

from core.exceptions import NotFound
from users.models import User, UserProfile
from activities.models import Activity, Participant
from activities.recommendations import (
    clamp_limit,
    get_recommendations,
    preferred_categories,
    score_activity,
)

NOW = datetime(2026, 3, 1, 12, 0, 0)


class ScoreActivityTestCase(TestCase):
    def setUp(self):
        self.creator = User.objects.create_user(username="organiser", password="pass")
        self.user = User.objects.create_user(username="seeker", password="pass")
        self.activity = Activity.objects.create(
            creator=self.creator,
            name="Evening Match",
            category="Football",
            location="Downtown Sports Arena",
        )

    def score(self, categories=()):
        return score_activity(self.activity, self.user, set(categories), NOW)

    def test_no_signals_scores_zero(self):
        self.assertEqual(self.score(), 0)

    def test_category_match(self):
        self.assertEqual(self.score({"Football"}), 30)
        # Exact, case-sensitive comparison
        self.assertEqual(self.score({"football"}), 0)

    def test_skill_match_needs_both_values(self):
        UserProfile.objects.create(user=self.user, skill_level="INTERMEDIATE")
        self.assertEqual(self.score(), 0)

        self.activity.required_skill_level = "INTERMEDIATE"
        self.assertEqual(self.score(), 20)

        self.activity.required_skill_level = "ADVANCED"
        self.assertEqual(self.score(), 0)

    def test_location_containment_is_case_insensitive(self):
        UserProfile.objects.create(user=self.user, location="downtown")
        self.assertEqual(self.score(), 25)

    def test_creator_rating_bonus(self):
        UserProfile.objects.create(user=self.creator, average_rating=4.5)
        self.assertEqual(self.score(), 22.5)

    def test_age_bonus(self):
        # Unknown age earns nothing
        self.assertEqual(self.score(), 0)

        self.user.age = 20
        self.assertEqual(self.score(), 10)

        self.activity.min_age = 21
        self.assertEqual(self.score(), 0)

        self.activity.min_age = 18
        self.activity.max_age = 19
        self.assertEqual(self.score(), 0)

    def test_urgency_boundaries(self):
        expectations = [(0, 15), (7, 15), (14, 10), (15, 0)]
        for days, points in expectations:
            with self.subTest(days=days):
                self.activity.scheduled_at = NOW + timedelta(days=days)
                self.assertEqual(self.score(), points)

        self.activity.scheduled_at = NOW + timedelta(days=7, hours=23)
        self.assertEqual(self.score(), 15)

        self.activity.scheduled_at = None
        self.assertEqual(self.score(), 0)

    def test_score_is_deterministic(self):
        UserProfile.objects.create(user=self.user, location="Downtown", skill_level="BEGINNER")
        self.activity.required_skill_level = "BEGINNER"
        self.activity.scheduled_at = NOW + timedelta(days=3)
        self.user.age = 30

        first = self.score({"Football"})
        second = self.score({"Football"})
        self.assertEqual(first, second)
        self.assertEqual(first, 30 + 20 + 25 + 10 + 15)


class GetRecommendationsTestCase(TestCase):
    def setUp(self):
        self.creator = User.objects.create_user(username="organiser", password="pass")
        self.user = User.objects.create_user(username="seeker", password="pass")

    def make(self, name, category, creator=None, **extra):
        return Activity.objects.create(
            creator=creator or self.creator,
            name=name,
            category=category,
            **extra,
        )

    def test_interest_ranks_matching_category_first(self):
        UserProfile.objects.create(user=self.user, interests="Playing Cricket")
        football = self.make("Kickabout", "Football")
        cricket = self.make("Nets", "Playing Cricket")

        self.assertEqual(preferred_categories(self.user), {"Playing Cricket"})

        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [cricket.id])
        self.assertNotIn(football.id, [a.id for a in results])

    def test_fallback_pool_ranks_by_score(self):
        football = self.make("Kickabout", "Football", location="Riverside")
        cricket = self.make("Nets", "Playing Cricket", location="Hilltop")
        UserProfile.objects.create(user=self.user, location="hilltop")

        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [cricket.id, football.id])

    def test_own_activities_are_never_recommended(self):
        UserProfile.objects.create(user=self.user, interests="Gym")
        self.make("My Gym Session", "Gym", creator=self.user)
        other = self.make("Leg Day", "Gym")

        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [other.id])

    def test_activities_with_any_request_are_excluded(self):
        pending = self.make("Pending One", "Tennis")
        rejected = self.make("Rejected One", "Tennis")
        fresh = self.make("Fresh One", "Tennis")
        Participant.objects.create(activity=pending, user=self.user)
        Participant.objects.create(
            activity=rejected, user=self.user, status=Participant.STATUS_REJECTED
        )

        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [fresh.id])

    def test_approved_history_feeds_preferences(self):
        past = self.make("Last Week", "Basketball")
        Participant.objects.create(
            activity=past, user=self.user, status=Participant.STATUS_APPROVED
        )
        upcoming = self.make("This Week", "Basketball")
        self.make("Movie Night", "Watching Movie")

        self.assertEqual(preferred_categories(self.user), {"Basketball"})
        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [upcoming.id])

    def test_only_open_live_activities(self):
        UserProfile.objects.create(user=self.user, interests="Hiking, Gym")
        self.make("Full Hike", "Hiking", status=Activity.STATUS_FULL, max_participants=2, current_participants=2)
        self.make("Gone Hike", "Hiking", deleted=True)
        self.make("Done Gym", "Gym", status=Activity.STATUS_COMPLETED)
        open_one = self.make("Open Hike", "Hiking")

        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [open_one.id])

    def test_fallback_pool_uses_most_recent_two_times_limit(self):
        oldest = self.make("Oldest", "Gym", scheduled_at=NOW + timedelta(days=1))
        self.make("Middle", "Gym")
        newest = self.make("Newest", "Gym")

        results = get_recommendations(self.user.id, limit=1, now=NOW)
        self.assertEqual(len(results), 1)
        # The urgent but oldest activity falls outside the pool of two
        self.assertNotEqual(results[0].id, oldest.id)
        self.assertEqual(results[0].id, newest.id)

    def test_ties_keep_newest_first(self):
        first = self.make("First", "Gym")
        second = self.make("Second", "Gym")

        results = get_recommendations(self.user.id, limit=10, now=NOW)
        self.assertEqual([a.id for a in results], [second.id, first.id])

    def test_limit_truncates(self):
        for i in range(5):
            self.make(f"Session {i}", "Gym")

        self.assertEqual(len(get_recommendations(self.user.id, limit=3, now=NOW)), 3)

    def test_empty_when_nothing_qualifies(self):
        self.assertEqual(get_recommendations(self.user.id, limit=10, now=NOW), [])

    def test_unknown_user_is_not_found(self):
        with self.assertRaises(NotFound):
            get_recommendations(987654, limit=10, now=NOW)

    def test_zero_limit_returns_nothing(self):
        self.make("Chess Club", "Board Games")

        self.assertEqual(get_recommendations(self.user.id, limit=0, now=NOW), [])
        self.assertEqual(get_recommendations(self.user.id, limit=-3, now=NOW), [])
        with self.assertRaises(NotFound):
            get_recommendations(987654, limit=0, now=NOW)

    @override_settings(RECOMMENDATION_DEFAULT_LIMIT=10, RECOMMENDATION_MAX_LIMIT=50)
    def test_clamp_limit(self):
        self.assertEqual(clamp_limit(0), 0)
        self.assertEqual(clamp_limit(-5), 0)
        self.assertEqual(clamp_limit(500), 50)
        self.assertEqual(clamp_limit("7"), 7)
        self.assertEqual(clamp_limit("abc"), 10)
