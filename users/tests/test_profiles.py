from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status

from core.exceptions import NotFound
from users.models import User, UserProfile
from users.services import ProfileService


class ProfileServiceTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="dana", password="pass")

    def test_interest_tokens_are_trimmed(self):
        profile = UserProfile(user=self.user, interests=" Gym, ,Hiking ,Gym,")
        self.assertEqual(profile.interest_tokens(), {"Gym", "Hiking"})
        self.assertEqual(UserProfile(user=self.user).interest_tokens(), set())

    def test_rating_defaults_to_zero_without_profile(self):
        self.assertIsNone(ProfileService.get_profile(self.user))
        self.assertEqual(ProfileService.get_rating(self.user), 0.0)

    def test_increment_activity_count(self):
        UserProfile.objects.create(user=self.user, total_activities=4)

        self.assertTrue(ProfileService.increment_activity_count(self.user.id))
        profile = UserProfile.objects.get(user=self.user)
        self.assertEqual(profile.total_activities, 5)
        self.assertEqual(profile.experience_tag, "Experienced")

    def test_increment_without_profile_is_skipped(self):
        self.assertFalse(ProfileService.increment_activity_count(self.user.id))

    def test_increment_unknown_user_is_not_found(self):
        with self.assertRaises(NotFound):
            ProfileService.increment_activity_count(123456)

    def test_create_or_update_profile(self):
        profile = ProfileService.create_or_update_profile(self.user, location="Leeds")
        self.assertEqual(profile.location, "Leeds")

        profile = ProfileService.create_or_update_profile(self.user, bio="Hi", location=None)
        self.assertEqual(profile.location, "Leeds")
        self.assertEqual(profile.bio, "Hi")
        self.assertEqual(UserProfile.objects.filter(user=self.user).count(), 1)


class ProfileApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="erin", password="pass", full_name="Erin E")
        self.other = User.objects.create_user(username="finn", password="pass")

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def test_me(self):
        self.auth(self.user)
        resp = self.client.get("/api/users/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["username"], "erin")

    def test_profile_defaults_before_first_edit(self):
        self.auth(self.user)
        resp = self.client.get("/api/users/profile/me/")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["average_rating"], 0.0)
        self.assertEqual(data["experience_tag"], "Newbie")
        self.assertEqual(data["full_name"], "Erin E")

    def test_patch_profile_updates_user_and_profile(self):
        self.auth(self.user)
        resp = self.client.patch(
            "/api/users/profile/me/",
            {"interests": " Gym , Hiking,", "skill_level": "BEGINNER", "age": 27},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["interests"], "Gym,Hiking")
        self.assertEqual(resp.json()["age"], 27)

        self.user.refresh_from_db()
        self.assertEqual(self.user.age, 27)

    def test_system_fields_are_not_editable(self):
        self.auth(self.user)
        self.client.patch(
            "/api/users/profile/me/",
            {"average_rating": 5.0, "total_activities": 99},
            format="json",
        )
        profile = UserProfile.objects.get(user=self.user)
        self.assertEqual(profile.average_rating, 0.0)
        self.assertEqual(profile.total_activities, 0)

    def test_other_users_profile(self):
        self.auth(self.user)
        resp = self.client.get(f"/api/users/profile/{self.other.id}/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user_id"], self.other.id)

        resp = self.client.get("/api/users/profile/999999/")
        self.assertEqual(resp.status_code, 404)
