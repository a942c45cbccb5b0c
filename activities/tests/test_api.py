from datetime import timedelta

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework import status

from users.models import User, UserProfile
from activities.models import Activity, Participant


class ActivityApiTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.creator = User.objects.create_user(
            username="creator", password="pass", full_name="Casey Creator"
        )
        self.joiner = User.objects.create_user(username="joiner", password="pass", age=22)
        UserProfile.objects.create(user=self.creator, average_rating=4.0)

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def create_activity(self, **overrides):
        payload = {
            "name": "Saturday Football",
            "category": "Football",
            "location": "City Park",
            "max_participants": 2,
            "scheduled_at": (timezone.now() + timedelta(days=3)).isoformat(),
        }
        payload.update(overrides)
        return self.client.post("/api/activities/", payload, format="json")

    def test_requires_authentication(self):
        resp = self.client.get("/api/activities/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(resp.json()["success"])

    def test_categories_are_public(self):
        resp = self.client.get("/api/activities/categories/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Playing Cricket", resp.json())

    def test_create_and_read_activity(self):
        self.auth(self.creator)
        resp = self.create_activity(description="<script>x</script><b>Bring</b> boots")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        data = resp.json()
        self.assertEqual(data["status"], Activity.STATUS_OPEN)
        self.assertEqual(data["current_participants"], 1)
        self.assertEqual(data["creator_id"], self.creator.id)
        self.assertEqual(data["creator_name"], "Casey Creator")
        self.assertEqual(data["creator_rating"], 4.0)
        self.assertNotIn("<script>", data["description"])

        resp = self.client.get(f"/api/activities/{data['id']}/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Saturday Football")

    def test_create_validates_input(self):
        self.auth(self.creator)

        resp = self.create_activity(max_participants=1)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("max_participants", resp.json()["errors"])

        resp = self.create_activity(min_age=30, max_age=20)
        self.assertEqual(resp.status_code, 400)

        resp = self.create_activity(name="   ")
        self.assertEqual(resp.status_code, 400)

        resp = self.create_activity(scheduled_at=(timezone.now() - timedelta(days=1)).isoformat())
        self.assertEqual(resp.status_code, 400)

    def test_full_join_and_approval_flow(self):
        self.auth(self.creator)
        activity_id = self.create_activity().json()["id"]

        self.auth(self.joiner)
        resp = self.client.get(f"/api/activities/{activity_id}/participants/my-status/")
        self.assertEqual(resp.json(), {"status": "NOT_JOINED"})

        resp = self.client.post(f"/api/activities/{activity_id}/participants/join/")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        participant = resp.json()
        self.assertEqual(participant["status"], Participant.STATUS_PENDING)
        self.assertEqual(participant["activity_id"], activity_id)
        self.assertEqual(participant["user_id"], self.joiner.id)
        self.assertEqual(participant["user_rating"], 0.0)

        resp = self.client.post(f"/api/activities/{activity_id}/participants/join/")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["errors"]["detail"],
            "You have already requested to join this activity",
        )

        # Only the creator sees pending requests
        resp = self.client.get(f"/api/activities/{activity_id}/participants/pending/")
        self.assertEqual(resp.status_code, 400)

        self.auth(self.creator)
        resp = self.client.get(f"/api/activities/{activity_id}/participants/pending/")
        self.assertEqual([p["id"] for p in resp.json()], [participant["id"]])

        resp = self.client.post(
            f"/api/activities/{activity_id}/participants/{participant['id']}/approve/"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], Participant.STATUS_APPROVED)

        resp = self.client.post(
            f"/api/activities/{activity_id}/participants/{participant['id']}/reject/"
        )
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.json()["errors"]["detail"], "This request has already been processed")

        resp = self.client.get(f"/api/activities/{activity_id}/")
        self.assertEqual(resp.json()["status"], Activity.STATUS_FULL)
        self.assertEqual(resp.json()["current_participants"], 2)

        resp = self.client.get(f"/api/activities/{activity_id}/participants/")
        self.assertEqual([p["user_id"] for p in resp.json()], [self.joiner.id])

        self.auth(self.joiner)
        resp = self.client.get("/api/activities/me/joined/")
        self.assertEqual([a["id"] for a in resp.json()], [activity_id])

    def test_join_unknown_activity_is_404(self):
        self.auth(self.joiner)
        resp = self.client.post("/api/activities/9999/participants/join/")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["errors"]["detail"], "Activity not found with id: '9999'")

    def test_list_filters_and_pagination(self):
        Activity.objects.create(creator=self.creator, name="A", category="Gym", location="North Side")
        Activity.objects.create(creator=self.creator, name="B", category="Tennis", location="South Side")
        Activity.objects.create(creator=self.creator, name="C", category="Gym", deleted=True)

        self.auth(self.joiner)
        resp = self.client.get("/api/activities/?category=Gym")
        self.assertEqual(resp.json()["count"], 1)
        self.assertEqual(resp.json()["results"][0]["name"], "A")

        resp = self.client.get("/api/activities/?location=south")
        self.assertEqual([a["name"] for a in resp.json()["results"]], ["B"])

        resp = self.client.get("/api/activities/?limit=1&offset=1&ordering=name")
        self.assertEqual(resp.json()["count"], 2)
        self.assertEqual([a["name"] for a in resp.json()["results"]], ["B"])

        resp = self.client.get("/api/activities/?status=BOGUS")
        self.assertEqual(resp.status_code, 400)

        resp = self.client.get("/api/activities/?limit=abc")
        self.assertEqual(resp.status_code, 400)

    def test_update_is_creator_only_and_respects_capacity(self):
        activity = Activity.objects.create(
            creator=self.creator, name="Gym", category="Gym", max_participants=4, current_participants=3
        )

        self.auth(self.joiner)
        resp = self.client.patch(f"/api/activities/{activity.id}/", {"name": "Hijack"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"]["detail"], "Only the creator can update this activity")

        self.auth(self.creator)
        resp = self.client.patch(f"/api/activities/{activity.id}/", {"max_participants": 2}, format="json")
        self.assertEqual(resp.status_code, 400)

        resp = self.client.patch(f"/api/activities/{activity.id}/", {"max_participants": 3}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], Activity.STATUS_FULL)

        resp = self.client.put(f"/api/activities/{activity.id}/", {"max_participants": 6}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], Activity.STATUS_OPEN)

    def test_complete_and_delete(self):
        activity = Activity.objects.create(creator=self.creator, name="Run", category="Hiking")

        self.auth(self.joiner)
        resp = self.client.post(f"/api/activities/{activity.id}/complete/")
        self.assertEqual(resp.status_code, 400)

        self.auth(self.creator)
        resp = self.client.post(f"/api/activities/{activity.id}/complete/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], Activity.STATUS_COMPLETED)

        resp = self.client.delete(f"/api/activities/{activity.id}/")
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)

        resp = self.client.get(f"/api/activities/{activity.id}/")
        self.assertEqual(resp.status_code, 404)

        resp = self.client.get("/api/activities/me/created/")
        self.assertEqual(resp.json(), [])

    def test_recommendations_endpoint(self):
        UserProfile.objects.create(user=self.joiner, interests="Football")
        Activity.objects.create(creator=self.creator, name="Five-a-side", category="Football")
        Activity.objects.create(creator=self.joiner, name="My own", category="Football")

        self.auth(self.joiner)
        resp = self.client.get("/api/activities/recommendations/?limit=5")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([a["name"] for a in resp.json()], ["Five-a-side"])

    def test_image_urls_set_on_create_and_replaced_on_update(self):
        self.auth(self.creator)
        resp = self.create_activity(
            image_urls=["https://img.example.com/pitch.jpg", "https://img.example.com/pitch.jpg"]
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        activity_id = resp.json()["id"]
        self.assertEqual(resp.json()["image_urls"], ["https://img.example.com/pitch.jpg"])

        # Edits without images leave them alone
        resp = self.client.patch(f"/api/activities/{activity_id}/", {"name": "Renamed"}, format="json")
        self.assertEqual(resp.json()["image_urls"], ["https://img.example.com/pitch.jpg"])

        resp = self.client.patch(
            f"/api/activities/{activity_id}/",
            {"image_urls": ["https://img.example.com/a.png", "https://img.example.com/b.png"]},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json()["image_urls"],
            ["https://img.example.com/a.png", "https://img.example.com/b.png"],
        )
        self.assertEqual(
            Activity.objects.get(pk=activity_id).image_urls,
            ["https://img.example.com/a.png", "https://img.example.com/b.png"],
        )

        resp = self.client.patch(
            f"/api/activities/{activity_id}/", {"image_urls": ["javascript:alert(1)"]}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("image_urls", resp.json()["errors"])

    def test_activity_without_images_reads_empty_list(self):
        activity = Activity.objects.create(creator=self.creator, name="Plain", category="Gym")

        self.auth(self.joiner)
        resp = self.client.get(f"/api/activities/{activity.id}/")
        self.assertEqual(resp.json()["image_urls"], [])
