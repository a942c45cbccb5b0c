from django.test import TestCase
from rest_framework.test import APIClient

from users.models import User


class SignupTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_signup_then_login(self):
        resp = self.client.post(
            "/api/auth/signup/",
            {
                "username": "gwen",
                "email": "gwen@example.com",
                "password": "secret-pass",
                "full_name": "Gwen G",
                "age": 24,
            },
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        user = User.objects.get(username="gwen")
        self.assertEqual(user.age, 24)

        resp = self.client.post(
            "/api/auth/jwt/login/",
            {"username": "gwen", "password": "secret-pass"},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertIn("access", resp.json())

        token = resp.json()["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        resp = self.client.get("/api/users/me/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["full_name"], "Gwen G")

    def test_short_password_is_rejected(self):
        resp = self.client.post(
            "/api/auth/signup/",
            {"username": "hal", "password": "short"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("password", resp.json()["errors"])
