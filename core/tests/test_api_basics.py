from django.test import TestCase
from rest_framework.test import APIClient

from core.exceptions import NotFound, custom_exception_handler


class HealthCheckTestCase(TestCase):
    def test_health_is_public(self):
        resp = APIClient().get("/api/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertTrue(resp.json()["db"])


class ExceptionHandlerTestCase(TestCase):
    def test_domain_errors_are_wrapped(self):
        resp = custom_exception_handler(NotFound.for_resource("Activity", "id", 7), {})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(
            resp.data,
            {
                "success": False,
                "status_code": 404,
                "errors": {"detail": "Activity not found with id: '7'"},
            },
        )

    def test_unhandled_errors_become_500(self):
        with self.assertLogs("huddle.core", level="ERROR"):
            resp = custom_exception_handler(RuntimeError("boom"), {})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data["errors"], {"detail": "Internal server error."})
