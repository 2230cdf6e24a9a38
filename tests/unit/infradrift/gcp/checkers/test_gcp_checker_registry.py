from unittest import TestCase

from infradrift.gcp.checkers import (
    SUPPORTED_GCP_SERVICES,
    clear_gcp_checker_cache,
    get_gcp_checker,
    is_supported_gcp_service,
)
from infradrift.gcp.checkers.base import GCPResourceChecker


class TestGCPCheckerRegistry(TestCase):
    def setUp(self):
        clear_gcp_checker_cache()

    def tearDown(self):
        clear_gcp_checker_cache()

    def test_supported_services(self):
        self.assertEqual(
            set(SUPPORTED_GCP_SERVICES), {"run", "secretmanager", "artifactregistry", "iam"}
        )

    def test_get(self):
        for service in SUPPORTED_GCP_SERVICES:
            checker = get_gcp_checker(service)
            self.assertIsInstance(checker, GCPResourceChecker)
            self.assertEqual(checker.service_name, service)
            self.assertIs(get_gcp_checker(service), checker)

    def test_unsupported(self):
        self.assertFalse(is_supported_gcp_service("storage"))
        self.assertIsNone(get_gcp_checker("storage"))
