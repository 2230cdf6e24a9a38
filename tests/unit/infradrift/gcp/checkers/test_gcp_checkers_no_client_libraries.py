import sys
from unittest import TestCase
from unittest.mock import patch

from infradrift.aws.checkers import clear_checker_cache
from infradrift.gcp.checkers import clear_gcp_checker_cache
from infradrift.gcp.checkers.secretmanager import SecretManagerChecker
from infradrift.manifest import LegacyManifest
from infradrift.resource.gcp import parse_gcp_resource
from infradrift.scan.scanner import InfraScanner

SECRET_PATH = "projects/my-proj/secrets/api-key"
KINESIS_ARN = "arn:aws:kinesis:us-east-1:123456789012:stream/events"

# None entries in sys.modules make the corresponding imports raise ModuleNotFoundError
NO_GOOGLE_MODULES = {
    "google": None,
    "google.api_core": None,
    "google.api_core.exceptions": None,
    "google.cloud": None,
    "google.cloud.secretmanager": None,
}


class TestGCPCheckersWithoutClientLibraries(TestCase):
    def setUp(self):
        clear_gcp_checker_cache()
        clear_checker_cache()

    def tearDown(self):
        clear_gcp_checker_cache()
        clear_checker_cache()

    def test_check_reports_error(self):
        with patch.dict(sys.modules, NO_GOOGLE_MODULES):
            result = SecretManagerChecker().check(parse_gcp_resource(SECRET_PATH))
        self.assertFalse(result.exists)
        self.assertIn("google", result.error)
        self.assertEqual(result.service, "secretmanager")

    def test_is_not_found_false(self):
        with patch.dict(sys.modules, NO_GOOGLE_MODULES):
            self.assertFalse(SecretManagerChecker().is_not_found(ValueError("boom")))

    def test_scan_continues(self):
        manifest = LegacyManifest(resources=[SECRET_PATH, KINESIS_ARN])
        with patch.dict(sys.modules, NO_GOOGLE_MODULES):
            result = InfraScanner().scan_manifest(manifest, "m.json")
        self.assertEqual(len(result.results), 2)
        self.assertEqual(result.summary.errors, 2)
        secret_result = result.account_results["gcp:my-proj"].results[0]
        self.assertIn("google", secret_result.error)
        kinesis_result = result.account_results["aws:123456789012"].results[0]
        self.assertTrue(kinesis_result.error.startswith("Unsupported AWS service: kinesis"))
