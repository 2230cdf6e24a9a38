from unittest import TestCase

from infradrift.resource import is_valid_resource, parse_resource_identifier
from infradrift.resource.arn import ParsedArn
from infradrift.resource.gcp import ParsedGcpResource, is_valid_gcp_resource, parse_gcp_resource


class TestParseGcpResource(TestCase):
    def test_cloud_run_service(self):
        path = "projects/my-proj/locations/us-central1/services/api"
        self.assertEqual(
            parse_gcp_resource(path),
            ParsedGcpResource(
                project="my-proj",
                service="run",
                location="us-central1",
                resource_type="services",
                resource_id="api",
                raw=path,
            ),
        )

    def test_secret(self):
        parsed = parse_gcp_resource("projects/my-proj/secrets/db-password")
        self.assertEqual(parsed.service, "secretmanager")
        self.assertEqual(parsed.location, "global")
        self.assertEqual(parsed.resource_id, "db-password")

    def test_service_account(self):
        parsed = parse_gcp_resource(
            "projects/my-proj/serviceAccounts/deployer@my-proj.iam.gserviceaccount.com"
        )
        self.assertEqual(parsed.service, "iam")
        self.assertEqual(parsed.resource_type, "serviceAccounts")
        self.assertEqual(parsed.resource_id, "deployer@my-proj.iam.gserviceaccount.com")

    def test_artifact_registry_repository(self):
        parsed = parse_gcp_resource("projects/my-proj/locations/europe-west1/repositories/images")
        self.assertEqual(parsed.service, "artifactregistry")
        self.assertEqual(parsed.location, "europe-west1")

    def test_unrecognized_shape(self):
        self.assertTrue(is_valid_gcp_resource("projects/my-proj/topics/t"))
        self.assertIsNone(parse_gcp_resource("projects/my-proj/topics/t"))

    def test_invalid(self):
        self.assertFalse(is_valid_gcp_resource("projects/my-proj"))
        self.assertFalse(is_valid_gcp_resource("organizations/1/secrets/s"))
        self.assertIsNone(parse_gcp_resource(None))


class TestParseResourceIdentifier(TestCase):
    def test_dispatch(self):
        self.assertIsInstance(parse_resource_identifier("arn:aws:s3:::b"), ParsedArn)
        self.assertIsInstance(
            parse_resource_identifier("projects/p/secrets/s"), ParsedGcpResource
        )
        self.assertIsNone(parse_resource_identifier("not-a-resource"))

    def test_is_valid_resource(self):
        self.assertTrue(is_valid_resource("arn:aws:s3:::b"))
        self.assertTrue(is_valid_resource("projects/p/secrets/s"))
        self.assertFalse(is_valid_resource("b"))
