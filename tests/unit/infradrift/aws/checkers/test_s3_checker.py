from unittest import TestCase

import boto3
from botocore.stub import Stubber
from moto import mock_aws

from infradrift.aws.checkers.s3 import S3Checker
from infradrift.resource.arn import parse_arn


class TestS3Checker(TestCase):
    @mock_aws
    def test_bucket(self):
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket="present-bucket")
        checker = S3Checker()

        result = checker.check(parse_arn("arn:aws:s3:::present-bucket"))
        self.assertTrue(result.exists)
        self.assertIsNone(result.error)
        self.assertEqual((result.resource_type, result.resource_id), ("bucket", "present-bucket"))

        result = checker.check(parse_arn("arn:aws:s3:::absent-bucket"))
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

    @mock_aws
    def test_object_checks_bucket(self):
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket="present-bucket")
        result = S3Checker().check(parse_arn("arn:aws:s3:::present-bucket/some/key.json"))
        self.assertTrue(result.exists)
        self.assertEqual((result.resource_type, result.resource_id), ("bucket", "present-bucket"))

    def test_forbidden_is_not_found(self):
        checker = S3Checker()
        client = boto3.client("s3", region_name="us-east-1")
        checker.client_cache.put("", client)
        with Stubber(client) as stubber:
            stubber.add_client_error(
                "head_bucket",
                service_error_code="403",
                service_message="Forbidden",
                http_status_code=403,
                expected_params={"Bucket": "someone-elses-bucket"},
            )
            result = checker.check(parse_arn("arn:aws:s3:::someone-elses-bucket"))
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

    def test_other_error_is_indeterminate(self):
        checker = S3Checker()
        client = boto3.client("s3", region_name="us-east-1")
        checker.client_cache.put("", client)
        with Stubber(client) as stubber:
            stubber.add_client_error(
                "head_bucket",
                service_error_code="SlowDown",
                service_message="Please reduce your request rate.",
                http_status_code=503,
            )
            result = checker.check(parse_arn("arn:aws:s3:::busy-bucket"))
        self.assertFalse(result.exists)
        self.assertIn("SlowDown", result.error)
