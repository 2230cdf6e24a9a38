import json
from unittest import TestCase

import boto3
from moto import mock_aws

from infradrift.aws.checkers.iam import IAMChecker, entity_name
from infradrift.resource.arn import parse_arn

ASSUME_ROLE_POLICY = json.dumps(
    {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": "lambda.amazonaws.com"},
                "Action": "sts:AssumeRole",
            }
        ],
    }
)


class TestIAMChecker(TestCase):
    def test_entity_name(self):
        self.assertEqual(entity_name("service-role/my-role"), "my-role")
        self.assertEqual(entity_name("my-role"), "my-role")

    @mock_aws
    def test_check(self):
        client = boto3.client("iam", region_name="us-east-1")
        role_arn = client.create_role(
            RoleName="deployer", Path="/service-role/", AssumeRolePolicyDocument=ASSUME_ROLE_POLICY
        )["Role"]["Arn"]
        user_arn = client.create_user(UserName="alice")["User"]["Arn"]
        policy_arn = client.create_policy(
            PolicyName="read-only",
            PolicyDocument=json.dumps(
                {
                    "Version": "2012-10-17",
                    "Statement": [{"Effect": "Allow", "Action": "s3:Get*", "Resource": "*"}],
                }
            ),
        )["Policy"]["Arn"]
        profile_arn = client.create_instance_profile(InstanceProfileName="web")[
            "InstanceProfile"
        ]["Arn"]
        checker = IAMChecker()

        for arn in (role_arn, user_arn, policy_arn, profile_arn):
            result = checker.check(parse_arn(arn))
            self.assertTrue(result.exists, arn)
            self.assertIsNone(result.error, arn)

        result = checker.check(parse_arn(role_arn))
        self.assertEqual((result.resource_type, result.resource_id), ("role", "deployer"))
        result = checker.check(parse_arn(policy_arn))
        self.assertEqual((result.resource_type, result.resource_id), ("policy", "read-only"))

        for arn in (
            "arn:aws:iam::123456789012:role/gone",
            "arn:aws:iam::123456789012:user/bob",
            "arn:aws:iam::123456789012:policy/gone",
            "arn:aws:iam::123456789012:instance-profile/gone",
        ):
            result = checker.check(parse_arn(arn))
            self.assertFalse(result.exists, arn)
            self.assertIsNone(result.error, arn)

    def test_unsupported_type(self):
        result = IAMChecker().check(parse_arn("arn:aws:iam::123456789012:group/admins"))
        self.assertFalse(result.exists)
        self.assertEqual(result.error, "Unsupported IAM resource type: ")

    def test_uses_global_region(self):
        checker = IAMChecker()
        client = checker.client(parse_arn("arn:aws:iam::123456789012:role/r"))
        self.assertEqual(client.meta.region_name, "us-east-1")
