from unittest import TestCase

import boto3
from botocore.stub import Stubber
from moto import mock_aws

from infradrift.aws.checkers.dynamodb import DynamoDBChecker
from infradrift.resource.arn import parse_arn

TABLE_ARN = "arn:aws:dynamodb:us-east-1:123456789012:table/users"


class TestDynamoDBChecker(TestCase):
    @mock_aws
    def test_table_and_index(self):
        boto3.client("dynamodb", region_name="us-east-1").create_table(
            TableName="users",
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[
                {"AttributeName": "id", "AttributeType": "S"},
                {"AttributeName": "email", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": "by-email",
                    "KeySchema": [{"AttributeName": "email", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        checker = DynamoDBChecker()

        self.assertTrue(checker.check(parse_arn(TABLE_ARN)).exists)
        self.assertTrue(checker.check(parse_arn(f"{TABLE_ARN}/index/by-email")).exists)

        result = checker.check(parse_arn(f"{TABLE_ARN}/index/by-name"))
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

        result = checker.check(parse_arn("arn:aws:dynamodb:us-east-1:123456789012:table/orders"))
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)

    def test_deleting_table_is_missing(self):
        checker = DynamoDBChecker()
        client = boto3.client("dynamodb", region_name="us-east-1")
        checker.client_cache.put("us-east-1", client)
        with Stubber(client) as stubber:
            stubber.add_response(
                "describe_table", {"Table": {"TableName": "users", "TableStatus": "DELETING"}}
            )
            result = checker.check(parse_arn(TABLE_ARN))
        self.assertFalse(result.exists)
        self.assertIsNone(result.error)
