from unittest import TestCase

import boto3
from botocore.stub import Stubber

from infradrift.aws.checkers.rds import RDSChecker
from infradrift.resource.arn import parse_arn

DB_ARN = "arn:aws:rds:us-east-1:123456789012:db:orders"
CLUSTER_ARN = "arn:aws:rds:us-east-1:123456789012:cluster:orders-cluster"
SUBNET_GROUP_ARN = "arn:aws:rds:us-east-1:123456789012:subgrp:orders-subnets"


class TestRDSChecker(TestCase):
    def setUp(self):
        self.checker = RDSChecker()
        self.client = boto3.client("rds", region_name="us-east-1")
        self.checker.client_cache.put("us-east-1", self.client)

    def test_db_instance(self):
        with Stubber(self.client) as stubber:
            for status in ("available", "deleting"):
                stubber.add_response(
                    "describe_db_instances",
                    {"DBInstances": [{"DBInstanceIdentifier": "orders", "DBInstanceStatus": status}]},
                    expected_params={"DBInstanceIdentifier": "orders"},
                )
            stubber.add_client_error(
                "describe_db_instances", service_error_code="DBInstanceNotFound", http_status_code=404
            )
            available, deleting, missing = [
                self.checker.check(parse_arn(DB_ARN)) for _ in range(3)
            ]
        self.assertTrue(available.exists)
        self.assertFalse(deleting.exists)
        self.assertIsNone(deleting.error)
        self.assertFalse(missing.exists)
        self.assertIsNone(missing.error)

    def test_db_cluster(self):
        with Stubber(self.client) as stubber:
            stubber.add_response(
                "describe_db_clusters",
                {"DBClusters": [{"DBClusterIdentifier": "orders-cluster", "Status": "deleting"}]},
                expected_params={"DBClusterIdentifier": "orders-cluster"},
            )
            stubber.add_client_error(
                "describe_db_clusters", service_error_code="DBClusterNotFoundFault"
            )
            deleting = self.checker.check(parse_arn(CLUSTER_ARN))
            missing = self.checker.check(parse_arn(CLUSTER_ARN))
        self.assertFalse(deleting.exists)
        self.assertIsNone(deleting.error)
        self.assertFalse(missing.exists)
        self.assertIsNone(missing.error)

    def test_db_subnet_group(self):
        with Stubber(self.client) as stubber:
            stubber.add_response(
                "describe_db_subnet_groups",
                {"DBSubnetGroups": [{"DBSubnetGroupName": "orders-subnets"}]},
                expected_params={"DBSubnetGroupName": "orders-subnets"},
            )
            result = self.checker.check(parse_arn(SUBNET_GROUP_ARN))
        self.assertTrue(result.exists)

    def test_throttled_is_indeterminate(self):
        with Stubber(self.client) as stubber:
            stubber.add_client_error(
                "describe_db_instances",
                service_error_code="Throttling",
                service_message="Rate exceeded",
                http_status_code=400,
            )
            result = self.checker.check(parse_arn(DB_ARN))
        self.assertFalse(result.exists)
        self.assertIn("Rate exceeded", result.error)
