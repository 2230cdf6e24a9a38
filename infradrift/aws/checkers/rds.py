"""RDS instance, cluster and subnet group checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn

DELETING_STATUS = "deleting"


class RDSChecker(AWSResourceChecker):
    """Instances and clusters being deleted are still described by RDS, they are
    reported as missing."""

    service_name = "rds"
    display_name = "RDS"
    type_checkers = {
        "db": "check_db_instance",
        "cluster": "check_db_cluster",
        "subgrp": "check_db_subnet_group",
    }
    not_found_error_codes = frozenset(
        (
            "DBInstanceNotFound",
            "DBInstanceNotFoundFault",
            "DBClusterNotFoundFault",
            "DBSubnetGroupNotFoundFault",
        )
    )

    def check_db_instance(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_db_instances(DBInstanceIdentifier=parsed.resource_id)
        exists = any(
            instance.get("DBInstanceIdentifier") == parsed.resource_id
            and instance.get("DBInstanceStatus") != DELETING_STATUS
            for instance in resp.get("DBInstances", [])
        )
        return self.result(parsed, exists=exists)

    def check_db_cluster(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_db_clusters(DBClusterIdentifier=parsed.resource_id)
        exists = any(
            cluster.get("DBClusterIdentifier") == parsed.resource_id
            and cluster.get("Status") != DELETING_STATUS
            for cluster in resp.get("DBClusters", [])
        )
        return self.result(parsed, exists=exists)

    def check_db_subnet_group(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_db_subnet_groups(DBSubnetGroupName=parsed.resource_id)
        return self.result(parsed, exists=bool(resp.get("DBSubnetGroups")))
