"""ElastiCache cluster, subnet group and replication group checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn

DELETING_STATUS = "deleting"


class ElastiCacheChecker(AWSResourceChecker):
    service_name = "elasticache"
    display_name = "ElastiCache"
    type_checkers = {
        "cluster": "check_cache_cluster",
        "subnetgroup": "check_cache_subnet_group",
        "replicationgroup": "check_replication_group",
    }
    not_found_error_codes = frozenset(
        (
            "CacheClusterNotFound",
            "CacheClusterNotFoundFault",
            "CacheSubnetGroupNotFoundFault",
            "ReplicationGroupNotFoundFault",
        )
    )

    def check_cache_cluster(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_cache_clusters(CacheClusterId=parsed.resource_id)
        exists = any(
            cluster.get("CacheClusterId") == parsed.resource_id
            and cluster.get("CacheClusterStatus") != DELETING_STATUS
            for cluster in resp.get("CacheClusters", [])
        )
        return self.result(parsed, exists=exists)

    def check_cache_subnet_group(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_cache_subnet_groups(
            CacheSubnetGroupName=parsed.resource_id
        )
        return self.result(parsed, exists=bool(resp.get("CacheSubnetGroups")))

    def check_replication_group(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_replication_groups(
            ReplicationGroupId=parsed.resource_id
        )
        exists = any(
            group.get("ReplicationGroupId") == parsed.resource_id
            and group.get("Status") != DELETING_STATUS
            for group in resp.get("ReplicationGroups", [])
        )
        return self.result(parsed, exists=exists)
