"""ECS cluster, service and task definition checker.

The ECS describe APIs do not raise for unknown resources, they are reported in the
response's `failures` instead. A resource exists only while its status is ACTIVE."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn

ACTIVE_STATUS = "ACTIVE"


class ECSChecker(AWSResourceChecker):
    service_name = "ecs"
    display_name = "ECS"
    type_checkers = {
        "cluster": "check_cluster",
        "service": "check_service",
        "task-definition": "check_task_definition",
    }

    def check_cluster(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_clusters(clusters=[parsed.raw])
        exists = any(
            cluster.get("clusterArn") == parsed.raw and cluster.get("status") == ACTIVE_STATUS
            for cluster in resp.get("clusters", [])
        )
        return self.result(parsed, exists=exists)

    def check_service(self, parsed: ParsedArn) -> ResourceCheckResult:
        parts = parsed.resource_id.split("/")
        if len(parts) < 2:
            return self.result(parsed, exists=False, error="Invalid service ARN format")
        cluster_name, service_name = parts[0], parts[1]
        cluster_arn = (
            f"arn:{parsed.partition}:ecs:{parsed.region}:{parsed.account_id}:"
            f"cluster/{cluster_name}"
        )
        resp = self.client(parsed).describe_services(cluster=cluster_arn, services=[service_name])
        exists = any(
            service.get("serviceName") == service_name
            and service.get("status") == ACTIVE_STATUS
            for service in resp.get("services", [])
        )
        return self.result(parsed, exists=exists)

    def check_task_definition(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_task_definition(taskDefinition=parsed.raw)
        task_definition = resp.get("taskDefinition", {})
        return self.result(parsed, exists=task_definition.get("status") == ACTIVE_STATUS)
