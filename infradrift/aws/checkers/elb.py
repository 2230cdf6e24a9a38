"""Elastic Load Balancing v2 load balancer, target group and listener checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn

UNAVAILABLE_LOAD_BALANCER_STATES = frozenset(("failed", "active_impaired"))


class ELBChecker(AWSResourceChecker):
    service_name = "elasticloadbalancing"
    client_name = "elbv2"
    display_name = "ELB"
    type_checkers = {
        "loadbalancer": "check_load_balancer",
        "targetgroup": "check_target_group",
        "listener": "check_listener",
    }
    not_found_error_codes = frozenset(
        (
            "LoadBalancerNotFound",
            "LoadBalancerNotFoundException",
            "TargetGroupNotFound",
            "TargetGroupNotFoundException",
            "ListenerNotFound",
            "ListenerNotFoundException",
        )
    )

    def check_load_balancer(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_load_balancers(LoadBalancerArns=[parsed.raw])
        exists = any(
            load_balancer.get("State", {}).get("Code") not in UNAVAILABLE_LOAD_BALANCER_STATES
            for load_balancer in resp.get("LoadBalancers", [])
            if load_balancer.get("LoadBalancerArn") == parsed.raw
        )
        return self.result(parsed, exists=exists)

    def check_target_group(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_target_groups(TargetGroupArns=[parsed.raw])
        exists = any(
            target_group.get("TargetGroupArn") == parsed.raw
            for target_group in resp.get("TargetGroups", [])
        )
        return self.result(parsed, exists=exists)

    def check_listener(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_listeners(ListenerArns=[parsed.raw])
        exists = any(
            listener.get("ListenerArn") == parsed.raw for listener in resp.get("Listeners", [])
        )
        return self.result(parsed, exists=exists)
