"""CloudWatch Logs log group checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


class LogsChecker(AWSResourceChecker):
    """DescribeLogGroups filters by name prefix, so the returned groups are matched on
    the exact log group name."""

    service_name = "logs"
    display_name = "CloudWatch Logs"
    type_checkers = {"log-group": "check_log_group"}
    not_found_error_codes = frozenset(("ResourceNotFoundException",))

    def check_log_group(self, parsed: ParsedArn) -> ResourceCheckResult:
        paginator = self.client(parsed).get_paginator("describe_log_groups")
        for resp in paginator.paginate(logGroupNamePrefix=parsed.resource_id):
            for log_group in resp.get("logGroups", []):
                if log_group.get("logGroupName") == parsed.resource_id:
                    return self.result(parsed, exists=True)
        return self.result(parsed, exists=False)
