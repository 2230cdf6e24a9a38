"""IAM role, user, policy and instance profile checker. IAM is a global service, all
calls go to us-east-1."""
from typing import Tuple

from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


def entity_name(resource_id: str) -> str:
    """The name of an IAM entity from its (possibly path qualified) id,
    e.g. 'service-role/my-role' -> 'my-role'"""
    return resource_id.rsplit("/", 1)[-1]


class IAMChecker(AWSResourceChecker):
    service_name = "iam"
    display_name = "IAM"
    global_service = True
    type_checkers = {
        "role": "check_role",
        "user": "check_user",
        "policy": "check_policy",
        "instance-profile": "check_instance_profile",
    }
    not_found_error_codes = frozenset(("NoSuchEntity", "NoSuchEntityException"))

    def result_key(self, parsed: ParsedArn) -> Tuple[str, str]:  # type: ignore[override]
        return parsed.resource_type, entity_name(parsed.resource_id)

    def check_role(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).get_role(RoleName=entity_name(parsed.resource_id))
        return self.result(parsed, exists=True)

    def check_user(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).get_user(UserName=entity_name(parsed.resource_id))
        return self.result(parsed, exists=True)

    def check_policy(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).get_policy(PolicyArn=parsed.raw)
        return self.result(parsed, exists=True)

    def check_instance_profile(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).get_instance_profile(
            InstanceProfileName=entity_name(parsed.resource_id)
        )
        return self.result(parsed, exists=True)
