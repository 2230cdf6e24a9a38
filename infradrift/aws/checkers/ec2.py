"""EC2 instance, security group and key pair checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn

TERMINATED_STATE = "terminated"


class EC2Checker(AWSResourceChecker):
    service_name = "ec2"
    display_name = "EC2"
    type_checkers = {
        "instance": "check_instance",
        "security-group": "check_security_group",
        "key-pair": "check_key_pair",
    }
    not_found_error_codes = frozenset(
        (
            "InvalidInstanceID.NotFound",
            "InvalidInstanceID.Malformed",
            "InvalidGroup.NotFound",
            "InvalidGroupId.Malformed",
            "InvalidKeyPair.NotFound",
        )
    )

    def check_instance(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_instances(InstanceIds=[parsed.resource_id])
        exists = any(
            instance.get("InstanceId") == parsed.resource_id
            and instance.get("State", {}).get("Name") != TERMINATED_STATE
            for reservation in resp.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        )
        return self.result(parsed, exists=exists)

    def check_security_group(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_security_groups(GroupIds=[parsed.resource_id])
        exists = any(
            group.get("GroupId") == parsed.resource_id for group in resp.get("SecurityGroups", [])
        )
        return self.result(parsed, exists=exists)

    def check_key_pair(self, parsed: ParsedArn) -> ResourceCheckResult:
        resp = self.client(parsed).describe_key_pairs(KeyNames=[parsed.resource_id])
        exists = any(
            key_pair.get("KeyName") == parsed.resource_id for key_pair in resp.get("KeyPairs", [])
        )
        return self.result(parsed, exists=exists)
