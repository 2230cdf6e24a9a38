"""ARN parsing.

ARNs have the general form

    arn:partition:service:region:account-id:resource

where the resource portion is service specific and may itself contain colons and
slashes, e.g. resource-type/resource-id or resource-type:resource-id. Region and
account-id may be empty (S3, IAM)."""
from typing import Callable, Dict, Literal, Optional, Tuple

from infradrift.core.base_model import BaseImmutableModel

ARN_PREFIX = "arn:"
MIN_ARN_SEGMENTS = 6

ResourceParts = Tuple[str, str]


class ParsedArn(BaseImmutableModel):
    """Components of an AWS ARN.

    Args:
        cloud: always "aws"
        partition: aws, aws-cn, aws-us-gov
        service: AWS service name as it appears in the ARN (s3, lambda, ...)
        region: region, empty for global services
        account_id: account id, empty for e.g. S3 buckets
        resource_type: service specific resource type (function, table, bucket, ...)
        resource_id: resource name/identifier with any version qualifiers removed
        raw: the original ARN string
    """

    cloud: Literal["aws"] = "aws"
    partition: str
    service: str
    region: str
    account_id: str
    resource_type: str
    resource_id: str
    raw: str


def is_valid_arn(arn: object) -> bool:
    """Determine if a value looks like an ARN: an 'arn:' prefix and at least six
    colon separated segments."""
    if not isinstance(arn, str) or not arn.startswith(ARN_PREFIX):
        return False
    return len(arn.split(":")) >= MIN_ARN_SEGMENTS


def parse_arn(arn: object) -> Optional[ParsedArn]:
    """Parse an ARN string into its components.

    Args:
        arn: candidate ARN

    Returns:
        ParsedArn, or None if arn is not a valid ARN. Never raises.
    """
    if not isinstance(arn, str) or not is_valid_arn(arn):
        return None
    _, partition, service, region, account_id, *resource_parts = arn.split(":")
    resource = ":".join(resource_parts)
    resource_type, resource_id = parse_resource(service, resource)
    return ParsedArn(
        partition=partition,
        service=service,
        region=region,
        account_id=account_id,
        resource_type=resource_type,
        resource_id=resource_id,
        raw=arn,
    )


def _strip_prefix(value: str, prefix: str) -> str:
    if value.startswith(prefix):
        return value[len(prefix) :]
    return value


def _parse_s3_resource(resource: str) -> ResourceParts:
    # objects keep the full bucket/key path as their id
    if "/" in resource:
        return "object", resource
    return "bucket", resource


def _parse_lambda_resource(resource: str) -> ResourceParts:
    for resource_type in ("function", "layer"):
        prefix = f"{resource_type}:"
        if resource.startswith(prefix):
            name = resource[len(prefix) :]
            return resource_type, name.split(":", 1)[0]
    return "function", resource.split(":", 1)[0]


def _parse_dynamodb_resource(resource: str) -> ResourceParts:
    if resource.startswith("table/"):
        rest = resource[len("table/") :]
        if "/index/" in rest:
            return "index", rest
        return "table", rest
    return "table", resource


IAM_RESOURCE_TYPES = ("role", "user", "policy", "instance-profile")


def _parse_iam_resource(resource: str) -> ResourceParts:
    for resource_type in IAM_RESOURCE_TYPES:
        for separator in ("/", ":"):
            prefix = f"{resource_type}{separator}"
            if resource.startswith(prefix):
                return resource_type, resource[len(prefix) :]
    return "", resource


def _parse_secretsmanager_resource(resource: str) -> ResourceParts:
    return "secret", _strip_prefix(resource, "secret:")


def _parse_logs_resource(resource: str) -> ResourceParts:
    log_group_name = _strip_prefix(resource, "log-group:")
    if log_group_name.endswith(":*"):
        log_group_name = log_group_name[:-2]
    return "log-group", log_group_name


def _parse_generic_resource(resource: str) -> ResourceParts:
    for separator in ("/", ":"):
        if separator in resource:
            resource_type, resource_id = resource.split(separator, 1)
            return resource_type, resource_id
    return "", resource


SERVICE_RESOURCE_PARSERS: Dict[str, Callable[[str], ResourceParts]] = {
    "s3": _parse_s3_resource,
    "lambda": _parse_lambda_resource,
    "dynamodb": _parse_dynamodb_resource,
    "sqs": lambda resource: ("queue", resource),
    "sns": lambda resource: ("topic", resource),
    "iam": _parse_iam_resource,
    "secretsmanager": _parse_secretsmanager_resource,
    "logs": _parse_logs_resource,
}


def parse_resource(service: str, resource: str) -> ResourceParts:
    """Split the resource portion of an ARN into (resource_type, resource_id) using the
    service's rule if it has one, else the generic slash-then-colon rule."""
    parser = SERVICE_RESOURCE_PARSERS.get(service, _parse_generic_resource)
    return parser(resource)
