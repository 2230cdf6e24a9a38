"""Parsing of declared resource identifiers: AWS ARNs and GCP resource paths."""
from typing import Optional, Union

from infradrift.resource.arn import ParsedArn, is_valid_arn, parse_arn
from infradrift.resource.gcp import ParsedGcpResource, is_valid_gcp_resource, parse_gcp_resource

ParsedResource = Union[ParsedArn, ParsedGcpResource]


def is_valid_resource(resource: object) -> bool:
    """A resource identifier is valid if it is an ARN or a GCP resource path."""
    return is_valid_arn(resource) or is_valid_gcp_resource(resource)


def parse_resource_identifier(resource: str) -> Optional[ParsedResource]:
    """Parse an ARN or GCP resource path, returning None if it is neither."""
    if is_valid_arn(resource):
        return parse_arn(resource)
    return parse_gcp_resource(resource)
