"""Base class for AWS resource checkers."""
from typing import FrozenSet, Optional

from botocore.client import BaseClient
from botocore.exceptions import ClientError

from infradrift.aws.client_cache import ClientCache
from infradrift.core.checker import ResourceChecker
from infradrift.core.config import ScanSettings
from infradrift.resource.arn import ParsedArn


def get_error_code(c_e: ClientError) -> str:
    return getattr(c_e, "response", {}).get("Error", {}).get("Code", "")


def get_http_status_code(c_e: ClientError) -> Optional[int]:
    return getattr(c_e, "response", {}).get("ResponseMetadata", {}).get("HTTPStatusCode")


class AWSResourceChecker(ResourceChecker):
    """Base class for AWS checkers.

    Class attributes:
        client_name: boto3 client name, defaults to service_name
        global_service: if True all calls go to the global endpoint region
        not_found_error_codes: ClientError codes meaning the resource does not exist
        not_found_http_status_codes: HTTP statuses meaning the resource does not exist,
                                     used for APIs (HeadBucket) which return no error code
    """

    provider_name = "aws"
    client_name: str = ""
    global_service: bool = False
    not_found_error_codes: FrozenSet[str] = frozenset()
    not_found_http_status_codes: FrozenSet[int] = frozenset()

    def __init__(
        self, client_cache: Optional[ClientCache] = None, settings: Optional[ScanSettings] = None
    ) -> None:
        super().__init__()
        self.client_cache = client_cache or ClientCache(self.get_client_name(), settings)

    @classmethod
    def get_client_name(cls) -> str:
        return cls.client_name or cls.service_name

    def client(self, parsed: ParsedArn) -> BaseClient:
        """Client for the region of a resource"""
        if self.global_service:
            return self.client_cache.get()
        return self.client_cache.get(parsed.region)

    def is_not_found(self, ex: Exception) -> bool:
        if not isinstance(ex, ClientError):
            return False
        if get_error_code(ex) in self.not_found_error_codes:
            return True
        return get_http_status_code(ex) in self.not_found_http_status_codes

    def clear(self) -> None:
        self.client_cache.clear()
