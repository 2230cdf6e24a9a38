"""ClientCache holds one boto3 client per region for a single AWS service. Each client
carries connect/read timeouts and bounded retries, and is guarded so that only
Get/List/Describe/Head API calls can be made through it."""
import re
import threading
from typing import Any, Dict, Optional

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from infradrift.core.config import ScanSettings
from infradrift.core.exceptions import InfradriftException
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent

GLOBAL_REGION = "us-east-1"

_PERMITTED_OPERATION_NAMES_STR = "^(Get|List|Describe|Head).*"
_PERMITTED_OPERATION_NAMES_RE = re.compile(_PERMITTED_OPERATION_NAMES_STR)


class ReadOnlyViolationException(InfradriftException):
    """A non read-only AWS API call was attempted."""


def on_request_created(service_name: str, region_name: str, **kwargs: Any) -> None:
    """Called when a boto3 request is created. Rejects any operation which is not a
    Get/List/Describe/Head call.

    Args:
        service_name: client service name
        region_name: client region
        kwargs: kwargs which are passed through by the boto event callback.
    """
    operation_name = kwargs["operation_name"]
    if not _PERMITTED_OPERATION_NAMES_RE.search(operation_name):
        raise ReadOnlyViolationException(
            f"Operation {service_name}:{operation_name} in {region_name} did not match "
            f"{_PERMITTED_OPERATION_NAMES_STR}"
        )


class ClientCache:
    """Per-region cache of boto3 clients for one AWS service.

    Concurrent callers may race to create a client for the same region; the last one
    wins, which is harmless as clients are interchangeable.

    Args:
        service_name: boto3 client name, e.g. "elbv2"
        settings: timeouts and retry settings applied to created clients
        session: boto3 Session to create clients from, a new one by default
    """

    def __init__(
        self,
        service_name: str,
        settings: Optional[ScanSettings] = None,
        session: Optional[boto3.Session] = None,
    ) -> None:
        self.service_name = service_name
        self.settings = settings or ScanSettings()
        self.session = session
        self._clients: Dict[str, BaseClient] = {}
        self._session_lock = threading.Lock()

    def _get_session(self) -> boto3.Session:
        with self._session_lock:
            if self.session is None:
                self.session = boto3.Session()
            return self.session

    def _build_config(self) -> Config:
        return Config(
            connect_timeout=self.settings.connect_timeout,
            read_timeout=self.settings.read_timeout,
            retries={"max_attempts": self.settings.max_attempts, "mode": "standard"},
        )

    def get(self, region_name: str = "") -> BaseClient:
        """Return the client for a region, creating it on first use. An empty region
        means the service's global endpoint region (us-east-1).

        Args:
            region_name: AWS region

        Returns:
            boto3 client
        """
        region_name = region_name or GLOBAL_REGION
        cached_client = self._clients.get(region_name)
        if cached_client is not None:
            return cached_client
        session = self._get_session()
        # boto3 Sessions are not thread safe, client creation is serialized on them
        with self._session_lock:
            client = session.client(
                service_name=self.service_name,
                region_name=region_name,
                config=self._build_config(),
            )
        create_handler = lambda **kwargs: on_request_created(
            service_name=self.service_name, region_name=region_name, **kwargs
        )
        client.meta.events.register("request-created.*.*", create_handler)
        self._clients[region_name] = client
        Logger().debug(
            event=LogEvent.ClientCreated, service=self.service_name, region=region_name
        )
        return client

    def put(self, region_name: str, client: BaseClient) -> None:
        """Place a pre-built client in the cache, e.g. a stubbed client in tests."""
        self._clients[region_name or GLOBAL_REGION] = client

    def regions(self) -> Dict[str, BaseClient]:
        return dict(self._clients)

    def clear(self) -> None:
        self._clients.clear()
