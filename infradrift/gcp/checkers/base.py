"""Base class for GCP resource checkers."""
import abc
import threading
from typing import Any, Optional

from infradrift.core.checker import ResourceChecker
from infradrift.core.config import ScanSettings
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent


class GCPResourceChecker(ResourceChecker):
    """Base class for GCP checkers. Each checker owns one lazily created client for its
    service; google-cloud client libraries are imported only when that client is first
    built. Every call is made with `timeout` set to the configured read timeout.

    Args:
        client: pre-built client, e.g. a mock in tests
        settings: timeout settings
    """

    provider_name = "gcp"

    def __init__(self, client: Any = None, settings: Optional[ScanSettings] = None) -> None:
        super().__init__()
        self.settings = settings or ScanSettings()
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def timeout(self) -> float:
        return self.settings.read_timeout

    @abc.abstractmethod
    def create_client(self) -> Any:
        """Build the google-cloud client for this service."""

    def client(self) -> Any:
        with self._client_lock:
            if self._client is None:
                self._client = self.create_client()
                Logger().debug(event=LogEvent.ClientCreated, service=self.service_name)
            return self._client

    def is_not_found(self, ex: Exception) -> bool:
        """NotFound from google-api-core. Without the gcp extra installed no exception
        can be a NotFound."""
        try:
            from google.api_core.exceptions import NotFound
        except ImportError:
            return False
        return isinstance(ex, NotFound)

    def clear(self) -> None:
        with self._client_lock:
            self._client = None
