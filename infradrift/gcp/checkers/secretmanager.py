"""Secret Manager secret checker."""
from typing import Any

from infradrift.core.result import ResourceCheckResult
from infradrift.gcp.checkers.base import GCPResourceChecker
from infradrift.resource.gcp import ParsedGcpResource


class SecretManagerChecker(GCPResourceChecker):
    service_name = "secretmanager"
    display_name = "Secret Manager"
    type_checkers = {"secrets": "check_secret"}

    def create_client(self) -> Any:
        from google.cloud import secretmanager

        return secretmanager.SecretManagerServiceClient()

    def check_secret(self, parsed: ParsedGcpResource) -> ResourceCheckResult:
        name = f"projects/{parsed.project}/secrets/{parsed.resource_id}"
        self.client().get_secret(name=name, timeout=self.timeout)
        return self.result(parsed, exists=True)
