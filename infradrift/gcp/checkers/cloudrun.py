"""Cloud Run service checker."""
from typing import Any

from infradrift.core.result import ResourceCheckResult
from infradrift.gcp.checkers.base import GCPResourceChecker
from infradrift.resource.gcp import ParsedGcpResource


class CloudRunChecker(GCPResourceChecker):
    service_name = "run"
    display_name = "Cloud Run"
    type_checkers = {"services": "check_service"}

    def create_client(self) -> Any:
        from google.cloud import run_v2

        return run_v2.ServicesClient()

    def check_service(self, parsed: ParsedGcpResource) -> ResourceCheckResult:
        name = (
            f"projects/{parsed.project}/locations/{parsed.location}/services/{parsed.resource_id}"
        )
        self.client().get_service(name=name, timeout=self.timeout)
        return self.result(parsed, exists=True)
