"""IAM service account checker."""
from typing import Any

from infradrift.core.result import ResourceCheckResult
from infradrift.gcp.checkers.base import GCPResourceChecker
from infradrift.resource.gcp import ParsedGcpResource


class ServiceAccountChecker(GCPResourceChecker):
    service_name = "iam"
    display_name = "IAM"
    type_checkers = {"serviceAccounts": "check_service_account"}

    def create_client(self) -> Any:
        from google.cloud import iam_admin_v1

        return iam_admin_v1.IAMClient()

    def check_service_account(self, parsed: ParsedGcpResource) -> ResourceCheckResult:
        name = f"projects/{parsed.project}/serviceAccounts/{parsed.resource_id}"
        self.client().get_service_account(name=name, timeout=self.timeout)
        return self.result(parsed, exists=True)
