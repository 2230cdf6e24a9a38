"""Artifact Registry repository checker."""
from typing import Any

from infradrift.core.result import ResourceCheckResult
from infradrift.gcp.checkers.base import GCPResourceChecker
from infradrift.resource.gcp import ParsedGcpResource


class ArtifactRegistryChecker(GCPResourceChecker):
    service_name = "artifactregistry"
    display_name = "Artifact Registry"
    type_checkers = {"repositories": "check_repository"}

    def create_client(self) -> Any:
        from google.cloud import artifactregistry_v1

        return artifactregistry_v1.ArtifactRegistryClient()

    def check_repository(self, parsed: ParsedGcpResource) -> ResourceCheckResult:
        name = (
            f"projects/{parsed.project}/locations/{parsed.location}"
            f"/repositories/{parsed.resource_id}"
        )
        self.client().get_repository(name=name, timeout=self.timeout)
        return self.result(parsed, exists=True)
