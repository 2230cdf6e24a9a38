"""GCP resource path parsing.

Supported path shapes:

    projects/{project}/serviceAccounts/{email}                     (IAM)
    projects/{project}/secrets/{secret}                            (Secret Manager)
    projects/{project}/locations/{location}/services/{service}     (Cloud Run)
    projects/{project}/locations/{location}/repositories/{repo}    (Artifact Registry)

Other location scoped paths are parsed generically, the service name being derived
from the resource type."""
from typing import Dict, List, Literal, Optional

from infradrift.core.base_model import BaseImmutableModel

GCP_PATH_PREFIX = "projects/"
GLOBAL_LOCATION = "global"

RESOURCE_TYPE_SERVICES: Dict[str, str] = {
    "services": "run",
    "repositories": "artifactregistry",
    "functions": "cloudfunctions",
    "buckets": "storage",
    "instances": "compute",
    "clusters": "container",
}


class ParsedGcpResource(BaseImmutableModel):
    """Components of a GCP resource path."""

    cloud: Literal["gcp"] = "gcp"
    project: str
    service: str
    location: str
    resource_type: str
    resource_id: str
    raw: str


def is_valid_gcp_resource(path: object) -> bool:
    if not isinstance(path, str) or not path.startswith(GCP_PATH_PREFIX):
        return False
    return len(path.split("/")) >= 3


def parse_gcp_resource(path: object) -> Optional[ParsedGcpResource]:
    """Parse a GCP resource path.

    Args:
        path: candidate resource path

    Returns:
        ParsedGcpResource or None if the path is not valid or has an unrecognized shape.
    """
    if not isinstance(path, str) or not is_valid_gcp_resource(path):
        return None
    parts = path.split("/")
    return _parse_resource_parts(project=parts[1], parts=parts[2:], raw=path)


def _parse_resource_parts(project: str, parts: List[str], raw: str) -> Optional[ParsedGcpResource]:
    if parts[0] == "serviceAccounts" and len(parts) >= 2:
        return ParsedGcpResource(
            project=project,
            service="iam",
            location=GLOBAL_LOCATION,
            resource_type="serviceAccounts",
            resource_id="/".join(parts[1:]),
            raw=raw,
        )
    if parts[0] == "secrets" and len(parts) >= 2:
        return ParsedGcpResource(
            project=project,
            service="secretmanager",
            location=GLOBAL_LOCATION,
            resource_type="secrets",
            resource_id=parts[1],
            raw=raw,
        )
    if parts[0] == "locations" and len(parts) >= 4:
        resource_type = parts[2]
        return ParsedGcpResource(
            project=project,
            service=RESOURCE_TYPE_SERVICES.get(resource_type, resource_type),
            location=parts[1],
            resource_type=resource_type,
            resource_id="/".join(parts[3:]),
            raw=raw,
        )
    return None
