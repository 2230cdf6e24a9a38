"""Reading, validation and normalization of infra manifests.

Manifests are either JSON (v1 or v2, see infradrift.manifest.models) or plain text with
one resource per line, '#' starting a comment line. Validation is all-or-nothing: a
manifest containing any invalid entry raises a single ManifestError describing every
problem found."""
from collections import OrderedDict
import json
import re
from pathlib import Path
from typing import cast, Any, Dict, List, Optional, Union

from pydantic import ValidationError

from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent
from infradrift.manifest.exceptions import ManifestError
from infradrift.manifest.models import (
    LegacyManifest,
    Manifest,
    ManifestAccount,
    MultiAccountManifest,
)
from infradrift.resource import is_valid_resource
from infradrift.resource.account import (
    ACCOUNT_KEY_FORMAT_HELP,
    format_account_key,
    is_valid_account_key,
)

UNKNOWN_ACCOUNT_KEY = "unknown:unknown"
AWS_UNKNOWN_ACCOUNT_KEY = "aws:unknown"
GCP_PROJECT_RE = re.compile(r"^projects/([^/]+)/")


def read_manifest(manifest_path: Union[str, Path]) -> Manifest:
    """Read and validate a manifest file.

    The parser is chosen by extension: .json or .txt. Any other (or no) extension is
    tried as JSON first, then as text.

    Args:
        manifest_path: path to the manifest

    Returns:
        LegacyManifest or MultiAccountManifest

    Raises:
        :class:`ManifestError` if the file is missing or invalid
    """
    logger = Logger()
    path = Path(manifest_path)
    with logger.bind(manifest_path=str(path)):
        logger.debug(event=LogEvent.ReadManifestStart)
        if not path.is_file():
            raise ManifestError(f"Manifest file not found: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            raise ManifestError(f"Unable to read manifest {path}: {ex}") from ex
        ext = path.suffix.lower()
        try:
            if ext == ".json":
                manifest = parse_json_manifest(content, str(path))
            elif ext == ".txt":
                manifest = parse_txt_manifest(content, str(path))
            else:
                try:
                    manifest = parse_json_manifest(content, str(path))
                except ManifestError as json_error:
                    logger.debug(event=LogEvent.ReadManifestJSONFallback, error=str(json_error))
                    manifest = parse_txt_manifest(content, str(path))
        except ManifestError as m_e:
            logger.error(event=LogEvent.ReadManifestError, error=str(m_e))
            raise
        logger.debug(event=LogEvent.ReadManifestEnd, resource_count=len(get_all_resources(manifest)))
        return manifest


def parse_json_manifest(content: str, manifest_path: str = "<string>") -> Manifest:
    """Parse JSON manifest content. Shape and structure are checked first, then every
    resource string is checked against the ARN/GCP path grammar."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as j_e:
        raise ManifestError(f"Invalid JSON in manifest {manifest_path}: {j_e}") from j_e
    manifest = validate_manifest_structure(data, manifest_path)
    validate_manifest_resources(manifest, manifest_path)
    return manifest


def validate_manifest_structure(data: Any, manifest_path: str = "<string>") -> Manifest:
    """Determine the manifest format from its keys and validate its structure.

    A document with an "accounts" key is a v2 manifest, one with a "resources" key a v1
    manifest. Resource strings are not grammar checked here, see
    validate_manifest_resources.
    """
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {manifest_path} must be a JSON object")
    if "accounts" in data:
        return _validate_multi_account_structure(data, manifest_path)
    if "resources" in data:
        return _validate_model(LegacyManifest, data, manifest_path)
    raise ManifestError(
        f'Manifest {manifest_path} must have a "resources" array or an "accounts" object'
    )


def _validate_multi_account_structure(
    data: Dict[str, Any], manifest_path: str
) -> MultiAccountManifest:
    accounts = data.get("accounts")
    if isinstance(accounts, dict):
        invalid_keys = [key for key in accounts if not is_valid_account_key(key)]
        if invalid_keys:
            problems = [f'invalid account key: "{key}"' for key in invalid_keys]
            for account_key, account in accounts.items():
                resources = account.get("resources") if isinstance(account, dict) else None
                if isinstance(resources, list):
                    problem = _account_resource_problem(account_key, resources)
                    if problem:
                        problems.append(problem)
            raise ManifestError(
                f"Invalid manifest {manifest_path}: {'; '.join(problems)}. "
                f"{ACCOUNT_KEY_FORMAT_HELP}",
                problems=problems,
            )
    return cast(MultiAccountManifest, _validate_model(MultiAccountManifest, data, manifest_path))


def _validate_model(model_class: Any, data: Dict[str, Any], manifest_path: str) -> Manifest:
    try:
        return model_class.model_validate(data)
    except ValidationError as v_e:
        problems = [
            f"{'.'.join(str(loc) for loc in error['loc']) or '<root>'}: {error['msg']}"
            for error in v_e.errors()
        ]
        raise ManifestError(
            f"Invalid manifest {manifest_path}: {'; '.join(problems)}", problems=problems
        ) from v_e


def validate_manifest_resources(manifest: Manifest, manifest_path: str = "<string>") -> None:
    """Check every resource in a structurally valid manifest against the ARN/GCP grammar.

    Raises:
        :class:`ManifestError` listing every invalid resource
    """
    if isinstance(manifest, MultiAccountManifest):
        problems = []
        for account_key, account in manifest.accounts.items():
            problem = _account_resource_problem(account_key, account.resources)
            if problem:
                problems.append(problem)
    else:
        problems = [resource for resource in manifest.resources if not is_valid_resource(resource)]
    if problems:
        raise ManifestError(
            f"Manifest {manifest_path} contains invalid resources: {'; '.join(problems)}",
            problems=problems,
        )


def _account_resource_problem(account_key: str, resources: List[Any]) -> Optional[str]:
    invalid = [str(resource) for resource in resources if not is_valid_resource(resource)]
    if invalid:
        return f'account "{account_key}": {", ".join(invalid)}'
    return None


def parse_txt_manifest(content: str, manifest_path: str = "<string>") -> LegacyManifest:
    """Parse a text manifest: one resource per line, blank lines and lines starting with
    '#' are skipped."""
    resources: List[str] = []
    problems: List[str] = []
    for line_num, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if is_valid_resource(line):
            resources.append(line)
        else:
            problems.append(f'line {line_num}: "{line}"')
    if problems:
        raise ManifestError(
            f"Manifest {manifest_path} contains invalid resources: {', '.join(problems)}",
            problems=problems,
        )
    return LegacyManifest(resources=resources)


def detect_account_from_resource(resource: str) -> str:
    """Determine the account key owning a resource.

    Args:
        resource: ARN or GCP resource path

    Returns:
        "aws:<account-id>" for ARNs ("aws:unknown" if the ARN has no account, e.g. S3),
        "gcp:<project>" for GCP paths, else "unknown:unknown"
    """
    if resource.startswith("arn:"):
        parts = resource.split(":")
        if len(parts) >= 5:
            account_id = parts[4]
            if account_id:
                return format_account_key("aws", account_id)
            return AWS_UNKNOWN_ACCOUNT_KEY
    gcp_match = GCP_PROJECT_RE.match(resource)
    if gcp_match:
        return format_account_key("gcp", gcp_match.group(1))
    return UNKNOWN_ACCOUNT_KEY


def group_resources_by_account(resources: List[str]) -> "OrderedDict[str, List[str]]":
    """Bucket resources by detected account key, preserving order within each bucket."""
    grouped: "OrderedDict[str, List[str]]" = OrderedDict()
    for resource in resources:
        grouped.setdefault(detect_account_from_resource(resource), []).append(resource)
    return grouped


def normalize_manifest(manifest: Manifest) -> MultiAccountManifest:
    """Convert a manifest to the multi-account format. v2 manifests are returned as is,
    v1 resources are grouped under their detected account keys."""
    if isinstance(manifest, MultiAccountManifest):
        return manifest
    accounts = {
        account_key: ManifestAccount(resources=resources)
        for account_key, resources in group_resources_by_account(manifest.resources).items()
    }
    return MultiAccountManifest(project=manifest.project, accounts=accounts)


def get_all_resources(manifest: Manifest) -> List[str]:
    """Flat list of all resources in a manifest, in account order for v2 manifests."""
    if isinstance(manifest, MultiAccountManifest):
        return [
            resource for account in manifest.accounts.values() for resource in account.resources
        ]
    return list(manifest.resources)
