"""Generate manifests from a Pulumi stack export (`pulumi stack export`).

Resource identifiers are taken from the outputs of every resource in
deployment.resources: well known ARN/name output fields first, then any other output
which is a valid ARN or GCP resource path."""
import json
from pathlib import Path
import sys
from typing import Any, Dict, List, Optional, TextIO, Union

from infradrift.core.config import DEFAULT_MANIFEST_NAME
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent
from infradrift.manifest.exceptions import ManifestError, StackExportError
from infradrift.manifest.models import (
    LegacyManifest,
    Manifest,
    ManifestAccount,
    MultiAccountManifest,
    manifest_to_dict,
)
from infradrift.manifest.reader import (
    group_resources_by_account,
    normalize_manifest,
    validate_manifest_structure,
)
from infradrift.resource import is_valid_resource
from infradrift.resource.account import ACCOUNT_KEY_FORMAT_HELP, is_valid_account_key

RESOURCE_OUTPUT_FIELDS = (
    "arn",
    "id",
    "bucketArn",
    "functionArn",
    "secretArn",
    "roleArn",
    "clusterArn",
    "serviceArn",
    "tableArn",
    "topicArn",
    "queueArn",
    "logGroupArn",
    "policyArn",
    # gcp
    "name",
    "selfLink",
)


def clean_resource_identifier(value: str) -> str:
    """Strip Pulumi's '|'-delimited suffixes, e.g. 'arn:...|extra' -> 'arn:...'"""
    return value.split("|", 1)[0]


def _output_resource(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = clean_resource_identifier(value)
    if is_valid_resource(cleaned):
        return cleaned
    return None


def extract_resources_from_outputs(outputs: Dict[str, Any]) -> List[str]:
    resources = []
    for field in RESOURCE_OUTPUT_FIELDS:
        resource = _output_resource(outputs.get(field))
        if resource:
            resources.append(resource)
    for key, value in outputs.items():
        if key in RESOURCE_OUTPUT_FIELDS:
            continue
        resource = _output_resource(value)
        if resource:
            resources.append(resource)
    return resources


def _get_deployment_resources(stack_export: Any) -> List[Dict[str, Any]]:
    if not isinstance(stack_export, dict):
        raise StackExportError("Invalid stack export: expected an object")
    deployment = stack_export.get("deployment")
    if not isinstance(deployment, dict) or not isinstance(deployment.get("resources"), list):
        raise StackExportError("Invalid stack export: missing deployment.resources")
    return [resource for resource in deployment["resources"] if isinstance(resource, dict)]


def extract_stack_resources(stack_export: Any) -> List[str]:
    """Unique resource identifiers from a stack export, in first-seen order."""
    resources: Dict[str, None] = {}
    for pulumi_resource in _get_deployment_resources(stack_export):
        outputs = pulumi_resource.get("outputs")
        if isinstance(outputs, dict):
            for resource in extract_resources_from_outputs(outputs):
                resources.setdefault(resource, None)
    return list(resources)


def extract_project_name(stack_export: Any) -> Optional[str]:
    """Project name from the first resource URN (urn:pulumi:<stack>::<project>::...)"""
    for pulumi_resource in _get_deployment_resources(stack_export):
        urn = pulumi_resource.get("urn")
        if isinstance(urn, str):
            parts = urn.split("::")
            if len(parts) >= 2:
                return parts[1]
    return None


def parse_stack_export(stack_export: Any, project: Optional[str] = None) -> LegacyManifest:
    """Build a legacy (v1) manifest from a parsed stack export."""
    resources = extract_stack_resources(stack_export)
    project_name = project or extract_project_name(stack_export) or "unknown"
    return LegacyManifest(project=project_name, resources=resources)


def parse_stack_export_multi_account(
    stack_export: Any,
    project: Optional[str] = None,
    account: Optional[str] = None,
    account_id: Optional[str] = None,
) -> MultiAccountManifest:
    """Build a multi-account (v2) manifest from a parsed stack export.

    Args:
        stack_export: parsed `pulumi stack export` JSON
        project: project name override
        account: alias for the account. Only applied when resources belong to a single
                 account or account_id is given.
        account_id: explicit account key ("aws:123..." / "gcp:project"), all resources
                    are placed under this key instead of their detected accounts.
    """
    resources = extract_stack_resources(stack_export)
    project_name = project or extract_project_name(stack_export)
    if account_id:
        if not is_valid_account_key(account_id):
            raise ManifestError(
                f"Invalid account key: \"{account_id}\". {ACCOUNT_KEY_FORMAT_HELP}"
            )
        accounts = {account_id: ManifestAccount(alias=account, resources=resources)}
    else:
        grouped = group_resources_by_account(resources)
        apply_alias = account is not None and len(grouped) == 1
        accounts = {
            key: ManifestAccount(alias=account if apply_alias else None, resources=account_resources)
            for key, account_resources in grouped.items()
        }
    return MultiAccountManifest(project=project_name, accounts=accounts)


def load_stack_export(stream_or_path: Union[TextIO, str, Path]) -> Any:
    """Load stack export JSON from a path or an open text stream."""
    if isinstance(stream_or_path, (str, Path)):
        path = Path(stream_or_path)
        if not path.is_file():
            raise StackExportError(f"File not found: {path}")
        content = path.read_text(encoding="utf-8")
        source = str(path)
    else:
        if stream_or_path.isatty():
            raise StackExportError(
                "No input provided. Pipe a Pulumi stack export: "
                "pulumi stack export | infra_generate.py"
            )
        content = stream_or_path.read()
        source = "stdin"
    try:
        return json.loads(content)
    except json.JSONDecodeError as j_e:
        raise StackExportError(
            f"Invalid JSON in {source}. Expected Pulumi stack export format."
        ) from j_e


def read_existing_manifest(manifest_path: Union[str, Path]) -> Optional[Manifest]:
    """Read the manifest at manifest_path for merging, None if it does not exist. Only
    the structure is validated so that entries written by older versions survive."""
    path = Path(manifest_path)
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as j_e:
        raise ManifestError(f"Invalid JSON in existing manifest: {path}") from j_e
    return validate_manifest_structure(data, str(path))


def merge_into_manifest(
    existing: Manifest, resources: List[str], account_key: str, alias: Optional[str] = None
) -> MultiAccountManifest:
    """Merge resources into an account of an existing manifest. The result is always a
    multi-account manifest; existing resources come first and duplicates are dropped. The
    account's existing alias is kept unless a new one is given."""
    multi_account = normalize_manifest(existing)
    accounts = dict(multi_account.accounts)
    current = accounts.get(account_key)
    existing_resources = current.resources if current else []
    merged_resources = list(dict.fromkeys([*existing_resources, *resources]))
    accounts[account_key] = ManifestAccount(
        alias=alias if alias is not None else (current.alias if current else None),
        resources=merged_resources,
    )
    return MultiAccountManifest(project=multi_account.project, accounts=accounts)


def merge_manifests(
    existing: Manifest, new_manifest: MultiAccountManifest, project: Optional[str] = None
) -> MultiAccountManifest:
    merged = normalize_manifest(existing)
    for account_key, account in new_manifest.accounts.items():
        merged = merge_into_manifest(merged, account.resources, account_key, account.alias)
    if project:
        merged = merged.model_copy(update={"project": project})
    return merged


def generate_manifest(
    input_path: Optional[Union[str, Path]] = None,
    output: Optional[Union[str, Path]] = None,
    project: Optional[str] = None,
    account: Optional[str] = None,
    account_id: Optional[str] = None,
    merge: bool = False,
    stdin: Optional[TextIO] = None,
) -> MultiAccountManifest:
    """Generate a multi-account manifest from a stack export file (or stdin), optionally
    merging it into the manifest already at `output`."""
    logger = Logger()
    with logger.bind(input_path=str(input_path) if input_path else "stdin", merge=merge):
        logger.info(event=LogEvent.GenerateManifestStart)
        if input_path:
            stack_export = load_stack_export(input_path)
        else:
            stack_export = load_stack_export(stdin if stdin is not None else sys.stdin)
        manifest = parse_stack_export_multi_account(
            stack_export, project=project, account=account, account_id=account_id
        )
        if merge:
            existing = read_existing_manifest(output or DEFAULT_MANIFEST_NAME)
            if existing is not None:
                manifest = merge_manifests(existing, manifest, project=project)
        logger.info(event=LogEvent.GenerateManifestEnd, account_count=len(manifest.accounts))
        return manifest


def write_manifest(
    manifest: Manifest,
    output: Optional[Union[str, Path]] = None,
    stdout: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Write a manifest as indented JSON to `output` (default infra-manifest.json) or to
    stdout."""
    manifest_json = json.dumps(manifest_to_dict(manifest), indent=2) + "\n"
    if stdout:
        (stream or sys.stdout).write(manifest_json)
        return
    Path(output or DEFAULT_MANIFEST_NAME).write_text(manifest_json, encoding="utf-8")
