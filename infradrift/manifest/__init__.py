"""Infra manifests: the declared set of cloud resources a project expects to exist."""
from infradrift.manifest.exceptions import ManifestError, StackExportError
from infradrift.manifest.models import (
    LegacyManifest,
    Manifest,
    ManifestAccount,
    MultiAccountManifest,
    is_legacy_manifest,
    is_multi_account_manifest,
    manifest_to_dict,
)
from infradrift.manifest.reader import (
    detect_account_from_resource,
    get_all_resources,
    normalize_manifest,
    parse_json_manifest,
    parse_txt_manifest,
    read_manifest,
)

__all__ = [
    "LegacyManifest",
    "Manifest",
    "ManifestAccount",
    "ManifestError",
    "MultiAccountManifest",
    "StackExportError",
    "detect_account_from_resource",
    "get_all_resources",
    "is_legacy_manifest",
    "is_multi_account_manifest",
    "manifest_to_dict",
    "normalize_manifest",
    "parse_json_manifest",
    "parse_txt_manifest",
    "read_manifest",
]
