"""pydantic models for the two manifest formats.

v1 (legacy):

    {"project": "...", "resources": ["arn:...", "projects/..."]}

v2 (multi-account):

    {"version": 2, "project": "...",
     "accounts": {"aws:111111111111": {"alias": "prod", "resources": [...]}}}
"""
from typing import Dict, List, Literal, Optional, Union

from pydantic import ConfigDict, StrictStr

from infradrift.core.base_model import BaseImmutableModel


class BaseManifestModel(BaseImmutableModel):
    """Unknown keys (e.g. "$schema") are ignored rather than rejected."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ManifestAccount(BaseManifestModel):
    alias: Optional[StrictStr] = None
    resources: List[StrictStr]


class LegacyManifest(BaseManifestModel):
    version: Optional[Literal[1]] = None
    project: Optional[StrictStr] = None
    resources: List[StrictStr]


class MultiAccountManifest(BaseManifestModel):
    version: Literal[2] = 2
    project: Optional[StrictStr] = None
    accounts: Dict[StrictStr, ManifestAccount]


Manifest = Union[MultiAccountManifest, LegacyManifest]


def is_multi_account_manifest(manifest: Manifest) -> bool:
    return isinstance(manifest, MultiAccountManifest)


def is_legacy_manifest(manifest: Manifest) -> bool:
    return isinstance(manifest, LegacyManifest)


def manifest_to_dict(manifest: Manifest) -> Dict:
    """Serializable dict representation of a manifest, omitting unset optional keys."""
    return manifest.model_dump(exclude_none=True)
