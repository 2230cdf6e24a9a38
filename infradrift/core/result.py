"""Resource check and scan result models.

A ResourceCheckResult is in one of three states:

    exists=True                  the resource was found
    exists=False, error=None     the resource is confirmed to be absent (drift)
    exists=False, error="..."    existence could not be determined (API failure,
                                 timeout, permissions, unsupported type)
"""
from typing import Dict, Iterable, List, Optional

from pydantic import Field

from infradrift.core.base_model import BaseImmutableModel


class ResourceCheckResult(BaseImmutableModel):
    """Result of checking a single declared resource"""

    arn: str
    exists: bool
    error: Optional[str] = None
    service: str
    resource_type: str
    resource_id: str

    @property
    def is_missing(self) -> bool:
        return not self.exists and self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class InfraScanSummary(BaseImmutableModel):
    """Counts of results by state. found + missing + errors == total"""

    total: int = Field(ge=0)
    found: int = Field(ge=0)
    missing: int = Field(ge=0)
    errors: int = Field(ge=0)

    @classmethod
    def from_results(cls, results: Iterable[ResourceCheckResult]) -> "InfraScanSummary":
        total = found = missing = errors = 0
        for result in results:
            total += 1
            if result.error is not None:
                errors += 1
            elif result.exists:
                found += 1
            else:
                missing += 1
        return cls(total=total, found=found, missing=missing, errors=errors)


class AccountScanResult(BaseImmutableModel):
    """Results for the resources of one manifest account"""

    alias: Optional[str] = None
    results: List[ResourceCheckResult]
    summary: InfraScanSummary


class InfraScanResult(BaseImmutableModel):
    """Results of a full manifest scan"""

    manifest: str
    project: Optional[str] = None
    results: List[ResourceCheckResult]
    summary: InfraScanSummary
    account_results: Dict[str, AccountScanResult] = Field(default_factory=dict)
