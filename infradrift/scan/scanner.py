"""Scan the resources of a manifest, checking each for existence."""
from concurrent.futures import Future, ThreadPoolExecutor
import threading
from typing import Dict, List, Optional

from infradrift.aws.checkers import SUPPORTED_SERVICES, get_checker
from infradrift.core.checker import ResourceChecker
from infradrift.core.config import ScanSettings
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent
from infradrift.core.result import (
    AccountScanResult,
    InfraScanResult,
    InfraScanSummary,
    ResourceCheckResult,
)
from infradrift.gcp.checkers import SUPPORTED_GCP_SERVICES, get_gcp_checker
from infradrift.manifest.models import Manifest, ManifestAccount, MultiAccountManifest
from infradrift.manifest.reader import normalize_manifest
from infradrift.resource.arn import is_valid_arn, parse_arn
from infradrift.resource.gcp import is_valid_gcp_resource, parse_gcp_resource

CANCELLED_ERROR = "Scan cancelled"
UNKNOWN = "unknown"


def error_result(
    arn: str,
    error: str,
    service: str = UNKNOWN,
    resource_type: str = UNKNOWN,
    resource_id: Optional[str] = None,
) -> ResourceCheckResult:
    return ResourceCheckResult(
        arn=arn,
        exists=False,
        error=error,
        service=service,
        resource_type=resource_type,
        resource_id=arn if resource_id is None else resource_id,
    )


def filter_accounts(
    manifest: MultiAccountManifest, account: Optional[str] = None
) -> Dict[str, ManifestAccount]:
    """Select the accounts of a manifest to scan.

    Args:
        manifest: multi-account manifest
        account: account key ("aws:123456789012") or alias. If None all accounts are
                 selected.

    Returns:
        dict of account key to account. An exact key match wins over an alias match,
        and only the first account with a matching alias is selected. Empty if nothing
        matches.
    """
    if not account:
        return dict(manifest.accounts)
    if account in manifest.accounts:
        return {account: manifest.accounts[account]}
    for account_key, manifest_account in manifest.accounts.items():
        if manifest_account.alias == account:
            return {account_key: manifest_account}
    return {}


class InfraScanner:
    """Checks manifest resources on a bounded thread pool.

    Args:
        settings: concurrency and per-call timeout settings
        concurrency: overrides settings.concurrency
    """

    def __init__(
        self, settings: Optional[ScanSettings] = None, concurrency: Optional[int] = None
    ) -> None:
        self._concurrency_override = concurrency
        self._cancel_event = threading.Event()
        self.configure(settings or ScanSettings())

    def configure(self, settings: ScanSettings) -> None:
        """Apply scan settings, e.g. those read from standards.toml after the scanner was
        built. A concurrency passed to the constructor still takes precedence."""
        self.settings = settings
        self.concurrency = self._concurrency_override or settings.concurrency

    def cancel(self) -> None:
        """Cancel a running scan. Checks which have already started run to completion,
        every other resource is reported with the error 'Scan cancelled'."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def get_checker(self, cloud: str, service: str) -> Optional[ResourceChecker]:
        if cloud == "aws":
            return get_checker(service, scan_settings=self.settings)
        return get_gcp_checker(service, scan_settings=self.settings)

    def check_resource(self, resource: str) -> ResourceCheckResult:
        """Check a single resource identifier. Never raises."""
        if self.cancelled:
            return error_result(resource, CANCELLED_ERROR)
        if is_valid_arn(resource):
            parsed = parse_arn(resource)
            cloud_name, supported = "AWS", SUPPORTED_SERVICES
        elif is_valid_gcp_resource(resource):
            parsed = parse_gcp_resource(resource)
            cloud_name, supported = "GCP", SUPPORTED_GCP_SERVICES
        else:
            return error_result(
                resource, "Invalid resource format (not a valid AWS ARN or GCP resource path)"
            )
        if parsed is None:
            return error_result(resource, f"Invalid {cloud_name} resource format")
        checker = self.get_checker(parsed.cloud, parsed.service)
        if checker is None:
            return error_result(
                resource,
                f"Unsupported {cloud_name} service: {parsed.service}. "
                f"Supported: {', '.join(supported)}",
                service=parsed.service,
                resource_type=parsed.resource_type,
                resource_id=parsed.resource_id,
            )
        return checker.check(parsed)

    def check_resources(self, resources: List[str]) -> List[ResourceCheckResult]:
        """Check resources concurrently, returning one result per resource sorted by
        resource identifier."""
        with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
            futures: List[Future] = [
                executor.submit(self.check_resource, resource) for resource in resources
            ]
            results = [future.result() for future in futures]
        return sorted(results, key=lambda result: result.arn)

    def scan_manifest(
        self, manifest: Manifest, manifest_path: str, account: Optional[str] = None
    ) -> InfraScanResult:
        """Scan every resource of a manifest, or of the accounts matching `account`.

        Args:
            manifest: v1 or v2 manifest, v1 manifests are normalized first
            manifest_path: path reported in the result
            account: optional account key or alias to restrict the scan to

        Returns:
            InfraScanResult with per-account and overall summaries
        """
        logger = Logger()
        multi_account = normalize_manifest(manifest)
        with logger.bind(manifest=manifest_path, account_filter=account):
            logger.info(event=LogEvent.ScanInfraStart, concurrency=self.concurrency)
            accounts = filter_accounts(multi_account, account)
            if account and not accounts:
                logger.warning(event=LogEvent.ScanAccountNoMatch)
            account_results: Dict[str, AccountScanResult] = {}
            all_results: List[ResourceCheckResult] = []
            for account_key, manifest_account in accounts.items():
                with logger.bind(account=account_key):
                    logger.info(
                        event=LogEvent.ScanAccountStart,
                        resource_count=len(manifest_account.resources),
                    )
                    results = self.check_resources(manifest_account.resources)
                    summary = InfraScanSummary.from_results(results)
                    account_results[account_key] = AccountScanResult(
                        alias=manifest_account.alias, results=results, summary=summary
                    )
                    all_results.extend(results)
                    logger.info(event=LogEvent.ScanAccountEnd, **summary.model_dump())
            summary = InfraScanSummary.from_results(all_results)
            if self.cancelled:
                logger.warning(event=LogEvent.ScanInfraCancelled)
            logger.info(event=LogEvent.ScanInfraEnd, **summary.model_dump())
        return InfraScanResult(
            manifest=manifest_path,
            project=multi_account.project,
            results=all_results,
            summary=summary,
            account_results=account_results,
        )


def scan_manifest(
    manifest: Manifest,
    manifest_path: str,
    account: Optional[str] = None,
    concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    settings: Optional[ScanSettings] = None,
) -> InfraScanResult:
    """Scan a manifest with a new InfraScanner. `timeout` overrides the per-call read
    timeout of `settings`."""
    settings = settings or ScanSettings()
    if timeout is not None:
        settings = settings.model_copy(update={"read_timeout": timeout})
    scanner = InfraScanner(settings=settings, concurrency=concurrency)
    return scanner.scan_manifest(manifest, manifest_path, account=account)
