"""Top level entry points for infra scans."""
from pathlib import Path
from typing import Optional, Union

from infradrift.core.config import DEFAULT_CONFIG_NAME, StandardsConfig
from infradrift.core.result import InfraScanResult, InfraScanSummary
from infradrift.manifest.exceptions import ManifestError
from infradrift.manifest.reader import read_manifest
from infradrift.scan.scanner import InfraScanner, filter_accounts, scan_manifest

EXIT_CLEAN = 0
EXIT_MISSING = 1
EXIT_ERRORS = 2
EXIT_MANIFEST_ERROR = 3


def resolve_manifest_path(
    manifest_path: Optional[Union[str, Path]] = None, config: Optional[StandardsConfig] = None
) -> Path:
    """Resolve the manifest to scan.

    An explicit manifest path is resolved relative to the current directory. Otherwise
    the manifest is taken from the [infra] section of the config, relative to the
    config file's directory.

    Raises:
        ManifestError if no manifest path is given and infra scanning is not enabled
    """
    if manifest_path:
        return Path(manifest_path).resolve()
    if config is None or not config.infra.enabled:
        raise ManifestError("Infra scanning is not enabled in standards.toml")
    return config.resolve_manifest_path()


def scan_infra(
    manifest_path: Optional[Union[str, Path]] = None,
    config_path: Optional[Union[str, Path]] = None,
    account: Optional[str] = None,
    scanner: Optional[InfraScanner] = None,
) -> InfraScanResult:
    """Read a manifest and check every resource in it.

    Args:
        manifest_path: manifest to scan. If not given it is read from the config.
        config_path: standards.toml path, defaults to ./standards.toml. Scan settings
                     are read from it when it exists.
        account: optional account key or alias to restrict the scan to
        scanner: InfraScanner to use, e.g. one which the caller may cancel. When a
                 config is loaded its [infra.scan] settings are applied to the scanner.

    Returns:
        InfraScanResult
    """
    config: Optional[StandardsConfig] = None
    config_file = Path(config_path or DEFAULT_CONFIG_NAME)
    if config_path or config_file.is_file():
        config = StandardsConfig.from_file(config_file)
    resolved_path = resolve_manifest_path(manifest_path, config)
    manifest = read_manifest(resolved_path)
    scan_settings = config.infra.scan if config else None
    if scanner is None:
        scanner = InfraScanner(settings=scan_settings)
    elif scan_settings is not None:
        scanner.configure(scan_settings)
    return scanner.scan_manifest(manifest, str(resolved_path), account=account)


def get_exit_code(summary: InfraScanSummary) -> int:
    """Process exit code for a scan: errors take precedence over missing resources."""
    if summary.errors:
        return EXIT_ERRORS
    if summary.missing:
        return EXIT_MISSING
    return EXIT_CLEAN


__all__ = [
    "EXIT_CLEAN",
    "EXIT_ERRORS",
    "EXIT_MANIFEST_ERROR",
    "EXIT_MISSING",
    "InfraScanner",
    "filter_accounts",
    "get_exit_code",
    "resolve_manifest_path",
    "scan_infra",
    "scan_manifest",
]
