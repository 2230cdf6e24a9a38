"""Registry of GCP resource checkers, keyed by the service name derived from resource
paths. Checkers are constructed on first request and cached per service and scan
settings."""
import importlib
import threading
from typing import Dict, Optional, Tuple

from infradrift.core.config import ScanSettings
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent
from infradrift.gcp.checkers.base import GCPResourceChecker

GCP_CHECKER_CLASSES: Dict[str, Tuple[str, str]] = {
    "run": ("infradrift.gcp.checkers.cloudrun", "CloudRunChecker"),
    "secretmanager": ("infradrift.gcp.checkers.secretmanager", "SecretManagerChecker"),
    "artifactregistry": ("infradrift.gcp.checkers.artifactregistry", "ArtifactRegistryChecker"),
    "iam": ("infradrift.gcp.checkers.iam", "ServiceAccountChecker"),
}

SUPPORTED_GCP_SERVICES = tuple(GCP_CHECKER_CLASSES)

_checker_cache: Dict[Tuple[str, ScanSettings], GCPResourceChecker] = {}
_checker_cache_lock = threading.Lock()


def is_supported_gcp_service(service: str) -> bool:
    return service in GCP_CHECKER_CLASSES


def get_gcp_checker(
    service: str, scan_settings: Optional[ScanSettings] = None
) -> Optional[GCPResourceChecker]:
    """Get the cached checker for a GCP service, None if the service is not supported."""
    module_class = GCP_CHECKER_CLASSES.get(service)
    if module_class is None:
        return None
    settings = scan_settings or ScanSettings()
    cache_key = (service, settings)
    with _checker_cache_lock:
        checker = _checker_cache.get(cache_key)
    if checker is not None:
        return checker
    module_name, class_name = module_class
    checker_class = getattr(importlib.import_module(module_name), class_name)
    checker = checker_class(settings=settings)
    with _checker_cache_lock:
        checker = _checker_cache.setdefault(cache_key, checker)
    Logger().debug(event=LogEvent.CheckerLoaded, provider="gcp", service=service)
    return checker


def clear_gcp_checker_cache() -> None:
    with _checker_cache_lock:
        for checker in _checker_cache.values():
            checker.clear()
        _checker_cache.clear()
    Logger().debug(event=LogEvent.CheckerCacheCleared, provider="gcp")
