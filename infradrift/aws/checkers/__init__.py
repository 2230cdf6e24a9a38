"""Registry of AWS resource checkers.

Checker modules are imported the first time a checker for their service is requested and
the constructed checker is cached for the life of the process, keyed by service name and
scan settings."""
import importlib
import threading
from typing import Dict, Optional, Tuple

from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.config import ScanSettings
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent

CHECKER_CLASSES: Dict[str, Tuple[str, str]] = {
    "s3": ("infradrift.aws.checkers.s3", "S3Checker"),
    "lambda": ("infradrift.aws.checkers.awslambda", "LambdaChecker"),
    "dynamodb": ("infradrift.aws.checkers.dynamodb", "DynamoDBChecker"),
    "sqs": ("infradrift.aws.checkers.sqs", "SQSChecker"),
    "sns": ("infradrift.aws.checkers.sns", "SNSChecker"),
    "iam": ("infradrift.aws.checkers.iam", "IAMChecker"),
    "secretsmanager": ("infradrift.aws.checkers.secretsmanager", "SecretsManagerChecker"),
    "logs": ("infradrift.aws.checkers.logs", "LogsChecker"),
    "ecs": ("infradrift.aws.checkers.ecs", "ECSChecker"),
    "rds": ("infradrift.aws.checkers.rds", "RDSChecker"),
    "ec2": ("infradrift.aws.checkers.ec2", "EC2Checker"),
    "elasticache": ("infradrift.aws.checkers.elasticache", "ElastiCacheChecker"),
    "elasticloadbalancing": ("infradrift.aws.checkers.elb", "ELBChecker"),
}

SUPPORTED_SERVICES = tuple(CHECKER_CLASSES)

_checker_cache: Dict[Tuple[str, ScanSettings], AWSResourceChecker] = {}
_checker_cache_lock = threading.Lock()


def is_supported_service(service: str) -> bool:
    return service in CHECKER_CLASSES


def get_checker(
    service: str, scan_settings: Optional[ScanSettings] = None
) -> Optional[AWSResourceChecker]:
    """Get the checker for an AWS service.

    Args:
        service: service name as it appears in ARNs, e.g. "elasticloadbalancing"
        scan_settings: timeout/retry settings of the checker, defaults if None. Each
                       distinct settings value gets its own checker and clients.

    Returns:
        the cached checker, or None if the service is not supported
    """
    module_class = CHECKER_CLASSES.get(service)
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
    Logger().debug(event=LogEvent.CheckerLoaded, provider="aws", service=service)
    return checker


def clear_checker_cache() -> None:
    """Drop all cached checkers and their clients."""
    with _checker_cache_lock:
        for checker in _checker_cache.values():
            checker.clear()
        _checker_cache.clear()
    Logger().debug(event=LogEvent.CheckerCacheCleared, provider="aws")
