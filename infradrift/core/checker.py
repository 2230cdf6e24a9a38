"""ResourceChecker is the base class for per-service existence checkers. A subclass
declares the resource types it supports as a mapping of resource type to method name;
check() dispatches to the method and turns every outcome, including exceptions, into a
ResourceCheckResult."""
import abc
from typing import Dict, Optional, Tuple, Union

from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn
from infradrift.resource.gcp import ParsedGcpResource

Parsed = Union[ParsedArn, ParsedGcpResource]

UNKNOWN_ERROR = "Unknown error"


class ResourceChecker(abc.ABC):
    """Base class of all resource checkers.

    Class attributes:
        provider_name: "aws" or "gcp"
        service_name: service name as it appears in resource identifiers
        display_name: service name used in messages, e.g. "EC2"
        type_checkers: resource type -> name of the method checking that type. Methods
                       take the parsed identifier and return a ResourceCheckResult, or
                       raise - see is_not_found.
    """

    provider_name: str = ""
    service_name: str = ""
    display_name: str = ""
    type_checkers: Dict[str, str] = {}

    def __init__(self) -> None:
        cls = type(self)
        for required in ("provider_name", "service_name", "type_checkers"):
            if not getattr(cls, required):
                raise TypeError(f"Can not instantiate {cls.__name__} without {required} attribute.")
        for method_name in cls.type_checkers.values():
            if not callable(getattr(cls, method_name, None)):
                raise TypeError(f"{cls.__name__} has no method {method_name}.")

    def check(self, parsed: Parsed) -> ResourceCheckResult:
        """Determine whether a resource exists. Never raises.

        Args:
            parsed: parsed resource identifier

        Returns:
            ResourceCheckResult. A recognized not-found error yields exists=False with
            no error; any other failure yields exists=False with the failure message.
        """
        logger = Logger()
        with logger.bind(
            resource=parsed.raw, service=self.service_name, resource_type=parsed.resource_type
        ):
            method_name = self.type_checkers.get(parsed.resource_type)
            if method_name is None:
                logger.warning(event=LogEvent.CheckResourceUnsupported)
                return self.result(
                    parsed,
                    exists=False,
                    error=(
                        f"Unsupported {self.display_name or self.service_name} "
                        f"resource type: {parsed.resource_type}"
                    ),
                )
            logger.debug(event=LogEvent.CheckResourceStart)
            try:
                result = getattr(self, method_name)(parsed)
            except Exception as ex:
                if self.safe_is_not_found(ex):
                    result = self.result(parsed, exists=False)
                else:
                    error = str(ex) or UNKNOWN_ERROR
                    logger.warning(
                        event=LogEvent.CheckResourceError,
                        error=error,
                        error_type=type(ex).__name__,
                    )
                    result = self.result(parsed, exists=False, error=error)
            logger.debug(event=LogEvent.CheckResourceEnd, exists=result.exists)
            return result

    @abc.abstractmethod
    def is_not_found(self, ex: Exception) -> bool:
        """Determine if an exception raised by a check method means the resource does
        not exist (a confirmed negative, as opposed to an indeterminate failure)."""

    def safe_is_not_found(self, ex: Exception) -> bool:
        """is_not_found, treating any failure to classify the exception as an
        indeterminate error."""
        try:
            return self.is_not_found(ex)
        except Exception as classify_ex:
            Logger().warning(
                event=LogEvent.CheckResourceError,
                error=str(classify_ex),
                error_type=type(classify_ex).__name__,
            )
            return False

    def result(
        self,
        parsed: Parsed,
        exists: bool,
        error: Optional[str] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> ResourceCheckResult:
        default_type, default_id = self.result_key(parsed)
        return ResourceCheckResult(
            arn=parsed.raw,
            exists=exists,
            error=error,
            service=self.service_name,
            resource_type=default_type if resource_type is None else resource_type,
            resource_id=default_id if resource_id is None else resource_id,
        )

    def result_key(self, parsed: Parsed) -> Tuple[str, str]:
        """The (resource_type, resource_id) reported in results for a resource."""
        return parsed.resource_type, parsed.resource_id

    def clear(self) -> None:
        """Drop any cached clients."""
