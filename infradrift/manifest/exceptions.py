"""Manifest related Exceptions."""
from typing import Iterable, List, Optional

from infradrift.core.exceptions import InfradriftException


class ManifestError(InfradriftException):
    """A manifest could not be read or failed validation. `problems` holds every
    individual problem found, the message summarizes all of them."""

    def __init__(self, message: str, problems: Optional[Iterable[str]] = None):
        self.problems: List[str] = list(problems) if problems is not None else []
        super().__init__(message)


class StackExportError(InfradriftException):
    """A Pulumi stack export could not be read or has an unexpected shape."""
