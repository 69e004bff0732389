"""Error kinds raised while assembling an application bundle."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    IO = "io"
    TEMPLATE = "template"


class BundleError(RuntimeError):
    """Raised when bundle assembly cannot continue.

    Callers branch on ``kind``; ``context`` carries the offending path,
    template identifier or operation so failures can be diagnosed without
    re-running.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, message: str, *, context: Optional[Mapping[str, object]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, object] = dict(context or {})

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "context": {key: str(value) for key, value in self.context.items()},
        }


class ConfigurationError(BundleError):
    kind = ErrorKind.CONFIGURATION


class ResourceNotFoundError(BundleError):
    kind = ErrorKind.RESOURCE_NOT_FOUND


class BundleIOError(BundleError):
    kind = ErrorKind.IO


class TemplateError(BundleError):
    kind = ErrorKind.TEMPLATE
