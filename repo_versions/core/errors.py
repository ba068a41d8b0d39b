# repo_versions/core/errors.py
from __future__ import annotations
from enum import Enum
from typing import Optional


class RepoVersionsError(Exception):
    """Base class for everything this package raises on purpose."""


class TemplateError(RepoVersionsError, ValueError):
    """A location pattern token could not be resolved. Always a configuration bug."""

    def __init__(self, token: str, pattern: str, reason: str = "no value supplied"):
        self.token = token
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Unresolved token [{token}] in pattern {pattern!r}: {reason}")


class TransportError(RepoVersionsError):
    """Raised by a resource repository when a location could not be read or listed."""

    def __init__(self, location: str, message: str):
        self.location = location
        super().__init__(f"{message} ({location})")


# ---- discovery failures -------------------------------------------------------
class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    PARSE = "parse"
    NOT_APPLICABLE = "not-applicable"


class DiscoveryError(RepoVersionsError):
    kind: ErrorKind = ErrorKind.TRANSPORT
    summary = "Version discovery failed"

    def __init__(self, location: str, cause: Optional[BaseException] = None, message: str = ""):
        self.location = location
        self.cause = cause
        text = message or self.summary
        if cause is not None:
            text = f"{text}: {location}: {cause}"
        else:
            text = f"{text}: {location}"
        super().__init__(text)


class TransportFailure(DiscoveryError):
    kind = ErrorKind.TRANSPORT
    summary = "Unable to load resource"


class ParseFailure(DiscoveryError):
    kind = ErrorKind.PARSE
    summary = "Unable to parse Maven metadata"


class NotApplicable(DiscoveryError):
    kind = ErrorKind.NOT_APPLICABLE
    summary = "Layout does not apply to pattern"
