"""Error taxonomy for identifier derivation and bundle handling.

Example:
    >>> from vmc.errors import BundleError
    >>> err = BundleError("VMC001", "Key does not match content.", path="locations")
    >>> err.code
    'VMC001'
"""

from __future__ import annotations

from typing import Any


class VmcError(Exception):
    """Base class for every error raised by vmc."""


class DigestUnavailableError(VmcError, RuntimeError):
    """Raised at import time when the SHA-512 primitive is missing."""

    def __init__(self, algorithm: str):
        super().__init__(
            f"Hash algorithm '{algorithm}' is unavailable in this interpreter; "
            "identifiers cannot be derived."
        )
        self.algorithm = algorithm


class UnsupportedEntityError(VmcError, TypeError):
    """Raised when an identifier is requested for a type with no prefix."""

    def __init__(self, entity: Any):
        kind = type(entity).__name__
        super().__init__(f"'{kind}' does not carry a derived identifier.")
        self.kind = kind


class IdentifierFormatError(VmcError, ValueError):
    """Raised when an identifier string cannot be parsed."""

    def __init__(self, value: str, reason: str):
        super().__init__(f"Malformed identifier '{value}': {reason}")
        self.value = value
        self.reason = reason


class BundleError(VmcError, RuntimeError):
    """Bundle error with a stable machine-readable code."""

    def __init__(self, code: str, message: str, *, path: str | None = None):
        super().__init__(message)
        self.code = code
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": str(self)}
        if self.path is not None:
            payload["path"] = self.path
        return payload
