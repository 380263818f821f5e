"""Identifier constants and the settings profile used for derivation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

VMC_NAMESPACE = "VMC"
DIGEST_SIZE = 24
BUNDLE_VERSION = "0"
DETERMINISTIC_TIMESTAMP = "2026-01-01T00:00:00Z"

PREFIX_LOCATION = "GL"
PREFIX_ALLELE = "GA"
PREFIX_HAPLOTYPE = "GH"
PREFIX_GENOTYPE = "GG"
# Assigned by the external sequence registry; never derived here.
PREFIX_SEQUENCE = "GS"

KNOWN_PREFIXES = frozenset(
    {PREFIX_LOCATION, PREFIX_ALLELE, PREFIX_HAPLOTYPE, PREFIX_GENOTYPE, PREFIX_SEQUENCE}
)


@dataclass(frozen=True)
class IdentifierSettings:
    """Namespace and digest length applied when deriving identifiers.

    Example:
        >>> IdentifierSettings().namespace
        'VMC'
    """

    namespace: str = VMC_NAMESPACE
    digest_size: int = DIGEST_SIZE

    def __post_init__(self) -> None:
        if not self.namespace.strip() or ":" in self.namespace:
            raise ValueError(f"Invalid identifier namespace '{self.namespace}'.")
        if not 1 <= self.digest_size <= 64:
            raise ValueError(
                f"digest_size must be between 1 and 64 bytes, got {self.digest_size}."
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "IdentifierSettings":
        """Build settings from a loaded config section, ignoring unknown keys."""
        return cls(
            namespace=str(values.get("namespace", VMC_NAMESPACE)),
            digest_size=int(values.get("digest_size", DIGEST_SIZE)),
        )


DEFAULT_SETTINGS = IdentifierSettings()
