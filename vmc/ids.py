"""Content-derived identifiers for vmc entities."""

from __future__ import annotations

import re
from typing import Any, NamedTuple

from .config import DEFAULT_SETTINGS, KNOWN_PREFIXES, VMC_NAMESPACE, IdentifierSettings
from .digest import digest
from .errors import IdentifierFormatError, UnsupportedEntityError

_DIGEST_ALPHABET = re.compile(r"[A-Za-z0-9_-]+")


class IdentifierParts(NamedTuple):
    namespace: str
    prefix: str
    digest: str


def derive_identifier(
    prefix: str,
    canonical: str,
    *,
    namespace: str = VMC_NAMESPACE,
    digest_size: int = DEFAULT_SETTINGS.digest_size,
) -> str:
    """Build ``<namespace>:<prefix>_<digest>`` from a canonical string.

    Example:
        >>> derive_identifier("GA", "<Allele:<Identifier:VMC:GL_9Jht-lguk_jnBvG-wLJbjmBw5v_v7rQo>:C>")
        'VMC:GA_8vT5C3XyPLVz4_AXCI5P-J0gobxoGdxY'
    """
    return f"{namespace}:{prefix}_{digest(canonical, size=digest_size)}"


def identifier_for(entity: Any, *, settings: IdentifierSettings = DEFAULT_SETTINGS) -> str:
    """Derive the identifier of a Location, Allele, Haplotype or Genotype.

    Raises:
        UnsupportedEntityError: If the entity kind has no identifier prefix.
    """
    prefix = getattr(type(entity), "vmc_prefix", None)
    if not prefix:
        raise UnsupportedEntityError(entity)
    return derive_identifier(
        prefix,
        entity.canonical_form(),
        namespace=settings.namespace,
        digest_size=settings.digest_size,
    )


def split_identifier(value: str) -> IdentifierParts:
    """Split a derived identifier into namespace, prefix and digest.

    Raises:
        IdentifierFormatError: If ``value`` is not ``<namespace>:<prefix>_<digest>``.

    Example:
        >>> split_identifier("VMC:GL_9Jht-lguk_jnBvG-wLJbjmBw5v_v7rQo").prefix
        'GL'
    """
    namespace, sep, accession = value.partition(":")
    if not sep or not namespace:
        raise IdentifierFormatError(value, "expected '<namespace>:<accession>'")
    prefix, sep, encoded = accession.partition("_")
    if not sep or not encoded:
        raise IdentifierFormatError(value, "expected '<prefix>_<digest>' accession")
    if prefix not in KNOWN_PREFIXES:
        raise IdentifierFormatError(value, f"unknown prefix '{prefix}'")
    if not _DIGEST_ALPHABET.fullmatch(encoded):
        raise IdentifierFormatError(value, "digest is not URL-safe base64")
    return IdentifierParts(namespace=namespace, prefix=prefix, digest=encoded)
