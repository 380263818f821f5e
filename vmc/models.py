"""Variation entities whose identifiers are derived from their content.

Parents reference children by identifier string, never by object, so every
entity can be digested and serialized on its own.

Example:
    >>> loc = Location(
    ...     interval=Interval(start=44908683, end=44908684),
    ...     sequence_id="VMC:GS_IIB53T8CNeJJdUqzn9V_JnRtQadwWCbl",
    ... )
    >>> loc.id
    'VMC:GL_9Jht-lguk_jnBvG-wLJbjmBw5v_v7rQo'
    >>> Allele(location_id=loc.id, state="C").id
    'VMC:GA_8vT5C3XyPLVz4_AXCI5P-J0gobxoGdxY'
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

from .canonical import (
    allele_form,
    genotype_form,
    haplotype_form,
    identifier_pair_form,
    interval_form,
    location_form,
)
from .config import (
    BUNDLE_VERSION,
    DETERMINISTIC_TIMESTAMP,
    PREFIX_ALLELE,
    PREFIX_GENOTYPE,
    PREFIX_HAPLOTYPE,
    PREFIX_LOCATION,
)
from .errors import IdentifierFormatError
from .ids import identifier_for


class Completeness(str, Enum):
    """Whether the listed child identifiers are known to be exhaustive."""

    UNKNOWN = "UNKNOWN"
    PARTIAL = "PARTIAL"
    COMPLETE = "COMPLETE"


class Identifier(BaseModel):
    """A ``<namespace, accession>`` pair that refers to an object.

    Example:
        >>> Identifier.parse("NCBI:NC_000019.10").canonical_form()
        '<Identifier:NCBI:NC_000019.10>'
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    accession: str

    @classmethod
    def parse(cls, value: str) -> "Identifier":
        """Split ``namespace:accession`` on the first colon."""
        namespace, sep, accession = value.partition(":")
        if not sep or not namespace or not accession:
            raise IdentifierFormatError(value, "expected '<namespace>:<accession>'")
        return cls(namespace=namespace, accession=accession)

    def canonical_form(self) -> str:
        return identifier_pair_form(self.namespace, self.accession)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.accession}"


class Interval(BaseModel):
    """A ``<start, end>`` pair in interbase coordinates.

    ``start <= end`` is assumed by callers and not checked.
    """

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    def canonical_form(self) -> str:
        return interval_form(self.start, self.end)


class _Entity(BaseModel):
    """Base for entities that carry a content-derived identifier."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    vmc_prefix: ClassVar[str] = ""

    @property
    def id(self) -> str:
        """Identifier recomputed from the current content on every access."""
        return identifier_for(self)

    @abstractmethod
    def canonical_form(self) -> str:
        """Return the text digested into :attr:`id`."""

    @model_serializer(mode="wrap")
    def _serialize_with_id(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {"id": self.id, **handler(self)}


class Location(_Entity):
    """An Interval on a Sequence referenced by its external identifier."""

    vmc_prefix: ClassVar[str] = PREFIX_LOCATION

    interval: Interval
    sequence_id: str

    def canonical_form(self) -> str:
        return location_form(self.sequence_id, self.interval.start, self.interval.end)


class Allele(_Entity):
    """A contiguous change at a Location; an empty ``state`` is a deletion."""

    vmc_prefix: ClassVar[str] = PREFIX_ALLELE

    location_id: str
    state: str

    def canonical_form(self) -> str:
        return allele_form(self.location_id, self.state)


class Haplotype(_Entity):
    """A set of Alleles on a single instance of a Sequence.

    ``allele_ids`` is sorted once at construction, so the identifier does not
    depend on the order the alleles were supplied in.
    """

    vmc_prefix: ClassVar[str] = PREFIX_HAPLOTYPE

    completeness: Completeness
    allele_ids: tuple[str, ...]

    @field_validator("allele_ids")
    @classmethod
    def _sort_allele_ids(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(sorted(value))

    def canonical_form(self) -> str:
        return haplotype_form(self.completeness.value, self.allele_ids)


class Genotype(_Entity):
    """An ordered list of Haplotypes.

    ``haplotype_ids`` keeps the order supplied by the caller and that order is
    part of the identity.
    """

    vmc_prefix: ClassVar[str] = PREFIX_GENOTYPE

    completeness: Completeness
    haplotype_ids: tuple[str, ...]

    def canonical_form(self) -> str:
        return genotype_form(self.completeness.value, self.haplotype_ids)


class Meta(BaseModel):
    """Bundle provenance. Not content addressed."""

    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    version: str = BUNDLE_VERSION

    @classmethod
    def create(cls, *, deterministic: bool = False, version: str = BUNDLE_VERSION) -> "Meta":
        """Stamp the current UTC time, or a fixed timestamp in deterministic mode."""
        if deterministic:
            generated_at = datetime.fromisoformat(DETERMINISTIC_TIMESTAMP.replace("Z", "+00:00"))
        else:
            generated_at = datetime.now(timezone.utc).replace(microsecond=0)
        return cls(generated_at=generated_at, version=version)


ENTITY_TYPES: dict[str, type[_Entity]] = {
    "locations": Location,
    "alleles": Allele,
    "haplotypes": Haplotype,
    "genotypes": Genotype,
}
