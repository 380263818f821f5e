"""VMC bundle aggregation, export, import, and verification."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from typing import Any, Iterable, Mapping, TypeVar, Union, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import BundleError
from .models import ENTITY_TYPES, Allele, Genotype, Haplotype, Location, Meta

logger = logging.getLogger(__name__)

VMC001_ID_MISMATCH = "VMC001"
VMC002_DANGLING_REFERENCE = "VMC002"
VMC003_BUNDLE_INVALID = "VMC003"

SCHEMA_PACKAGE = "vmc.schemas"
SCHEMA_FILENAME = "bundle.schema.json"

E = TypeVar("E", Location, Allele, Haplotype, Genotype)


class VmcBundle(BaseModel):
    """Entities grouped by kind and keyed by their content-derived identifiers."""

    model_config = ConfigDict(frozen=True)

    meta: Meta
    locations: dict[str, Location] = Field(default_factory=dict)
    alleles: dict[str, Allele] = Field(default_factory=dict)
    haplotypes: dict[str, Haplotype] = Field(default_factory=dict)
    genotypes: dict[str, Genotype] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible export payload."""
        return cast(dict[str, Any], self.model_dump(mode="json"))

    def entity_counts(self) -> dict[str, int]:
        return {section: len(getattr(self, section)) for section in ENTITY_TYPES}


@dataclass(frozen=True)
class BundleIssue:
    """A machine-readable verification issue."""

    code: str
    message: str
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = {"code": self.code, "message": self.message}
        if self.path is not None:
            payload["path"] = self.path
        return payload


@dataclass(frozen=True)
class BundleVerificationReport:
    """Verification report for one bundle."""

    ok: bool
    entity_counts: Mapping[str, int]
    errors: tuple[BundleIssue, ...]
    warnings: tuple[BundleIssue, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "entity_counts": dict(self.entity_counts),
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def _index(entities: Iterable[E], section: str) -> dict[str, E]:
    indexed: dict[str, E] = {}
    supplied = 0
    for entity in entities:
        # Identical content shares a key; the last supplied value is kept.
        indexed[entity.id] = entity
        supplied += 1
    if supplied != len(indexed):
        logger.debug(
            "Collapsed %d duplicate %s into %d entries.",
            supplied - len(indexed),
            section,
            len(indexed),
        )
    return indexed


def build_bundle(
    *,
    locations: Iterable[Location] = (),
    alleles: Iterable[Allele] = (),
    haplotypes: Iterable[Haplotype] = (),
    genotypes: Iterable[Genotype] = (),
    meta: Meta | None = None,
    deterministic: bool = False,
) -> VmcBundle:
    """Aggregate entities into identifier-keyed collections.

    Child references are not checked here; see :func:`verify_bundle`.

    Example:
        >>> from vmc.models import Interval, Location
        >>> loc = Location(interval=Interval(start=1, end=2), sequence_id="VMC:GS_x")
        >>> len(build_bundle(locations=[loc, loc], deterministic=True).locations)
        1
    """
    resolved_meta = meta if meta is not None else Meta.create(deterministic=deterministic)
    bundle = VmcBundle(
        meta=resolved_meta,
        locations=_index(locations, "locations"),
        alleles=_index(alleles, "alleles"),
        haplotypes=_index(haplotypes, "haplotypes"),
        genotypes=_index(genotypes, "genotypes"),
    )
    logger.debug("Built bundle with %s.", bundle.entity_counts())
    return bundle


def bundle_json(bundle: VmcBundle, *, indent: int | None = None) -> str:
    """Serialize a bundle; compact unless ``indent`` is given."""
    return bundle.model_dump_json(indent=indent)


def _schema_resource():
    return resources.files(SCHEMA_PACKAGE).joinpath(SCHEMA_FILENAME)


def load_schema() -> dict[str, Any]:
    """Load the packaged bundle JSON schema.

    Example:
        >>> load_schema()["title"]
        'VMC Bundle'
    """
    return cast(dict[str, Any], json.loads(_schema_resource().read_text(encoding="utf-8")))


def _schema_issues(payload: Mapping[str, Any]) -> list[BundleIssue]:
    import jsonschema

    validator = jsonschema.Draft7Validator(load_schema())
    errors = sorted(validator.iter_errors(payload), key=lambda item: [str(part) for part in item.path])
    issues: list[BundleIssue] = []
    for error in errors:
        location = ".".join(str(part) for part in error.path) or "<root>"
        issues.append(
            BundleIssue(
                VMC003_BUNDLE_INVALID,
                f"Bundle schema validation failed: {error.message}",
                path=location,
            )
        )
    return issues


def _normalize_payload(raw: Union[str, bytes, Mapping[str, Any]]) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise BundleError(VMC003_BUNDLE_INVALID, f"Bundle is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise BundleError(VMC003_BUNDLE_INVALID, "Bundle must decode to a JSON object.")
    return payload


def _reference_issues(payload: Mapping[str, Any]) -> list[BundleIssue]:
    known = {section: set(payload[section]) for section in ENTITY_TYPES}
    references = (
        ("alleles", "location_id", "locations"),
        ("haplotypes", "allele_ids", "alleles"),
        ("genotypes", "haplotype_ids", "haplotypes"),
    )
    issues: list[BundleIssue] = []
    for section, field, target in references:
        for key, value in payload[section].items():
            targets = value[field]
            if isinstance(targets, str):
                targets = [targets]
            for ref in targets:
                if ref not in known[target]:
                    issues.append(
                        BundleIssue(
                            VMC002_DANGLING_REFERENCE,
                            f"Reference '{ref}' has no entry in {target}.",
                            path=f"{section}.{key}.{field}",
                        )
                    )
    return issues


def verify_bundle(
    bundle: Union[VmcBundle, Mapping[str, Any]],
    *,
    allow_dangling: bool = True,
    raise_on_error: bool = False,
) -> BundleVerificationReport:
    """Check that keys match content and that child references resolve.

    Dangling references are reported as warnings unless ``allow_dangling`` is
    false, in which case they are errors.

    Raises:
        BundleError: With the first error when ``raise_on_error`` is set.
    """
    payload = bundle.to_payload() if isinstance(bundle, VmcBundle) else dict(bundle)
    errors: list[BundleIssue] = _schema_issues(payload)
    warnings: list[BundleIssue] = []
    counts: dict[str, int] = {}

    if not errors:
        for section, model in ENTITY_TYPES.items():
            entries = payload[section]
            counts[section] = len(entries)
            for key, value in entries.items():
                path = f"{section}.{key}"
                try:
                    computed = model.model_validate(value).id
                except ValidationError as exc:
                    errors.append(BundleIssue(VMC003_BUNDLE_INVALID, str(exc), path=path))
                    continue
                except UnicodeEncodeError as exc:
                    errors.append(
                        BundleIssue(
                            VMC003_BUNDLE_INVALID,
                            f"Entity content is not ASCII: {exc.reason} at position {exc.start}.",
                            path=path,
                        )
                    )
                    continue
                if key != computed:
                    errors.append(
                        BundleIssue(
                            VMC001_ID_MISMATCH,
                            f"Key does not match content-derived identifier {computed}.",
                            path=path,
                        )
                    )
                embedded = value.get("id")
                if embedded is not None and embedded != computed:
                    errors.append(
                        BundleIssue(
                            VMC001_ID_MISMATCH,
                            f"Embedded id does not match content-derived identifier {computed}.",
                            path=f"{path}.id",
                        )
                    )

        dangling = _reference_issues(payload)
        if dangling:
            logger.warning("Bundle contains %d dangling reference(s).", len(dangling))
        if allow_dangling:
            warnings.extend(dangling)
        else:
            errors.extend(dangling)

    report = BundleVerificationReport(
        ok=not errors,
        entity_counts=counts,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )

    if raise_on_error and errors:
        first = errors[0]
        raise BundleError(first.code, first.message, path=first.path)

    return report


def load_bundle(
    raw: Union[str, bytes, Mapping[str, Any]],
    *,
    verify: bool = True,
) -> VmcBundle:
    """Parse an exported bundle back into models.

    The payload is validated against the packaged schema. With ``verify`` set
    (the default) keys and embedded ids must also match content; dangling
    references are tolerated.

    Raises:
        BundleError: If the payload is malformed or fails verification.
    """
    payload = _normalize_payload(raw)
    if verify:
        verify_bundle(payload, raise_on_error=True)
    else:
        issues = _schema_issues(payload)
        if issues:
            first = issues[0]
            raise BundleError(first.code, first.message, path=first.path)
    try:
        return VmcBundle.model_validate(payload)
    except ValidationError as exc:
        raise BundleError(VMC003_BUNDLE_INVALID, f"Bundle payload is invalid: {exc}") from exc
