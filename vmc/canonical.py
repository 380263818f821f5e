"""Canonical string forms used as digest input.

Every referenced entity is rendered as ``<Identifier:value>`` and never
expanded, so a digest depends only on the direct content of its entity.

Example:
    >>> interval_form(44908683, 44908684)
    '<Interval:44908683:44908684>'
    >>> list_form(["VMC:GA_b", "VMC:GA_a"])
    '[<Identifier:VMC:GA_b>;<Identifier:VMC:GA_a>]'
"""

from __future__ import annotations

from typing import Iterable

LIST_SEPARATOR = ";"


def identifier_form(value: str) -> str:
    """Render a reference to another entity by its identifier."""
    return f"<Identifier:{value}>"


def identifier_pair_form(namespace: str, accession: str) -> str:
    return f"<Identifier:{namespace}:{accession}>"


def list_form(ids: Iterable[str]) -> str:
    """Render identifiers in the given order as ``[<Identifier:a>;<Identifier:b>]``."""
    return "[" + LIST_SEPARATOR.join(identifier_form(value) for value in ids) + "]"


def interval_form(start: int, end: int) -> str:
    return f"<Interval:{start}:{end}>"


def location_form(sequence_id: str, start: int, end: int) -> str:
    return f"<Location:{identifier_form(sequence_id)}:{interval_form(start, end)}>"


def allele_form(location_id: str, state: str) -> str:
    """Render an allele; an empty ``state`` encodes a deletion."""
    return f"<Allele:{identifier_form(location_id)}:{state}>"


def haplotype_form(completeness: str, allele_ids: Iterable[str]) -> str:
    """Render a haplotype with its allele ids sorted lexicographically.

    Example:
        >>> haplotype_form("COMPLETE", ["b", "a"]) == haplotype_form("COMPLETE", ["a", "b"])
        True
    """
    return f"<Haplotype:{completeness}:{list_form(sorted(allele_ids))}>"


def genotype_form(completeness: str, haplotype_ids: Iterable[str]) -> str:
    """Render a genotype with haplotype ids in the order supplied.

    Unlike haplotypes no sorting is applied: ``[x, y]`` and ``[y, x]`` are
    different genotypes.
    """
    return f"<Genotype:{completeness}:{list_form(haplotype_ids)}>"
