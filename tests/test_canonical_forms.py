from __future__ import annotations

from vmc import Completeness, Genotype, Haplotype, Identifier, Interval
from vmc.canonical import (
    allele_form,
    genotype_form,
    haplotype_form,
    identifier_form,
    list_form,
    location_form,
)

from ._vmc_test_utils import (
    E4_HAPLOTYPE_ID,
    RS429358_C_ID,
    RS7412_C_ID,
    RS7412_T_ID,
    build_apoe_fixture,
)


def test_interval_canonical_form() -> None:
    assert Interval(start=44908683, end=44908684).canonical_form() == "<Interval:44908683:44908684>"


def test_identifier_canonical_form() -> None:
    identifier = Identifier(namespace="NCBI", accession="NC_000019.10")
    assert identifier.canonical_form() == "<Identifier:NCBI:NC_000019.10>"


def test_location_canonical_form() -> None:
    apoe = build_apoe_fixture()
    assert apoe.rs429358_locus.canonical_form() == (
        "<Location:<Identifier:VMC:GS_IIB53T8CNeJJdUqzn9V_JnRtQadwWCbl>:"
        "<Interval:44908683:44908684>>"
    )


def test_allele_canonical_form() -> None:
    apoe = build_apoe_fixture()
    assert apoe.rs429358_c.canonical_form() == (
        "<Allele:<Identifier:VMC:GL_9Jht-lguk_jnBvG-wLJbjmBw5v_v7rQo>:C>"
    )


def test_deletion_allele_renders_empty_state() -> None:
    assert allele_form("VMC:GL_x", "") == "<Allele:<Identifier:VMC:GL_x>:>"


def test_haplotype_canonical_forms() -> None:
    apoe = build_apoe_fixture()
    assert apoe.e1.canonical_form() == (
        f"<Haplotype:COMPLETE:[<Identifier:{RS429358_C_ID}>;<Identifier:{RS7412_T_ID}>]>"
    )
    assert apoe.e4.canonical_form() == (
        f"<Haplotype:COMPLETE:[<Identifier:{RS429358_C_ID}>;<Identifier:{RS7412_C_ID}>]>"
    )


def test_homozygous_genotype_canonical_form() -> None:
    apoe = build_apoe_fixture()
    assert apoe.e4e4.canonical_form() == (
        f"<Genotype:COMPLETE:[<Identifier:{E4_HAPLOTYPE_ID}>;<Identifier:{E4_HAPLOTYPE_ID}>]>"
    )


def test_list_form_has_no_trailing_separator() -> None:
    assert list_form(["a", "b"]) == "[<Identifier:a>;<Identifier:b>]"
    assert list_form(["a"]) == "[<Identifier:a>]"
    assert list_form([]) == "[]"


def test_references_are_not_expanded() -> None:
    assert location_form("VMC:GS_x", 1, 2) == "<Location:<Identifier:VMC:GS_x>:<Interval:1:2>>"
    assert identifier_form("VMC:GL_y") == "<Identifier:VMC:GL_y>"


def test_haplotype_sorts_but_genotype_preserves_order() -> None:
    assert haplotype_form("PARTIAL", ["b", "a"]) == "<Haplotype:PARTIAL:[<Identifier:a>;<Identifier:b>]>"
    assert genotype_form("PARTIAL", ["b", "a"]) == "<Genotype:PARTIAL:[<Identifier:b>;<Identifier:a>]>"


def test_empty_haplotype_and_genotype() -> None:
    assert Haplotype(completeness=Completeness.UNKNOWN, allele_ids=[]).canonical_form() == (
        "<Haplotype:UNKNOWN:[]>"
    )
    assert Genotype(completeness=Completeness.UNKNOWN, haplotype_ids=[]).canonical_form() == (
        "<Genotype:UNKNOWN:[]>"
    )
