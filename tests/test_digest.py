from __future__ import annotations

import hashlib

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vmc.config import DIGEST_SIZE
from vmc.digest import decode_digest, digest, encode_digest, sha512_truncated, sha512t24u

LOCATION_FORM = (
    "<Location:<Identifier:VMC:GS_IIB53T8CNeJJdUqzn9V_JnRtQadwWCbl>:<Interval:44908683:44908684>>"
)


def test_digest_matches_known_location_vector() -> None:
    assert digest(LOCATION_FORM) == "9Jht-lguk_jnBvG-wLJbjmBw5v_v7rQo"


def test_sha512t24u_is_truncated_sha512() -> None:
    blob = b"ACGT"
    expected = hashlib.sha512(blob).digest()[:24]
    assert sha512_truncated(blob) == expected
    assert decode_digest(sha512t24u(blob)) == expected


def test_digest_output_is_url_safe_and_unpadded() -> None:
    value = sha512t24u(b"")
    assert len(value) == 32
    assert "=" not in value
    assert "+" not in value
    assert "/" not in value


def test_digest_rejects_non_ascii_instead_of_rewriting() -> None:
    with pytest.raises(UnicodeEncodeError):
        digest("<Allele:<Identifier:VMC:GL_x>:é>")


def test_encode_decode_handles_non_multiple_of_three_lengths() -> None:
    raw = b"\xfb\xff"
    encoded = encode_digest(raw)
    assert "=" not in encoded
    assert decode_digest(encoded) == raw


@given(st.binary(max_size=512))
def test_sha512t24u_always_decodes_to_24_bytes(blob: bytes) -> None:
    assert len(decode_digest(sha512t24u(blob))) == 24


@given(st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=200))
def test_digest_is_deterministic(canonical: str) -> None:
    assert digest(canonical) == digest(canonical)


def test_sha512t24u_uses_configured_digest_size() -> None:
    blob = b"NC_000019.10"
    assert DIGEST_SIZE == 24
    assert sha512t24u(blob) == encode_digest(sha512_truncated(blob, DIGEST_SIZE))
