"""Truncated SHA-512 digests encoded as URL-safe base64.

Example:
    >>> len(sha512t24u(b""))
    32
"""

from __future__ import annotations

import base64
import hashlib

from .config import DIGEST_SIZE
from .errors import DigestUnavailableError

HASH_ALGORITHM = "sha512"

if HASH_ALGORITHM not in hashlib.algorithms_available:
    raise DigestUnavailableError(HASH_ALGORITHM)


def sha512_truncated(blob: bytes, size: int = DIGEST_SIZE) -> bytes:
    """Return the first ``size`` bytes of the SHA-512 digest of ``blob``."""
    return hashlib.sha512(blob).digest()[:size]


def encode_digest(raw: bytes) -> str:
    """Encode digest bytes as URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_digest(value: str) -> bytes:
    """Decode an unpadded URL-safe base64 digest back to bytes.

    Example:
        >>> len(decode_digest(sha512t24u(b"abc")))
        24
    """
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


def sha512t24u(blob: bytes) -> str:
    """Return the 24-byte truncated SHA-512 of ``blob`` as URL-safe base64."""
    return encode_digest(sha512_truncated(blob, DIGEST_SIZE))


def digest(canonical: str, *, size: int = DIGEST_SIZE) -> str:
    """Digest a canonical string.

    The string must be 7-bit ASCII. Non-ASCII content raises
    ``UnicodeEncodeError`` rather than being rewritten, since any substitution
    would change the resulting identifier.

    Example:
        >>> digest("<Location:<Identifier:VMC:GS_IIB53T8CNeJJdUqzn9V_JnRtQadwWCbl>:<Interval:44908683:44908684>>")
        '9Jht-lguk_jnBvG-wLJbjmBw5v_v7rQo'
    """
    return encode_digest(sha512_truncated(canonical.encode("ascii"), size))
