"""Multicodec prefixes for did:key public keys.

Codes are the varint encoded values from the multicodec table.
"""

from enum import Enum
from typing import NamedTuple


class Multicodec(NamedTuple):
    """A named multicodec prefix."""

    name: str
    code: bytes


class SupportedCodecs(Enum):
    """Public key multicodecs known to did:key."""

    ed25519_pub = Multicodec("ed25519-pub", b"\xed\x01")
    x25519_pub = Multicodec("x25519-pub", b"\xec\x01")
    secp256k1_pub = Multicodec("secp256k1-pub", b"\xe7\x01")
    p256_pub = Multicodec("p256-pub", b"\x80\x24")


def wrap(codec: Multicodec, data: bytes) -> bytes:
    """Prefix data with the codec."""
    return codec.code + data


def unwrap(data: bytes, codec: Multicodec) -> bytes:
    """Strip the codec prefix from data.

    Raises:
        ValueError: the data does not start with the codec
    """
    if not data.startswith(codec.code):
        raise ValueError(f"Data is not prefixed with {codec.name}")
    return data[len(codec.code) :]
