"""Conversion between raw public keys and base58btc multibase values."""

from typing import Mapping

from didkey.errors import (
    InvalidMultibase,
    InvalidMultibaseHeader,
    InvalidMulticodecHeader,
    UnsupportedPublicKeyType,
)
from didkey.multiformats import multibase, multicodec
from didkey.multiformats.multibase import Encoding
from didkey.multiformats.multicodec import Multicodec, SupportedCodecs

MULTIBASE_BASE58BTC_HEADER = Encoding.base58btc.value.character

# Leading characters of a base58btc multibase value for each key multicodec.
# These follow from base58 encoding the codec prefix and a key of the fixed
# length; a new codec needs its prefix checked against real encodings.
MULTIBASE_BASE58BTC_ED25519_PREFIX = "z6Mk"
MULTIBASE_BASE58BTC_SECP256K1_PREFIX = "zQ3s"
MULTIBASE_BASE58BTC_P256_PREFIX = "zDn"

PREFIX_TO_CODEC: Mapping[str, Multicodec] = {
    MULTIBASE_BASE58BTC_ED25519_PREFIX: SupportedCodecs.ed25519_pub.value,
    MULTIBASE_BASE58BTC_SECP256K1_PREFIX: SupportedCodecs.secp256k1_pub.value,
    MULTIBASE_BASE58BTC_P256_PREFIX: SupportedCodecs.p256_pub.value,
}


def multibase_from_public_key(codec: Multicodec, public_key: bytes) -> str:
    """Encode a public key as a base58btc multibase value.

    Args:
        codec: The multicodec of the key type
        public_key: The raw public key bytes

    Returns:
        The multibase value, starting with "z"
    """
    return multibase.encode(multicodec.wrap(codec, public_key), Encoding.base58btc)


def public_key_from_multibase(codec: Multicodec, value: str) -> bytes:
    """Decode a base58btc multibase value into a public key.

    The key length is not checked here; that is up to the key type.

    Args:
        codec: The multicodec the decoded value must start with
        value: The multibase value

    Returns:
        The public key bytes following the multicodec prefix
    """
    if not value.startswith(MULTIBASE_BASE58BTC_HEADER):
        raise InvalidMultibaseHeader(
            f"The multibase must start with {MULTIBASE_BASE58BTC_HEADER}, "
            f"but {value[:1]!r}"
        )

    try:
        decoded = multibase.decode(value)
    except ValueError as err:
        raise InvalidMultibase(f"The multibase is not valid base58btc: {err}") from err

    try:
        return multicodec.unwrap(decoded, codec)
    except ValueError as err:
        found = decoded[: len(codec.code)]
        raise InvalidMulticodecHeader(
            f"The multicodec must start with {list(codec.code)}, but {list(found)}"
        ) from err


def multicodec_from_multibase(value: str) -> Multicodec:
    """Return the key multicodec for a multibase value by its leading characters."""
    for prefix, codec in PREFIX_TO_CODEC.items():
        if value.startswith(prefix):
            return codec

    raise UnsupportedPublicKeyType(
        "The multibase must start with either "
        f"{MULTIBASE_BASE58BTC_ED25519_PREFIX}, "
        f"{MULTIBASE_BASE58BTC_SECP256K1_PREFIX}, or "
        f"{MULTIBASE_BASE58BTC_P256_PREFIX}, but {value}"
    )
