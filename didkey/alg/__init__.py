"""Supported did:key algorithms."""

from enum import Enum

from didkey import codec
from didkey.errors import UnsupportedPublicKeyType

from .base import Alg, AlgName, Issuer, KeyPair, Signer
from .ecdsa import P256Alg, Secp256k1Alg
from .ed25519 import Ed25519Alg


class KeyAlgorithm(Enum):
    """Enum of the did:key algorithms.

    New algorithms must also be added to the multibase prefix table in
    didkey.codec.
    """

    ed25519 = Ed25519Alg()
    secp256k1 = Secp256k1Alg()
    p256 = P256Alg()

    @classmethod
    def from_name(cls, name: str) -> Alg:
        """Get algorithm from its JWS algorithm name."""
        for alg in cls:
            if alg.value.name == name:
                return alg.value
        raise UnsupportedPublicKeyType(
            f"The algorithm must be either EdDSA, ES256K, or ES256, but {name}"
        )

    @classmethod
    def from_multibase(cls, value: str) -> Alg:
        """Get algorithm from the leading characters of a multibase public key."""
        multicodec = codec.multicodec_from_multibase(value)
        for alg in cls:
            if alg.value.multicodec == multicodec:
                return alg.value
        raise UnsupportedPublicKeyType(f"No algorithm for {multicodec.name}")


__all__ = [
    "Alg",
    "AlgName",
    "Ed25519Alg",
    "Issuer",
    "KeyAlgorithm",
    "KeyPair",
    "P256Alg",
    "Secp256k1Alg",
    "Signer",
]
