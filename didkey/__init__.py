"""did:key method: DIDs derived from Ed25519, secp256k1 and P-256 public keys."""

from didkey.alg import Alg, AlgName, Issuer, KeyAlgorithm, KeyPair, Signer
from didkey.driver import DIDKeyDriver, did_from_multibase, get_driver
from didkey.errors import DIDKeyError
from didkey.resolver import DIDResolver, RegistryResolver
from didkey.resolver.key import DIDKey, DIDResolutionResult, resolve


__all__ = [
    "Alg",
    "AlgName",
    "DIDKey",
    "DIDKeyDriver",
    "DIDKeyError",
    "DIDResolutionResult",
    "DIDResolver",
    "Issuer",
    "KeyAlgorithm",
    "KeyPair",
    "RegistryResolver",
    "Signer",
    "did_from_multibase",
    "get_driver",
    "resolve",
]
