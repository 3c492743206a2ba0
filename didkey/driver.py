"""did:key driver.

A driver binds one key algorithm to DID creation, key generation and signing:

    driver = get_driver("EdDSA")
    key_pair = driver.generate_key_pair()
    did = driver.did_from_public_key(key_pair.public_key)
    signature = driver.signer_from_secret_key(key_pair.secret_key)(b"hello")
"""

from typing import Dict

from didkey.alg import Alg, Issuer, KeyAlgorithm, KeyPair, Signer
from didkey.resolver.key import DIDKey

DID_KEY_PREFIX = "did:key:"


def did_from_multibase(multibase: str) -> str:
    """Return the did:key for a multibase public key."""
    return DID_KEY_PREFIX + multibase


class DIDKeyDriver:
    """The driver for did:key."""

    def __init__(self, alg: Alg):
        """Initialize the driver."""
        self.alg = alg

    def generate_key_pair(self) -> KeyPair:
        """Generate a key pair."""
        return self.alg.generate_key_pair()

    def key_pair_from_secret_key(self, secret_key: bytes) -> KeyPair:
        """Convert the secret key to a key pair."""
        return self.alg.key_pair_from_secret_key(secret_key)

    def did_from_public_key(self, public_key: bytes) -> str:
        """Convert the public key to a DID."""
        return did_from_multibase(self.alg.multibase_from_public_key(public_key))

    def signer_from_secret_key(self, secret_key: bytes) -> Signer:
        """Convert the secret key to a signer."""
        return self.alg.signer_from_secret_key(secret_key)

    def issuer_from_key_pair(self, key_pair: KeyPair) -> Issuer:
        """Convert the key pair to an issuer."""
        return self.alg.issuer_from_key_pair(key_pair)

    def get_resolver_registry(self) -> Dict[str, DIDKey]:
        """Return a resolver registry for did:key."""
        return {"key": DIDKey()}

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"<DIDKeyDriver {self.alg.name}>"


def get_driver(alg_name: str) -> DIDKeyDriver:
    """Return a did:key driver for "EdDSA", "ES256K" or "ES256"."""
    return DIDKeyDriver(KeyAlgorithm.from_name(alg_name))
