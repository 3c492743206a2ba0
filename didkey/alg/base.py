"""Key algorithm interface for did:key."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Literal, NamedTuple, Optional

from didkey import codec
from didkey.errors import InvalidPublicKeyLength
from didkey.multiformats.multibase import Base64UrlEncoder
from didkey.multiformats.multicodec import Multicodec

AlgName = Literal["EdDSA", "ES256K", "ES256"]

Signer = Callable[[bytes], bytes]
"""Signs a message, returning the raw signature bytes."""

b64url = Base64UrlEncoder()


@dataclass(frozen=True)
class KeyPair:
    """Public and secret key bytes."""

    public_key: bytes
    secret_key: bytes


class Issuer(NamedTuple):
    """Everything needed to issue signed tokens as a did:key."""

    did: str
    signer: Signer
    alg: AlgName


class Alg(ABC):
    """A did:key signature scheme."""

    name: ClassVar[AlgName]
    multicodec: ClassVar[Multicodec]
    public_key_length: ClassVar[int]

    @abstractmethod
    def generate_key_pair(self) -> KeyPair:
        """Generate a new key pair."""

    @abstractmethod
    def key_pair_from_secret_key(self, secret_key: bytes) -> KeyPair:
        """Reconstruct the key pair from the secret key."""

    @abstractmethod
    def signer_from_secret_key(self, secret_key: bytes) -> Signer:
        """Create a signer from the secret key."""

    @abstractmethod
    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Check a signature produced by a signer of this scheme."""

    @abstractmethod
    def public_key_jwk_from_public_key(self, public_key: bytes) -> Dict[str, str]:
        """Create the publicKeyJwk object from the public key."""

    def key_agreement_public_key(self, public_key: bytes) -> Optional[bytes]:
        """Derive an X25519 key agreement key, if the scheme has one."""
        return None

    def multibase_from_public_key(self, public_key: bytes) -> str:
        """Convert the public key to a base58btc multibase value."""
        return codec.multibase_from_public_key(self.multicodec, public_key)

    def public_key_from_multibase(self, value: str) -> bytes:
        """Convert a base58btc multibase value to the public key."""
        public_key = codec.public_key_from_multibase(self.multicodec, value)
        if len(public_key) != self.public_key_length:
            raise InvalidPublicKeyLength(
                f"The {self.multicodec.name} key must be {self.public_key_length} "
                f"bytes, but {len(public_key)}"
            )
        return public_key

    def issuer_from_key_pair(self, key_pair: KeyPair) -> Issuer:
        """Create an issuer from the key pair."""
        did = "did:key:" + self.multibase_from_public_key(key_pair.public_key)
        return Issuer(did, self.signer_from_secret_key(key_pair.secret_key), self.name)

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"<{self.__class__.__name__} {self.name}>"
