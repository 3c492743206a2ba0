"""Ed25519 key algorithm using pynacl."""

from typing import Dict, Optional

try:
    import nacl.bindings
    import nacl.exceptions
except ImportError as err:
    raise ImportError("Ed25519 support requires pynacl to be installed") from err

from didkey.errors import InvalidSecretKey
from didkey.multiformats.multicodec import SupportedCodecs

from .base import Alg, KeyPair, Signer, b64url

X25519_2019_CONTEXT = "https://w3id.org/security/suites/x25519-2019/v1"


class Ed25519Alg(Alg):
    """EdDSA over Ed25519.

    The secret key is the 64 byte libsodium form: the 32 byte seed followed by
    the public key.
    """

    name = "EdDSA"
    multicodec = SupportedCodecs.ed25519_pub.value
    public_key_length = nacl.bindings.crypto_sign_PUBLICKEYBYTES
    secret_key_length = nacl.bindings.crypto_sign_SECRETKEYBYTES

    def generate_key_pair(self) -> KeyPair:
        """Generate a new key pair."""
        public_key, secret_key = nacl.bindings.crypto_sign_keypair()
        return KeyPair(public_key, secret_key)

    def key_pair_from_secret_key(self, secret_key: bytes) -> KeyPair:
        """Split the secret key into a key pair."""
        if len(secret_key) != self.secret_key_length:
            raise InvalidSecretKey(
                f"The Ed25519 secret key must be {self.secret_key_length} bytes, "
                f"but {len(secret_key)}"
            )
        return KeyPair(bytes(secret_key[32:]), bytes(secret_key))

    def signer_from_secret_key(self, secret_key: bytes) -> Signer:
        """Create a signer from the secret key."""
        secret_key = self.key_pair_from_secret_key(secret_key).secret_key

        def _sign(message: bytes) -> bytes:
            signed = nacl.bindings.crypto_sign(message, secret_key)
            return signed[: nacl.bindings.crypto_sign_BYTES]

        return _sign

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Check an Ed25519 signature."""
        try:
            nacl.bindings.crypto_sign_open(signature + message, public_key)
        except (nacl.exceptions.BadSignatureError, nacl.exceptions.ValueError):
            return False
        return True

    def public_key_jwk_from_public_key(self, public_key: bytes) -> Dict[str, str]:
        """Create the OKP publicKeyJwk object."""
        return {"kty": "OKP", "crv": "Ed25519", "x": b64url.encode(public_key)}

    def key_agreement_public_key(self, public_key: bytes) -> Optional[bytes]:
        """Convert the Ed25519 public key to its X25519 form."""
        return nacl.bindings.crypto_sign_ed25519_pk_to_curve25519(public_key)
