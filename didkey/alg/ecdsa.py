"""ECDSA key algorithms over secp256k1 and P-256 using cryptography."""

from typing import ClassVar, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from didkey.errors import InvalidSecretKey
from didkey.multiformats.multicodec import SupportedCodecs

from .base import Alg, KeyPair, Signer, b64url

COORDINATE_LENGTH = 32


class EcdsaAlg(Alg):
    """ECDSA with SHA-256 over a 256 bit Weierstrass curve.

    Public keys are SEC1 compressed points, secret keys the 32 byte big endian
    scalar. Signatures use the JOSE form: r and s, 32 bytes each.
    """

    public_key_length = 33
    secret_key_length = 32

    curve: ClassVar[ec.EllipticCurve]
    crv: ClassVar[str]
    order: ClassVar[int]
    low_s: ClassVar[bool] = False

    def _key_pair(self, private_key: ec.EllipticCurvePrivateKey) -> KeyPair:
        public_key = private_key.public_key().public_bytes(
            serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
        )
        secret_key = private_key.private_numbers().private_value.to_bytes(
            self.secret_key_length, "big"
        )
        return KeyPair(public_key, secret_key)

    def _private_key(self, secret_key: bytes) -> ec.EllipticCurvePrivateKey:
        if len(secret_key) != self.secret_key_length:
            raise InvalidSecretKey(
                f"The {self.crv} secret key must be {self.secret_key_length} bytes, "
                f"but {len(secret_key)}"
            )
        value = int.from_bytes(secret_key, "big")
        if not 0 < value < self.order:
            raise InvalidSecretKey(f"The {self.crv} secret key is out of range")
        return ec.derive_private_key(value, self.curve)

    def _public_key(self, public_key: bytes) -> ec.EllipticCurvePublicKey:
        return ec.EllipticCurvePublicKey.from_encoded_point(self.curve, public_key)

    def generate_key_pair(self) -> KeyPair:
        """Generate a new key pair."""
        return self._key_pair(ec.generate_private_key(self.curve))

    def key_pair_from_secret_key(self, secret_key: bytes) -> KeyPair:
        """Recompute the key pair from the secret scalar."""
        return self._key_pair(self._private_key(secret_key))

    def signer_from_secret_key(self, secret_key: bytes) -> Signer:
        """Create a signer from the secret key."""
        private_key = self._private_key(secret_key)

        def _sign(message: bytes) -> bytes:
            r, s = decode_dss_signature(
                private_key.sign(message, ec.ECDSA(hashes.SHA256()))
            )
            if self.low_s and s > self.order // 2:
                s = self.order - s
            return r.to_bytes(COORDINATE_LENGTH, "big") + s.to_bytes(
                COORDINATE_LENGTH, "big"
            )

        return _sign

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Check a JOSE form ECDSA signature."""
        if len(signature) != 2 * COORDINATE_LENGTH:
            return False

        r = int.from_bytes(signature[:COORDINATE_LENGTH], "big")
        s = int.from_bytes(signature[COORDINATE_LENGTH:], "big")
        try:
            self._public_key(public_key).verify(
                encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256())
            )
        except (InvalidSignature, ValueError):
            return False
        return True

    def public_key_jwk_from_public_key(self, public_key: bytes) -> Dict[str, str]:
        """Decompress the public key into an EC publicKeyJwk object."""
        numbers = self._public_key(public_key).public_numbers()
        return {
            "kty": "EC",
            "crv": self.crv,
            "x": b64url.encode(numbers.x.to_bytes(COORDINATE_LENGTH, "big")),
            "y": b64url.encode(numbers.y.to_bytes(COORDINATE_LENGTH, "big")),
        }


class Secp256k1Alg(EcdsaAlg):
    """ES256K: ECDSA over secp256k1, signatures normalized to low S."""

    name = "ES256K"
    multicodec = SupportedCodecs.secp256k1_pub.value
    curve = ec.SECP256K1()
    crv = "secp256k1"
    order = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
    low_s = True


class P256Alg(EcdsaAlg):
    """ES256: ECDSA over NIST P-256."""

    name = "ES256"
    multicodec = SupportedCodecs.p256_pub.value
    curve = ec.SECP256R1()
    crv = "P-256"
    order = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
