"""Test the secp256k1 and P-256 algorithms."""

import hashlib

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from didkey.alg.ecdsa import EcdsaAlg, P256Alg, Secp256k1Alg
from didkey.errors import InvalidPublicKeyLength, InvalidSecretKey
from didkey.multiformats.multibase import Base64UrlEncoder

MESSAGE = b"hello"
b64url = Base64UrlEncoder()


@pytest.fixture(params=[Secp256k1Alg, P256Alg], ids=["secp256k1", "p256"])
def alg(request):
    yield request.param()


def test_generate_key_pair(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    assert len(key_pair.public_key) == 33
    assert key_pair.public_key[0] in (2, 3)
    assert len(key_pair.secret_key) == 32


def test_key_pair_from_secret_key(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    assert alg.key_pair_from_secret_key(key_pair.secret_key) == key_pair


@pytest.mark.parametrize("secret_key", [b"\x00" * 32, b"\xff" * 32, b"\x01" * 31])
def test_key_pair_from_invalid_secret_key(alg: EcdsaAlg, secret_key: bytes):
    with pytest.raises(InvalidSecretKey):
        alg.key_pair_from_secret_key(secret_key)


def test_known_secret_key(alg: EcdsaAlg):
    """A scalar of one gives the compressed generator point."""
    key_pair = alg.key_pair_from_secret_key((1).to_bytes(32, "big"))
    generator_x = {
        "secp256k1": (
            "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
        ),
        "P-256": "6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296",
    }[alg.crv]
    assert key_pair.public_key[1:].hex() == generator_x


def test_multibase_round_trip(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    multibase = alg.multibase_from_public_key(key_pair.public_key)
    assert multibase.startswith({"ES256K": "zQ3s", "ES256": "zDn"}[alg.name])
    assert alg.public_key_from_multibase(multibase) == key_pair.public_key


def test_public_key_from_multibase_invalid_length(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    multibase = alg.multibase_from_public_key(key_pair.public_key + b"\x00")
    with pytest.raises(InvalidPublicKeyLength):
        alg.public_key_from_multibase(multibase)


def test_signer(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    signature = alg.signer_from_secret_key(key_pair.secret_key)(MESSAGE)
    assert len(signature) == 64
    assert alg.verify(key_pair.public_key, MESSAGE, signature)

    public_key = ec.EllipticCurvePublicKey.from_encoded_point(
        alg.curve, key_pair.public_key
    )
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    public_key.verify(encode_dss_signature(r, s), MESSAGE, ec.ECDSA(hashes.SHA256()))


def test_secp256k1_signatures_are_low_s():
    alg = Secp256k1Alg()
    key_pair = alg.generate_key_pair()
    signer = alg.signer_from_secret_key(key_pair.secret_key)
    for i in range(20):
        signature = signer(hashlib.sha256(bytes([i])).digest())
        assert int.from_bytes(signature[32:], "big") <= alg.order // 2


def test_verify_rejects_bad_signatures(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    signature = alg.signer_from_secret_key(key_pair.secret_key)(MESSAGE)
    assert not alg.verify(key_pair.public_key, b"goodbye", signature)
    assert not alg.verify(key_pair.public_key, MESSAGE, signature[:63])
    assert not alg.verify(b"\x02" + b"\x00" * 32, MESSAGE, signature)


def test_public_key_jwk(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    jwk = alg.public_key_jwk_from_public_key(key_pair.public_key)

    numbers = ec.EllipticCurvePublicKey.from_encoded_point(
        alg.curve, key_pair.public_key
    ).public_numbers()
    assert jwk == {
        "kty": "EC",
        "crv": alg.crv,
        "x": b64url.encode(numbers.x.to_bytes(32, "big")),
        "y": b64url.encode(numbers.y.to_bytes(32, "big")),
    }
    assert len(b64url.decode(jwk["x"])) == 32
    assert len(b64url.decode(jwk["y"])) == 32


def test_no_key_agreement(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    assert alg.key_agreement_public_key(key_pair.public_key) is None


def test_issuer_from_key_pair(alg: EcdsaAlg):
    key_pair = alg.generate_key_pair()
    issuer = alg.issuer_from_key_pair(key_pair)
    assert issuer.alg == alg.name
    assert issuer.did.startswith("did:key:z")
    assert alg.verify(key_pair.public_key, MESSAGE, issuer.signer(MESSAGE))
