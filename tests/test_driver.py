"""Test the did:key driver."""

import itertools

import pytest

from didkey import DIDKey, DIDKeyDriver, KeyAlgorithm, did_from_multibase, get_driver
from didkey.errors import InvalidMulticodecHeader, UnsupportedPublicKeyType

MESSAGE = b"hello"


@pytest.fixture(params=["EdDSA", "ES256K", "ES256"])
def driver(request):
    yield get_driver(request.param)


def test_get_driver():
    assert get_driver("EdDSA").alg is KeyAlgorithm.ed25519.value
    assert get_driver("ES256K").alg is KeyAlgorithm.secp256k1.value
    assert get_driver("ES256").alg is KeyAlgorithm.p256.value


def test_get_driver_unknown_alg():
    with pytest.raises(UnsupportedPublicKeyType):
        get_driver("RS256")


def test_did_from_multibase():
    driver = get_driver("EdDSA")
    key_pair = driver.generate_key_pair()
    multibase = driver.alg.multibase_from_public_key(key_pair.public_key)
    assert did_from_multibase(multibase) == f"did:key:{multibase}"


def test_generate_key_pair_lengths():
    assert len(get_driver("EdDSA").generate_key_pair().public_key) == 32
    assert len(get_driver("EdDSA").generate_key_pair().secret_key) == 64
    assert len(get_driver("ES256K").generate_key_pair().public_key) == 33
    assert len(get_driver("ES256K").generate_key_pair().secret_key) == 32
    assert len(get_driver("ES256").generate_key_pair().public_key) == 33
    assert len(get_driver("ES256").generate_key_pair().secret_key) == 32


def test_key_pair_from_secret_key(driver: DIDKeyDriver):
    key_pair = driver.generate_key_pair()
    assert driver.key_pair_from_secret_key(key_pair.secret_key) == key_pair


def test_did_from_public_key():
    prefixes = {
        "EdDSA": "did:key:z6Mk",
        "ES256K": "did:key:zQ3s",
        "ES256": "did:key:zDn",
    }
    for alg_name, prefix in prefixes.items():
        driver = get_driver(alg_name)
        key_pair = driver.generate_key_pair()
        assert driver.did_from_public_key(key_pair.public_key).startswith(prefix)


@pytest.mark.parametrize(
    "encode_with,decode_with",
    list(itertools.permutations(["EdDSA", "ES256K", "ES256"], 2)),
)
def test_multibase_of_other_scheme_rejected(encode_with: str, decode_with: str):
    encoder = KeyAlgorithm.from_name(encode_with)
    decoder = KeyAlgorithm.from_name(decode_with)
    multibase = encoder.multibase_from_public_key(
        encoder.generate_key_pair().public_key
    )

    with pytest.raises(InvalidMulticodecHeader) as exc_info:
        decoder.public_key_from_multibase(multibase)
    assert exc_info.value.code == "invalidMulticodecHeader"


def test_signer_from_secret_key(driver: DIDKeyDriver):
    key_pair = driver.generate_key_pair()
    signer = driver.signer_from_secret_key(key_pair.secret_key)
    assert driver.alg.verify(key_pair.public_key, MESSAGE, signer(MESSAGE))


def test_issuer_from_key_pair(driver: DIDKeyDriver):
    key_pair = driver.generate_key_pair()
    issuer = driver.issuer_from_key_pair(key_pair)
    assert issuer.did == driver.did_from_public_key(key_pair.public_key)
    assert issuer.alg == driver.alg.name
    assert driver.alg.verify(key_pair.public_key, MESSAGE, issuer.signer(MESSAGE))


def test_get_resolver_registry(driver: DIDKeyDriver):
    key_pair = driver.generate_key_pair()
    did = driver.did_from_public_key(key_pair.public_key)

    registry = driver.get_resolver_registry()
    assert list(registry) == ["key"]
    assert isinstance(registry["key"], DIDKey)

    result = registry["key"](did)
    assert result.error is None
    assert result.did_document["id"] == did
