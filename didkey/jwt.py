"""JSON Web Tokens issued by did:key DIDs."""

import binascii
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from didkey.alg import Issuer, KeyAlgorithm
from didkey.errors import DIDKeyError
from didkey.multiformats.multibase import Base64UrlEncoder
from didkey.resolver.key import DIDResolutionResult, parse_did, resolve

try:
    from authlib.jose import JsonWebKey, JsonWebSignature, JWTClaims
    from authlib.jose.errors import JoseError
except ImportError as err:
    raise ImportError("JWT support requires authlib to be installed") from err

LOG = logging.getLogger(__name__)

SUPPORTED_ALGS = ("EdDSA", "ES256K", "ES256")
NBF_SKEW = 300

_base64url = Base64UrlEncoder()


class JWTError(Exception):
    """Represents an error from JWT handling."""


class JWTVerificationError(JWTError):
    """Represents a JWT that failed verification."""


@dataclass
class VerifiedJWT:
    """A JWT that passed verification."""

    payload: Dict[str, Any]
    header: Dict[str, Any]
    issuer: str
    signer: Dict[str, Any]
    jwt: str
    did_resolution_result: DIDResolutionResult


def b64url(value: Union[bytes, str]) -> str:
    """Encode a string or bytes value as unpadded base64-URL."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return _base64url.encode(value)


def _canonical(value: Mapping[str, Any]) -> str:
    return b64url(json.dumps(value, sort_keys=True, separators=(",", ":")))


def create_jwt(
    payload: Mapping[str, Any],
    issuer: Issuer,
    header: Optional[Mapping[str, Any]] = None,
) -> str:
    """Create a signed JWT.

    The iss claim and alg header are taken from the issuer.

    Args:
        payload: The JWT claims
        issuer: The issuer, as returned by DIDKeyDriver.issuer_from_key_pair
        header: Additional header values

    Returns:
        The compact serialized JWT
    """
    if issuer.alg not in SUPPORTED_ALGS:
        raise JWTError(f"Unsupported algorithm: {issuer.alg}")

    header = {"typ": "JWT", **(header or {}), "alg": issuer.alg}
    payload = {**payload, "iss": issuer.did}
    signing_input = f"{_canonical(header)}.{_canonical(payload)}"
    signature = issuer.signer(signing_input.encode("ascii"))
    return f"{signing_input}.{b64url(signature)}"


def decode_jwt(token: str) -> Tuple[Dict[str, Any], Dict[str, Any], bytes]:
    """Decode a JWT without verifying it.

    Returns:
        The header, the payload and the signature bytes
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise JWTError("Incorrect format JWT")

    try:
        header = json.loads(_base64url.decode(parts[0]))
        payload = json.loads(_base64url.decode(parts[1]))
        signature = _base64url.decode(parts[2])
    except (ValueError, binascii.Error) as err:
        raise JWTError("Incorrect format JWT") from err

    if not isinstance(header, dict) or not isinstance(payload, dict):
        raise JWTError("Incorrect format JWT")

    return header, payload, signature


def _check_claims(
    payload: Dict[str, Any],
    header: Dict[str, Any],
    audience: Optional[str],
    now: int,
    skew: int,
):
    if "aud" in payload and audience is None:
        raise JWTVerificationError(
            "JWT audience is required but no audience was given"
        )

    options = {"aud": {"values": [audience]}} if audience is not None else {}
    claims = JWTClaims(payload, header, options=options)
    try:
        claims.validate(now=now, leeway=skew)
    except JoseError as err:
        raise JWTVerificationError(f"JWT claims are invalid: {err}") from err

    # Not every authlib release rejects a future iat
    if "iat" in payload and payload["iat"] > now + skew:
        raise JWTVerificationError(
            f"JWT not valid yet (issued in the future) iat: {payload['iat']}"
        )


def verify_jwt(
    token: str,
    audience: Optional[str] = None,
    now: Optional[int] = None,
    skew: int = NBF_SKEW,
) -> VerifiedJWT:
    """Verify a JWT issued by a did:key.

    The issuer DID is resolved to find the signing key; the signature is then
    checked with authlib.

    Args:
        token: The compact serialized JWT
        audience: The expected audience, required if the JWT has an aud claim
        now: The time to check exp, nbf and iat against; defaults to now
        skew: Allowed clock skew in seconds

    Returns:
        The verified JWT
    """
    try:
        header, payload, _ = decode_jwt(token)
    except JWTError as err:
        raise JWTVerificationError(str(err)) from err

    alg = header.get("alg")
    if alg not in SUPPORTED_ALGS:
        raise JWTVerificationError(f"Unsupported algorithm: {alg}")

    issuer = payload.get("iss")
    if not isinstance(issuer, str):
        raise JWTVerificationError("JWT iss is required")

    try:
        expected = KeyAlgorithm.from_multibase(parse_did(issuer).method_specific_id)
    except DIDKeyError as err:
        raise JWTVerificationError(f"Unable to resolve issuer {issuer}") from err
    if expected.name != alg:
        raise JWTVerificationError(
            f"JWT alg {alg} does not match issuer key type {expected.name}"
        )

    result = resolve(issuer)
    if result.did_document is None:
        raise JWTVerificationError(
            f"Unable to resolve issuer {issuer}: {result.did_resolution_metadata}"
        )

    jws = JsonWebSignature(algorithms=list(SUPPORTED_ALGS))
    for vm in result.did_document["verificationMethod"]:
        if header.get("kid") and header["kid"] != vm["id"]:
            continue
        key = JsonWebKey.import_key(vm["publicKeyJwk"])
        try:
            jws.deserialize_compact(token, key)
        except JoseError as err:
            LOG.debug("Signature check with %s failed: %s", vm["id"], err)
            continue
        signer = vm
        break
    else:
        raise JWTVerificationError("invalid_signature: no matching public key found")

    now = int(time.time()) if now is None else now
    _check_claims(payload, header, audience, now, skew)

    return VerifiedJWT(payload, header, issuer, signer, token, result)
