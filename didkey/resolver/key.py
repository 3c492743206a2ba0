"""DID Key Resolver."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import base58
from pydid import DID, InvalidDIDError

from didkey import codec
from didkey.alg import KeyAlgorithm
from didkey.alg.ed25519 import X25519_2019_CONTEXT
from didkey.errors import DIDKeyError, InvalidDID, InternalError, MethodNotSupported
from didkey.multiformats.multicodec import SupportedCodecs
from didkey.resolver import DIDMethodNotSupported, DIDResolutionError, DIDResolver

LOG = logging.getLogger(__name__)

DID_CONTEXT = "https://www.w3.org/ns/did/v1"
JWS_2020_CONTEXT = "https://w3id.org/security/suites/jws-2020/v1"
DID_LD_JSON = "application/did+ld+json"

VERIFICATION_RELATIONSHIPS = (
    "authentication",
    "assertionMethod",
    "capabilityDelegation",
    "capabilityInvocation",
)


@dataclass
class DIDResolutionResult:
    """The outcome of resolving a DID.

    On failure, did_document is None and the metadata holds error and message.
    """

    did_resolution_metadata: Dict[str, Any]
    did_document_metadata: Dict[str, Any] = field(default_factory=dict)
    did_document: Optional[Dict[str, Any]] = None

    @classmethod
    def from_error(cls, error: DIDKeyError) -> "DIDResolutionResult":
        """Create an error result."""
        return cls({"error": error.code, "message": error.message})

    @property
    def error(self) -> Optional[str]:
        """Return the error code, if any."""
        return self.did_resolution_metadata.get("error")

    def serialize(self) -> dict:
        """Serialize the result to its JSON form."""
        return {
            "didResolutionMetadata": self.did_resolution_metadata,
            "didDocumentMetadata": self.did_document_metadata,
            "didDocument": self.did_document,
        }


def parse_did(did: str) -> DID:
    """Parse a did:key DID."""
    try:
        parsed = DID(did)
    except InvalidDIDError as err:
        raise InvalidDID(f"Invalid DID: {did}") from err

    if parsed.method != "key":
        raise MethodNotSupported(f'The method must be "key", but "{parsed.method}"')

    return parsed


def create_did_document(parsed: DID) -> dict:
    """Create the DID document for a parsed did:key."""
    did = str(parsed)
    multikey = parsed.method_specific_id
    alg = KeyAlgorithm.from_multibase(multikey)
    public_key = alg.public_key_from_multibase(multikey)

    id = f"{did}#{multikey}"
    doc: Dict[str, Any] = {
        "@context": [DID_CONTEXT, JWS_2020_CONTEXT],
        "id": did,
        "verificationMethod": [
            {
                "id": id,
                "type": "JsonWebKey2020",
                "controller": did,
                "publicKeyJwk": alg.public_key_jwk_from_public_key(public_key),
            }
        ],
        **{rel: [id] for rel in VERIFICATION_RELATIONSHIPS},
    }

    x25519_key = alg.key_agreement_public_key(public_key)
    if x25519_key is not None:
        x25519_multikey = codec.multibase_from_public_key(
            SupportedCodecs.x25519_pub.value, x25519_key
        )
        contexts: List[str] = doc["@context"]
        contexts.append(X25519_2019_CONTEXT)
        doc["keyAgreement"] = [
            {
                "id": f"{did}#{x25519_multikey}",
                "type": "X25519KeyAgreementKey2019",
                "controller": did,
                "publicKeyBase58": base58.b58encode(x25519_key).decode(),
            }
        ]

    return doc


def resolve(
    did: str,
    parsed: Optional[DID] = None,
    resolver: Optional[DIDResolver] = None,
    options: Optional[dict] = None,
) -> DIDResolutionResult:
    """Resolve a did:key.

    Failures are returned in the result metadata rather than raised.

    Args:
        did: The DID to resolve
        parsed: The DID, if already parsed by the caller
        resolver: The calling resolver; unused, since did:key needs no lookups
        options: Resolution options; unused

    Returns:
        The DID resolution result
    """
    try:
        if parsed is None:
            parsed = parse_did(did)
        elif parsed.method != "key":
            raise MethodNotSupported(
                f'The method must be "key", but "{parsed.method}"'
            )
        doc = create_did_document(parsed)
    except DIDKeyError as err:
        LOG.debug("Failed to resolve %s: %s", did, err)
        return DIDResolutionResult.from_error(err)
    except Exception as err:
        LOG.exception("Unexpected error resolving %s", did)
        return DIDResolutionResult.from_error(InternalError(str(err)))

    return DIDResolutionResult({"contentType": DID_LD_JSON}, {}, doc)


class DIDKey(DIDResolver):
    """did:key resolver."""

    def __call__(
        self,
        did: str,
        parsed: Optional[DID] = None,
        resolver: Optional[DIDResolver] = None,
        options: Optional[dict] = None,
    ) -> DIDResolutionResult:
        """Resolve a did:key to a resolution result."""
        return resolve(did, parsed, resolver, options)

    async def is_resolvable(self, did: str) -> bool:
        """Check to see if DID is resolvable by this resolver."""
        return did.startswith("did:key:")

    async def resolve(self, did: str) -> dict:
        """Resolve a did:key."""
        result = resolve(did)
        if result.did_document is None:
            message = result.did_resolution_metadata.get("message")
            if result.error == MethodNotSupported.code:
                raise DIDMethodNotSupported(message)
            raise DIDResolutionError(f"{result.error}: {message}")

        return result.did_document
