"""did:key error taxonomy.

Each error carries a ``code`` matching the DID resolution error names, so the
resolver can report failures as data.
"""

from typing import ClassVar


class DIDKeyError(ValueError):
    """Base class for did:key errors."""

    code: ClassVar[str] = "internalError"

    def __init__(self, message: str):
        """Initialize the error."""
        super().__init__(f"{self.code}: {message}")
        self.message = message


class InternalError(DIDKeyError):
    """Unexpected failure."""

    code = "internalError"


class MethodNotSupported(DIDKeyError):
    """The DID method is not "key"."""

    code = "methodNotSupported"


class InvalidDID(DIDKeyError):
    """The DID is not syntactically valid."""

    code = "invalidDid"


class InvalidMultibaseHeader(DIDKeyError):
    """The multibase value does not start with the base58btc marker."""

    code = "invalidMultibaseHeader"


class InvalidMultibase(DIDKeyError):
    """The multibase payload could not be decoded."""

    code = "invalidMultibase"


class InvalidMulticodecHeader(DIDKeyError):
    """The decoded bytes do not start with the expected multicodec prefix."""

    code = "invalidMulticodecHeader"


class UnsupportedPublicKeyType(DIDKeyError):
    """The key type is not one of the supported schemes."""

    code = "unsupportedPublicKeyType"


class InvalidPublicKeyLength(DIDKeyError):
    """The public key does not have the length expected by its scheme."""

    code = "invalidPublicKeyLength"


class InvalidSecretKey(DIDKeyError):
    """The secret key is not valid for its scheme."""

    code = "invalidSecretKey"
