"""Multibase values: an encoding character followed by the encoded bytes."""

import base64
import binascii
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Literal, Union

import base58


class MultibaseEncoder(ABC):
    """One multibase encoding, identified by name and leading character."""

    name: ClassVar[str]
    character: ClassVar[str]

    @abstractmethod
    def encode(self, value: bytes) -> str:
        """Encode bytes, without the leading character."""

    @abstractmethod
    def decode(self, value: str) -> bytes:
        """Decode a value that has had its leading character removed.

        Raises:
            ValueError: the value is not valid in this encoding
        """


class Base58BtcEncoder(MultibaseEncoder):
    """Bitcoin alphabet base58, used for did:key identifiers."""

    name = "base58btc"
    character = "z"

    def encode(self, value: bytes) -> str:
        return base58.b58encode(value).decode("ascii")

    def decode(self, value: str) -> bytes:
        return base58.b58decode(value)


class Base64UrlEncoder(MultibaseEncoder):
    """URL-safe base64 without padding, as used by JOSE."""

    name = "base64url"
    character = "u"

    def encode(self, value: bytes) -> str:
        return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")

    def decode(self, value: str) -> bytes:
        value += "=" * (-len(value) % 4)
        try:
            return base64.urlsafe_b64decode(value)
        except binascii.Error as err:
            raise ValueError("Invalid base64url value") from err


class Encoding(Enum):
    """Supported multibase encodings."""

    base58btc = Base58BtcEncoder()
    base64url = Base64UrlEncoder()

    @classmethod
    def from_name(cls, name: str) -> MultibaseEncoder:
        """Look up an encoder by its multibase name."""
        for member in cls:
            if member.value.name == name:
                return member.value
        raise ValueError(f"Unsupported encoding: {name}")

    @classmethod
    def from_character(cls, character: str) -> MultibaseEncoder:
        """Look up an encoder by its leading character."""
        for member in cls:
            if member.value.character == character:
                return member.value
        raise ValueError(f"Unsupported multibase character: {character!r}")


EncodingStr = Literal["base58btc", "base64url"]


def encode(value: bytes, encoding: Union[Encoding, EncodingStr]) -> str:
    """Encode bytes as a multibase value in the given encoding."""
    if isinstance(encoding, Encoding):
        encoder = encoding.value
    else:
        encoder = Encoding.from_name(encoding)
    return encoder.character + encoder.encode(value)


def decode(value: str) -> bytes:
    """Decode a multibase value, picking the encoding from its first character.

    Raises:
        ValueError: the value is empty, uses an unsupported encoding, or is
            not valid in its encoding
    """
    if not value:
        raise ValueError("Empty multibase value")
    return Encoding.from_character(value[0]).decode(value[1:])
