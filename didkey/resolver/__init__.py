"""DID resolver interface and method registry."""

from abc import ABC, abstractmethod
from typing import Dict, Mapping

from pydid import (
    DID,
    DIDDocument,
    DIDUrl,
    InvalidDIDError,
    Resource,
    VerificationMethod,
)


class DIDResolutionError(Exception):
    """Represents an error from a DID Resolver."""


class DIDMethodNotSupported(DIDResolutionError):
    """Represents a DID method not supported error."""


class DIDResolver(ABC):
    """DID Resolver interface."""

    @abstractmethod
    async def resolve(self, did: str) -> dict:
        """Resolve a DID to its document."""

    @abstractmethod
    async def is_resolvable(self, did: str) -> bool:
        """Check to see if a DID is resolvable."""

    async def resolve_and_parse(self, did: str) -> DIDDocument:
        """Resolve a DID and parse the DID document."""
        return DIDDocument.deserialize(await self.resolve(did))

    async def resolve_and_dereference(self, did_url: str) -> Resource:
        """Resolve a DID URL and dereference the identifier."""
        url = DIDUrl.parse(did_url)
        if not url.did:
            raise DIDResolutionError("Invalid DID URL; must be absolute")

        doc = await self.resolve_and_parse(str(url.did))
        return doc.dereference(url)

    async def resolve_and_dereference_verification_method(
        self, did_url: str
    ) -> VerificationMethod:
        """Dereference a DID URL that must point at a verification method."""
        resource = await self.resolve_and_dereference(did_url)
        if not isinstance(resource, VerificationMethod):
            raise DIDResolutionError("Resource is not a verification method")

        return resource


class RegistryResolver(DIDResolver):
    """Delegates to the resolver registered for the DID's method.

    The registry maps method names, such as "key", to resolvers; this is the
    shape returned by DIDKeyDriver.get_resolver_registry.
    """

    def __init__(self, registry: Mapping[str, DIDResolver]):
        """Initialize the resolver."""
        self.registry: Dict[str, DIDResolver] = dict(registry)

    def register(self, method: str, resolver: DIDResolver):
        """Add a resolver for a DID method."""
        self.registry[method] = resolver

    def _resolver_for(self, did: str) -> DIDResolver:
        try:
            method = DID(did).method
        except InvalidDIDError as err:
            raise DIDResolutionError(f"Invalid DID: {did}") from err

        resolver = self.registry.get(method)
        if not resolver:
            raise DIDMethodNotSupported(f"No resolver found for DID {did}")
        return resolver

    async def is_resolvable(self, did: str) -> bool:
        """Check to see if a DID is resolvable."""
        try:
            resolver = self._resolver_for(did)
        except DIDResolutionError:
            return False
        return await resolver.is_resolvable(did)

    async def resolve(self, did: str) -> dict:
        """Resolve a DID with the resolver for its method."""
        return await self._resolver_for(did).resolve(did)
