"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class OIDCError(ProviderError):
    """OpenID Connect provider error."""

    pass


class DiscoveryError(OIDCError):
    """Provider metadata or signing keys could not be fetched."""

    pass


class TokenExchangeError(OIDCError):
    """Authorization code could not be exchanged for tokens."""

    pass


class IdTokenVerificationError(OIDCError):
    """ID token failed signature, issuer, audience, expiry or nonce checks."""

    pass
