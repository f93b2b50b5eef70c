"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


# ============================================================================
# OPAQUE IDS
# ============================================================================


class IdDecodeError(ValidationError):
    """Opaque id could not be decoded."""

    pass


class MalformedIdError(IdDecodeError):
    """Token is not base64url or has no kind separator."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Malformed opaque id: {token!r}")


class NotANumberIdError(IdDecodeError):
    """Token decodes but the id part is not an integer."""

    def __init__(self, token: str, value: str):
        self.token = token
        self.value = value
        super().__init__(f"Opaque id {token!r} does not carry a number: {value!r}")


class IdKindMismatchError(IdDecodeError):
    """Token was produced for a different entity kind."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} id, got a {actual} id")


# ============================================================================
# PAGINATION
# ============================================================================


class PaginationError(ValidationError):
    """Invalid pagination arguments."""

    pass


class MissingLimitError(PaginationError):
    def __init__(self) -> None:
        super().__init__("`after` requires `first`")


class MissingParametersError(PaginationError):
    def __init__(self) -> None:
        super().__init__("`first` is required")


class EmptyCursorError(PaginationError):
    def __init__(self) -> None:
        super().__init__("`after` must not be empty")


class BadCursorError(PaginationError):
    def __init__(self, cursor: str):
        self.cursor = cursor
        super().__init__(f"Invalid cursor: {cursor!r}")


class BadLimitError(PaginationError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"`first` must be positive, got {limit}")


# ============================================================================
# IDENTITY LINKING
# ============================================================================


class IdentityLinkError(DomainError):
    """A login attempt ended before a session was issued.

    Attributes:
        reason: Machine-readable reason code
        state: State the attempt was in when it stopped
    """

    def __init__(self, reason: str, state: str, message: str | None = None):
        self.reason = reason
        self.state = state
        super().__init__(message or reason)


class IdentityLinkRejected(IdentityLinkError):
    """Client-side problem: bad or missing callback input, duplicate email."""

    pass


class IdentityLinkFailed(IdentityLinkError):
    """Server-side problem: provider error, bad claims, store error."""

    pass


class DuplicateAuthenticationError(DomainError):
    """`(provider, uid)` is already linked to a user."""

    def __init__(self, provider: str, uid: str):
        self.provider = provider
        self.uid = uid
        super().__init__(f"{provider} subject {uid} is already linked")
