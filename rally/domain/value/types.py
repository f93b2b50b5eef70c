"""Domain enums and value objects for Rally."""

from enum import Enum

from rally.domain.value.common import ValueObject


class EntityKind(str, Enum):
    """Entity kinds that can be addressed by an opaque id."""

    USER = "User"
    RECRUITMENT = "Recruitment"
    TAG = "Tag"
    SPORT = "Sport"
    PREFECTURE = "Prefecture"


class AuthProvider(str, Enum):
    """Supported external identity providers."""

    GOOGLE = "google"
    LINE = "line"


class UserRole(str, Enum):
    GENERAL = "general"
    ADMIN = "admin"


class EmailVerificationStatus(str, Enum):
    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"


class RecruitmentCategory(str, Enum):
    """What a recruitment is looking for."""

    OPPONENT = "opponent"
    INDIVIDUAL = "individual"
    MEMBER = "member"
    JOIN = "join"
    OTHER = "other"


class RecruitmentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"


class IdentityClaims(ValueObject):
    """Verified claims extracted from a provider ID token.

    `name` and `email` may be missing; the linking flow then fails the login.
    """

    sub: str
    name: str | None = None
    email: str | None = None
    picture: str | None = None
