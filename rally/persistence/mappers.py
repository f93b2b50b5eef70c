"""Mappers between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Mapping

from rally.domain.model import (
    Authentication,
    Prefecture,
    Recruitment,
    Sport,
    Tag,
    User,
)
from rally.domain.value import (
    AuthenticationId,
    AuthProvider,
    EmailVerificationStatus,
    PrefectureId,
    RecruitmentCategory,
    RecruitmentId,
    RecruitmentStatus,
    SportId,
    TagId,
    UserId,
    UserRole,
)


def row_to_user(row: Mapping[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        name=row["name"],
        email=row["email"],
        unverified_email=row.get("unverified_email"),
        avatar=row["avatar"],
        role=UserRole(row["role"]),
        introduction=row.get("introduction"),
        email_verification_status=EmailVerificationStatus(
            row["email_verification_status"]
        ),
        password_digest=row["password_digest"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> dict[str, Any]:
    """Convert User to an insert dict; the ID is left to the database."""
    return user.model_dump(exclude={"id"})


def row_to_authentication(row: Mapping[str, Any]) -> Authentication:
    return Authentication(
        id=AuthenticationId(row["id"]),
        provider=AuthProvider(row["provider"]),
        uid=row["uid"],
        user_id=UserId(row["user_id"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def authentication_to_dict(authentication: Authentication) -> dict[str, Any]:
    return authentication.model_dump(exclude={"id"})


def row_to_recruitment(row: Mapping[str, Any]) -> Recruitment:
    """Convert database row to Recruitment domain model."""
    return Recruitment(
        id=RecruitmentId(row["id"]),
        title=row["title"],
        category=RecruitmentCategory(row["category"]),
        venue=row.get("venue"),
        venue_lat=row.get("venue_lat"),
        venue_lng=row.get("venue_lng"),
        start_at=row.get("start_at"),
        closing_at=row.get("closing_at"),
        detail=row.get("detail"),
        sport_id=SportId(row["sport_id"]),
        prefecture_id=PrefectureId(row["prefecture_id"]),
        status=RecruitmentStatus(row["status"]),
        user_id=UserId(row["user_id"]),
        published_at=row.get("published_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_tag(row: Mapping[str, Any]) -> Tag:
    return Tag(id=TagId(row["id"]), name=row["name"])


def row_to_sport(row: Mapping[str, Any]) -> Sport:
    return Sport(id=SportId(row["id"]), name=row["name"])


def row_to_prefecture(row: Mapping[str, Any]) -> Prefecture:
    return Prefecture(id=PrefectureId(row["id"]), name=row["name"])
