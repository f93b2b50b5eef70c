"""SQLAlchemy table definitions for Rally.

Repositories use these Core tables with manual mappers; they match the
schema created by the Alembic migrations.
"""

from enum import Enum as PyEnum

from sqlalchemy import (
    BigInteger,
    Column,
    Double,
    Enum,
    ForeignKey,
    Identity,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

from rally.domain.value import (
    AuthProvider,
    EmailVerificationStatus,
    RecruitmentCategory,
    RecruitmentStatus,
    UserRole,
)

metadata = MetaData()


def _pg_enum(enum_class: type[PyEnum], name: str) -> Enum:
    """Native PostgreSQL enum storing the Python enum values."""
    return Enum(
        enum_class,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        create_type=False,
    )


def _id_column() -> Column:
    return Column("id", BigInteger, Identity(always=False), primary_key=True)


def _timestamps() -> list[Column]:
    return [
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        Column(
            "updated_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
    ]


# ============================================================================
# USERS
# ============================================================================
users_table = Table(
    "users",
    metadata,
    _id_column(),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("unverified_email", String(255), nullable=True),
    Column("avatar", Text, nullable=False),
    Column("role", _pg_enum(UserRole, "user_role"), nullable=False),
    Column("introduction", Text, nullable=True),
    Column(
        "email_verification_status",
        _pg_enum(EmailVerificationStatus, "email_verification_status"),
        nullable=False,
    ),
    Column("password_digest", String(255), nullable=False),
    *_timestamps(),
)

# ============================================================================
# AUTHENTICATIONS (external identity links)
# ============================================================================
authentications_table = Table(
    "authentications",
    metadata,
    _id_column(),
    Column("provider", _pg_enum(AuthProvider, "authentication_provider"), nullable=False),
    Column("uid", String(255), nullable=False),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    *_timestamps(),
    UniqueConstraint("provider", "uid", name="uq_authentications_provider_uid"),
)

Index("idx_authentications_user_id", authentications_table.c.user_id)

# ============================================================================
# REFERENCE DATA
# ============================================================================
sports_table = Table(
    "sports",
    metadata,
    _id_column(),
    Column("name", String(50), nullable=False, unique=True),
)

prefectures_table = Table(
    "prefectures",
    metadata,
    _id_column(),
    Column("name", String(50), nullable=False, unique=True),
)

tags_table = Table(
    "tags",
    metadata,
    _id_column(),
    Column("name", String(50), nullable=False, unique=True),
)

# ============================================================================
# RECRUITMENTS
# ============================================================================
recruitments_table = Table(
    "recruitments",
    metadata,
    _id_column(),
    Column("title", String(255), nullable=False),
    Column(
        "category", _pg_enum(RecruitmentCategory, "recruitment_category"), nullable=False
    ),
    Column("venue", String(255), nullable=True),
    Column("venue_lat", Double, nullable=True),
    Column("venue_lng", Double, nullable=True),
    Column("start_at", TIMESTAMP(timezone=True), nullable=True),
    Column("closing_at", TIMESTAMP(timezone=True), nullable=True),
    Column("detail", Text, nullable=True),
    Column("sport_id", BigInteger, ForeignKey("sports.id"), nullable=False),
    Column("prefecture_id", BigInteger, ForeignKey("prefectures.id"), nullable=False),
    Column("status", _pg_enum(RecruitmentStatus, "recruitment_status"), nullable=False),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    *_timestamps(),
)

Index("idx_recruitments_user_id", recruitments_table.c.user_id)
Index("idx_recruitments_status_id", recruitments_table.c.status, recruitments_table.c.id)

recruitment_tags_table = Table(
    "recruitment_tags",
    metadata,
    _id_column(),
    Column(
        "recruitment_id",
        BigInteger,
        ForeignKey("recruitments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "tag_id",
        BigInteger,
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
    ),
    UniqueConstraint("recruitment_id", "tag_id", name="uq_recruitment_tags"),
)

# ============================================================================
# ASSOCIATIONS
# ============================================================================
stocks_table = Table(
    "stocks",
    metadata,
    _id_column(),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "recruitment_id",
        BigInteger,
        ForeignKey("recruitments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "recruitment_id", name="uq_stocks_user_recruitment"),
)

Index("idx_stocks_recruitment_id", stocks_table.c.recruitment_id)

relationships_table = Table(
    "relationships",
    metadata,
    _id_column(),
    Column(
        "follower_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "followed_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("follower_id", "followed_id", name="uq_relationships_edge"),
)

Index("idx_relationships_followed_id", relationships_table.c.followed_id)
