"""initial_schema

Create the Rally schema:
- Users and their external identity links (Google, LINE)
- Reference data (sports, prefectures, tags)
- Recruitments and their tags
- Stocks (bookmarks) and follow relationships

Revision ID: 3f1c9b7d2e40
Revises:
Create Date: 2026-10-19 10:12:44.318520

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9b7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "user_role": ("general", "admin"),
    "email_verification_status": ("unverified", "pending", "verified"),
    "authentication_provider": ("google", "line"),
    "recruitment_category": ("opponent", "individual", "member", "join", "other"),
    "recruitment_status": ("draft", "published", "closed"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _id() -> sa.Column:
    return sa.Column("id", sa.BigInteger(), sa.Identity(always=False), nullable=False)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _user_fk(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.BigInteger(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("unverified_email", sa.String(255), nullable=True),
        sa.Column("avatar", sa.Text(), nullable=False),
        sa.Column("role", _enum("user_role"), nullable=False),
        sa.Column("introduction", sa.Text(), nullable=True),
        sa.Column(
            "email_verification_status",
            _enum("email_verification_status"),
            nullable=False,
        ),
        sa.Column("password_digest", sa.String(255), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # AUTHENTICATIONS (one row per linked provider subject)
    # ========================================================================
    op.create_table(
        "authentications",
        _id(),
        sa.Column("provider", _enum("authentication_provider"), nullable=False),
        sa.Column("uid", sa.String(255), nullable=False),
        _user_fk("user_id"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider", "uid", name="uq_authentications_provider_uid"),
    )
    op.create_index("idx_authentications_user_id", "authentications", ["user_id"])

    # ========================================================================
    # REFERENCE DATA
    # ========================================================================
    for table in ("sports", "prefectures", "tags"):
        op.create_table(
            table,
            _id(),
            sa.Column("name", sa.String(50), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name", name=f"uq_{table}_name"),
        )

    # ========================================================================
    # RECRUITMENTS
    # ========================================================================
    op.create_table(
        "recruitments",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("category", _enum("recruitment_category"), nullable=False),
        sa.Column("venue", sa.String(255), nullable=True),
        sa.Column("venue_lat", sa.Double(), nullable=True),
        sa.Column("venue_lng", sa.Double(), nullable=True),
        sa.Column("start_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("closing_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("detail", sa.Text(), nullable=True),
        sa.Column(
            "sport_id", sa.BigInteger(), sa.ForeignKey("sports.id"), nullable=False
        ),
        sa.Column(
            "prefecture_id",
            sa.BigInteger(),
            sa.ForeignKey("prefectures.id"),
            nullable=False,
        ),
        sa.Column("status", _enum("recruitment_status"), nullable=False),
        _user_fk("user_id"),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_recruitments_user_id", "recruitments", ["user_id"])
    op.create_index("idx_recruitments_status_id", "recruitments", ["status", "id"])

    op.create_table(
        "recruitment_tags",
        _id(),
        sa.Column(
            "recruitment_id",
            sa.BigInteger(),
            sa.ForeignKey("recruitments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "tag_id",
            sa.BigInteger(),
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("recruitment_id", "tag_id", name="uq_recruitment_tags"),
    )

    # ========================================================================
    # ASSOCIATIONS
    # ========================================================================
    op.create_table(
        "stocks",
        _id(),
        _user_fk("user_id"),
        sa.Column(
            "recruitment_id",
            sa.BigInteger(),
            sa.ForeignKey("recruitments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "recruitment_id", name="uq_stocks_user_recruitment"
        ),
    )
    op.create_index("idx_stocks_recruitment_id", "stocks", ["recruitment_id"])

    op.create_table(
        "relationships",
        _id(),
        _user_fk("follower_id"),
        _user_fk("followed_id"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "followed_id", name="uq_relationships_edge"),
    )
    op.create_index("idx_relationships_followed_id", "relationships", ["followed_id"])

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("users", "authentications", "recruitments"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("recruitments", "authentications", "users"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("relationships")
    op.drop_table("stocks")
    op.drop_table("recruitment_tags")
    op.drop_table("recruitments")
    op.drop_table("tags")
    op.drop_table("prefectures")
    op.drop_table("sports")
    op.drop_table("authentications")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
