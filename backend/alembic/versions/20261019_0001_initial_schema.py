"""Create users, social graph, notification and review tables."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

TIMESTAMP_DEFAULT = sa.text("CURRENT_TIMESTAMP")
ACTIVE_USER_PREDICATE = sa.text("deleted_at IS NULL")


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=TIMESTAMP_DEFAULT,
        nullable=False,
    )


def _user_fk(column: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint([column], ["users.id"], ondelete="CASCADE")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("serial_number", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column(
            "provider",
            sa.String(length=20),
            server_default=sa.text("'local'"),
            nullable=False,
        ),
        sa.Column("provider_key", sa.String(length=255), nullable=True),
        sa.Column("nickname", sa.String(length=32), nullable=True),
        sa.Column("profile", sa.Text(), nullable=True),
        sa.Column("interest1", sa.String(length=50), nullable=True),
        sa.Column("interest2", sa.String(length=50), nullable=True),
        sa.Column("suspend_expire_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("serial_number"),
        sa.UniqueConstraint("id"),
    )
    op.create_index(
        "ux_users_email_active",
        "users",
        ["email"],
        unique=True,
        postgresql_where=ACTIVE_USER_PREDICATE,
        sqlite_where=ACTIVE_USER_PREDICATE,
    )
    op.create_index(
        "ux_users_nickname_active",
        "users",
        ["nickname"],
        unique=True,
        postgresql_where=ACTIVE_USER_PREDICATE,
        sqlite_where=ACTIVE_USER_PREDICATE,
    )

    op.create_table(
        "profile_images",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("image_key", sa.String(length=255), nullable=True),
        _created_at(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_profile_images_user_deleted_at",
        "profile_images",
        ["user_id", "deleted_at"],
        unique=False,
    )

    op.create_table(
        "follows",
        sa.Column("follower_id", sa.String(length=36), nullable=False),
        sa.Column("followee_id", sa.String(length=36), nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "follower_id <> followee_id",
            name="ck_follows_no_self_follow",
        ),
        _user_fk("follower_id"),
        _user_fk("followee_id"),
        sa.PrimaryKeyConstraint("follower_id", "followee_id"),
    )
    op.create_index(
        "ix_follows_followee_created_at",
        "follows",
        ["followee_id", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_follows_follower_created_at",
        "follows",
        ["follower_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "user_blocks",
        sa.Column("blocker_id", sa.String(length=36), nullable=False),
        sa.Column("blocked_id", sa.String(length=36), nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "blocker_id <> blocked_id",
            name="ck_user_blocks_no_self_block",
        ),
        _user_fk("blocker_id"),
        _user_fk("blocked_id"),
        sa.PrimaryKeyConstraint("blocker_id", "blocked_id"),
    )
    op.create_index(
        "ix_user_blocks_blocker_created_at",
        "user_blocks",
        ["blocker_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "email_verifications",
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("code", sa.String(length=12), nullable=False),
        sa.Column(
            "is_verified",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("email"),
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        _user_fk("author_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_reviews_author_created_at",
        "reviews",
        ["author_id", "created_at"],
        unique=False,
    )

    for table_name in ("review_bookmarks", "review_shares", "review_likes"):
        op.create_table(
            table_name,
            sa.Column("user_id", sa.String(length=36), nullable=False),
            sa.Column("review_id", sa.Integer(), nullable=False),
            _created_at(),
            _user_fk("user_id"),
            sa.ForeignKeyConstraint(["review_id"], ["reviews.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("user_id", "review_id"),
        )
    op.create_index(
        "ix_review_likes_review_id",
        "review_likes",
        ["review_id"],
        unique=False,
    )

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("review_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.String(length=36), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["review_id"], ["reviews.id"], ondelete="CASCADE"),
        _user_fk("author_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_comments_review_created_at",
        "comments",
        ["review_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender_id", sa.String(length=36), nullable=False),
        sa.Column("recipient_id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.SmallInteger(), nullable=False),
        sa.Column("review_id", sa.Integer(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        _user_fk("sender_id"),
        _user_fk("recipient_id"),
        sa.ForeignKeyConstraint(["review_id"], ["reviews.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notifications_recipient_created_at",
        "notifications",
        ["recipient_id", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_notifications_recipient_read_at",
        "notifications",
        ["recipient_id", "read_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_recipient_read_at", table_name="notifications")
    op.drop_index("ix_notifications_recipient_created_at", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_comments_review_created_at", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_review_likes_review_id", table_name="review_likes")
    for table_name in ("review_likes", "review_shares", "review_bookmarks"):
        op.drop_table(table_name)
    op.drop_index("ix_reviews_author_created_at", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("email_verifications")
    op.drop_index("ix_user_blocks_blocker_created_at", table_name="user_blocks")
    op.drop_table("user_blocks")
    op.drop_index("ix_follows_follower_created_at", table_name="follows")
    op.drop_index("ix_follows_followee_created_at", table_name="follows")
    op.drop_table("follows")
    op.drop_index("ix_profile_images_user_deleted_at", table_name="profile_images")
    op.drop_table("profile_images")
    op.drop_index("ux_users_nickname_active", table_name="users")
    op.drop_index("ux_users_email_active", table_name="users")
    op.drop_table("users")
