"""Initial schema."""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

STYLE_LIST_COLUMNS = (
    "common_words",
    "emoticons_used",
    "communication_patterns",
    "punctuation_style",
    "greeting_patterns",
    "farewell_patterns",
    "question_style",
    "response_style",
    "typical_phrases",
    "message_timing",
)


def upgrade() -> None:
    op.create_table(
        "memory_profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("relationship", sa.String(length=255), nullable=True),
        sa.Column("training_status", sa.String(length=32), nullable=False),
        sa.Column("total_messages", sa.Integer(), nullable=False),
        sa.Column("date_range_start", sa.String(length=10), nullable=True),
        sa.Column("date_range_end", sa.String(length=10), nullable=True),
        sa.Column("average_message_length", sa.Integer(), nullable=True),
        sa.Column("capitalization_style", sa.String(length=32), nullable=True),
        *(sa.Column(name, sa.JSON(), nullable=False) for name in STYLE_LIST_COLUMNS),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_memory_profiles_training_status", "memory_profiles", ["training_status"], unique=False)

    op.create_table(
        "training_messages",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "memory_profile_id",
            sa.String(length=36),
            sa.ForeignKey("memory_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("original_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("encrypted_content", sa.Text(), nullable=False),
        sa.Column("message_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_training_messages_memory_profile_id", "training_messages", ["memory_profile_id"], unique=False)
    op.create_index("ix_training_messages_original_timestamp", "training_messages", ["original_timestamp"], unique=False)


def downgrade() -> None:
    op.drop_table("training_messages")
    op.drop_table("memory_profiles")
