"""
迁移 0001: 创建用户、文档、版本、任务、审校与术语表

Revision ID: 0001
Revises:
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_json = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _timestamps(*, with_updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if with_updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False))
    return cols


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("permission_level", sa.String(32), nullable=False),
        sa.Column("api_token_sha256", sa.String(64), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
        sa.UniqueConstraint("api_token_sha256", name=op.f("uq_users_api_token_sha256")),
    )

    op.create_table(
        "documents",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("original_url", sa.String(500), nullable=False),
        sa.Column("source_lang", sa.String(16), nullable=False),
        sa.Column("target_lang", sa.String(16), nullable=False),
        sa.Column("created_by", sa.String(36), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("category_id", sa.String(64), nullable=True),
        sa.Column("current_version_id", sa.String(36), nullable=True),
        sa.Column("estimated_length", sa.Integer(), nullable=True),
        sa.Column("last_modified_by", sa.String(36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_documents")),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name=op.f("fk_documents_created_by_users")
        ),
        sa.ForeignKeyConstraint(
            ["last_modified_by"],
            ["users.id"],
            name=op.f("fk_documents_last_modified_by_users"),
        ),
    )
    op.create_index("ix_documents_status", "documents", ["status"])
    op.create_index(op.f("ix_documents_category_id"), "documents", ["category_id"])

    op.create_table(
        "document_versions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("document_id", sa.String(36), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("version_type", sa.String(32), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(36), nullable=False),
        sa.Column("is_final", sa.Boolean(), nullable=False),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_document_versions")),
        sa.ForeignKeyConstraint(
            ["document_id"],
            ["documents.id"],
            name=op.f("fk_document_versions_document_id_documents"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.id"],
            name=op.f("fk_document_versions_created_by_users"),
        ),
    )
    op.create_index(
        "ix_document_versions_document_number",
        "document_versions",
        ["document_id", "version_number"],
    )
    op.create_index(
        "uq_document_versions_single_final",
        "document_versions",
        ["document_id"],
        unique=True,
        sqlite_where=sa.text("is_final = 1"),
        postgresql_where=sa.text("is_final IS TRUE"),
    )

    op.create_table(
        "translation_tasks",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("document_id", sa.String(36), nullable=False),
        sa.Column("translator_id", sa.String(36), nullable=False),
        sa.Column("assigned_by", sa.String(36), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_activity_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_translation_tasks")),
        sa.ForeignKeyConstraint(
            ["document_id"],
            ["documents.id"],
            name=op.f("fk_translation_tasks_document_id_documents"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["translator_id"],
            ["users.id"],
            name=op.f("fk_translation_tasks_translator_id_users"),
        ),
        sa.ForeignKeyConstraint(
            ["assigned_by"],
            ["users.id"],
            name=op.f("fk_translation_tasks_assigned_by_users"),
        ),
        sa.UniqueConstraint(
            "document_id",
            "translator_id",
            name="uq_translation_tasks_document_translator",
        ),
    )
    op.create_index(
        "ix_translation_tasks_document_status",
        "translation_tasks",
        ["document_id", "status"],
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("document_id", sa.String(36), nullable=False),
        sa.Column("document_version_id", sa.String(36), nullable=False),
        sa.Column("reviewer_id", sa.String(36), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("checklist", _json, nullable=False),
        sa.Column("is_complete", sa.Boolean(), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("final_approval_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_reviews")),
        sa.ForeignKeyConstraint(
            ["document_id"],
            ["documents.id"],
            name=op.f("fk_reviews_document_id_documents"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["document_version_id"],
            ["document_versions.id"],
            name=op.f("fk_reviews_document_version_id_document_versions"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["reviewer_id"], ["users.id"], name=op.f("fk_reviews_reviewer_id_users")
        ),
        sa.UniqueConstraint(
            "document_id", "document_version_id", name="uq_reviews_document_version"
        ),
    )

    op.create_table(
        "terms",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("source_term", sa.String(255), nullable=False),
        sa.Column("target_term", sa.String(255), nullable=False),
        sa.Column("source_lang", sa.String(16), nullable=False),
        sa.Column("target_lang", sa.String(16), nullable=False),
        sa.Column("created_by", sa.String(36), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_terms")),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name=op.f("fk_terms_created_by_users")
        ),
        sa.UniqueConstraint(
            "source_term", "source_lang", "target_lang", name="uq_terms_source_langs"
        ),
    )


def downgrade() -> None:
    op.drop_table("terms")
    op.drop_table("reviews")
    op.drop_index("ix_translation_tasks_document_status", table_name="translation_tasks")
    op.drop_table("translation_tasks")
    op.drop_index("uq_document_versions_single_final", table_name="document_versions")
    op.drop_index("ix_document_versions_document_number", table_name="document_versions")
    op.drop_table("document_versions")
    op.drop_index(op.f("ix_documents_category_id"), table_name="documents")
    op.drop_index("ix_documents_status", table_name="documents")
    op.drop_table("documents")
    op.drop_table("users")
