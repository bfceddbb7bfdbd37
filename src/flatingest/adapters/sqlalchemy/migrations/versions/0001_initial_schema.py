"""Initial bulk import schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "taxonomy_term",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("vocabulary", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_taxonomy_term")),
        sa.UniqueConstraint("uuid", name=op.f("uq_taxonomy_term_uuid")),
    )
    op.create_table(
        "node",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("bundle", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("pid", sa.String(), nullable=False),
        sa.Column("model_id", sa.Integer(), nullable=False),
        sa.Column("member_of_id", sa.Integer(), nullable=True),
        sa.Column("revision_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["model_id"],
            ["taxonomy_term.id"],
            name=op.f("fk_node_model_id_taxonomy_term"),
        ),
        sa.ForeignKeyConstraint(
            ["member_of_id"],
            ["node.id"],
            name=op.f("fk_node_member_of_id_node"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_node")),
        sa.UniqueConstraint("uuid", name=op.f("uq_node_uuid")),
    )
    op.create_table(
        "node_revision",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("object_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("pid", sa.String(), nullable=False),
        sa.Column("model_id", sa.Integer(), nullable=False),
        sa.Column("member_of_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["object_id"],
            ["node.id"],
            name=op.f("fk_node_revision_object_id_node"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_node_revision")),
    )
    op.create_index(
        op.f("ix_node_revision_object_id"), "node_revision", ["object_id"], unique=False
    )
    op.create_table(
        "file",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("filename", sa.String(), nullable=False),
        sa.Column("uri", sa.String(), nullable=False),
        sa.Column("filemime", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_file")),
        sa.UniqueConstraint("uuid", name=op.f("uq_file_uuid")),
    )
    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("bundle", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("media_use_id", sa.Integer(), nullable=False),
        sa.Column("media_of_id", sa.Integer(), nullable=False),
        sa.Column("file_field", sa.String(length=32), nullable=False),
        sa.Column("file_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["media_use_id"],
            ["taxonomy_term.id"],
            name=op.f("fk_media_media_use_id_taxonomy_term"),
        ),
        sa.ForeignKeyConstraint(
            ["media_of_id"],
            ["node.id"],
            name=op.f("fk_media_media_of_id_node"),
        ),
        sa.ForeignKeyConstraint(
            ["file_id"],
            ["file.id"],
            name=op.f("fk_media_file_id_file"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_media")),
        sa.UniqueConstraint("uuid", name=op.f("uq_media_uuid")),
    )


def downgrade() -> None:
    op.drop_table("media")
    op.drop_table("file")
    op.drop_index(op.f("ix_node_revision_object_id"), table_name="node_revision")
    op.drop_table("node_revision")
    op.drop_table("node")
    op.drop_table("taxonomy_term")
