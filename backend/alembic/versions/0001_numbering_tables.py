"""master data, issued documents and scope counters

Revision ID: 0001_numbering_tables
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_numbering_tables"
down_revision = None
branch_labels = None
depends_on = None

MASTER_TABLES = ("locations", "departments", "document_types")


def upgrade() -> None:
    # Master tables belong to the master-data service and may already exist.
    existing = set(sa.inspect(op.get_bind()).get_table_names())
    for table in MASTER_TABLES:
        if table in existing:
            continue
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("nama", sa.String(length=120), nullable=False),
            sa.Column("singkatan", sa.String(length=20), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_nama", table, ["nama"])

    if "documents" not in existing:
        op.create_table(
            "documents",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("user_id", sa.String(length=64), nullable=True),
            sa.Column("nama", sa.String(length=200), nullable=False),
            sa.Column("nomor_surat", sa.String(length=100), nullable=False),
            sa.Column("jenis_surat", sa.String(length=120), nullable=False),
            sa.Column("deskripsi", sa.Text(), nullable=False),
            sa.Column("lokasi", sa.String(length=120), nullable=False),
            sa.Column("departemen", sa.String(length=120), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_documents_user_id", "documents", ["user_id"])
        op.create_index("ix_documents_nomor_surat", "documents", ["nomor_surat"])
    op.create_index("ix_documents_departemen_created_at", "documents", ["departemen", "created_at"])

    op.create_table(
        "scope_counters",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("scope_kind", sa.String(length=10), nullable=False),
        sa.Column("department_name", sa.String(length=120), nullable=False),
        sa.Column("document_type_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("location_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("counter", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "scope_kind",
            "department_name",
            "document_type_name",
            "location_name",
            "year",
            "month",
            name="uq_scope_counters_scope",
        ),
    )


def downgrade() -> None:
    # documents and master tables are kept: they hold issued history and external data
    op.drop_table("scope_counters")
    op.drop_index("ix_documents_departemen_created_at", table_name="documents")
