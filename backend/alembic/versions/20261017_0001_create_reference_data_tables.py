"""create reference data tables

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 09:30:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "facility_types",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_facility_types_code", "facility_types", ["code"], unique=True)

    op.create_table(
        "facilities",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("type_id", sa.Uuid(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["type_id"], ["facility_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_facilities_code", "facilities", ["code"], unique=True)
    op.create_index("ix_facilities_type_id", "facilities", ["type_id"], unique=False)

    op.create_table(
        "programs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("periods_skippable", sa.Boolean(), nullable=False),
        sa.Column("show_non_full_supply_tab", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_programs_code", "programs", ["code"], unique=True)

    op.create_table(
        "supported_programs",
        sa.Column("facility_id", sa.Uuid(), nullable=False),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("locally_active", sa.Boolean(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(["facility_id"], ["facilities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.PrimaryKeyConstraint("facility_id", "program_id"),
    )

    op.create_table(
        "product_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_categories_code", "product_categories", ["code"], unique=True)

    op.create_table(
        "dispensables",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("dispensing_unit", sa.String(length=255), nullable=True),
        sa.Column("size_code", sa.String(length=255), nullable=True),
        sa.Column("route_of_administration", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "orderables",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("version_id", sa.BigInteger(), nullable=False),
        sa.Column("product_code", sa.String(length=255), nullable=False),
        sa.Column("full_product_name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("dispensable_id", sa.Uuid(), nullable=False),
        sa.Column("net_content", sa.BigInteger(), nullable=False),
        sa.Column("pack_rounding_threshold", sa.BigInteger(), nullable=False),
        sa.Column("round_to_zero", sa.Boolean(), nullable=False),
        sa.Column("identifiers", sa.JSON(), nullable=False),
        sa.Column("extra_data", sa.JSON(), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["dispensable_id"], ["dispensables.id"]),
        sa.PrimaryKeyConstraint("id", "version_id"),
        sa.UniqueConstraint("product_code", "version_id", name="unq_productcode_versionid"),
        sa.CheckConstraint("version_id >= 1", name="ck_orderables_version_min_1"),
        sa.CheckConstraint("net_content >= 0", name="ck_orderables_net_content_non_negative"),
    )
    op.create_index("ix_orderables_product_code", "orderables", ["product_code"], unique=False)

    op.create_table(
        "program_orderables",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("orderable_id", sa.Uuid(), nullable=False),
        sa.Column("orderable_version_id", sa.BigInteger(), nullable=False),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("full_supply", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("doses_per_patient", sa.Integer(), nullable=True),
        sa.Column("price_per_pack", sa.Numeric(19, 2), nullable=True),
        sa.Column("valid_from", sa.Date(), nullable=True),
        sa.Column("valid_to", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(
            ["orderable_id", "orderable_version_id"],
            ["orderables.id", "orderables.version_id"],
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["product_categories.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "orderable_id",
            "orderable_version_id",
            "program_id",
            name="uq_program_orderables_orderable_program",
        ),
    )
    op.create_index(
        "ix_program_orderables_orderable",
        "program_orderables",
        ["orderable_id", "orderable_version_id"],
        unique=False,
    )
    op.create_index("ix_program_orderables_program_id", "program_orderables", ["program_id"], unique=False)

    op.create_table(
        "facility_type_approved_products",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("version_id", sa.BigInteger(), nullable=False),
        sa.Column("orderable_id", sa.Uuid(), nullable=False),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("facility_type_id", sa.Uuid(), nullable=False),
        sa.Column("max_periods_of_stock", sa.Float(), nullable=False),
        sa.Column("min_periods_of_stock", sa.Float(), nullable=True),
        sa.Column("emergency_order_point", sa.Float(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.ForeignKeyConstraint(["facility_type_id"], ["facility_types.id"]),
        sa.PrimaryKeyConstraint("id", "version_id"),
        sa.CheckConstraint("version_id >= 1", name="ck_ftap_version_min_1"),
        sa.CheckConstraint("max_periods_of_stock >= 0", name="ck_ftap_max_periods_non_negative"),
    )
    op.create_index(
        "ix_facility_type_approved_products_orderable_id",
        "facility_type_approved_products",
        ["orderable_id"],
        unique=False,
    )
    op.create_index(
        "ix_ftap_facility_type_program",
        "facility_type_approved_products",
        ["facility_type_id", "program_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_ftap_facility_type_program", table_name="facility_type_approved_products")
    op.drop_index("ix_facility_type_approved_products_orderable_id", table_name="facility_type_approved_products")
    op.drop_table("facility_type_approved_products")
    op.drop_index("ix_program_orderables_program_id", table_name="program_orderables")
    op.drop_index("ix_program_orderables_orderable", table_name="program_orderables")
    op.drop_table("program_orderables")
    op.drop_index("ix_orderables_product_code", table_name="orderables")
    op.drop_table("orderables")
    op.drop_table("dispensables")
    op.drop_index("ix_product_categories_code", table_name="product_categories")
    op.drop_table("product_categories")
    op.drop_table("supported_programs")
    op.drop_index("ix_programs_code", table_name="programs")
    op.drop_table("programs")
    op.drop_index("ix_facilities_type_id", table_name="facilities")
    op.drop_index("ix_facilities_code", table_name="facilities")
    op.drop_table("facilities")
    op.drop_index("ix_facility_types_code", table_name="facility_types")
    op.drop_table("facility_types")
