"""create zone and rating tables

Revision ID: 3f1c7a9e2b40
Revises:
Create Date: 2026-10-18 10:12:05.000000

"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c7a9e2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # ------------------------------------------------------------------
    # 区域 / 分区
    # ------------------------------------------------------------------
    op.create_table(
        "regions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column(
            "parent_region_id",
            sa.Integer(),
            sa.ForeignKey("regions.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        sa.Column("patterns", JSONType, nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("metadata_json", JSONType, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("type", "code", name="uq_regions_type_code"),
    )

    op.create_table(
        "zone_sets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False, unique=True),
        sa.Column("description", sa.String(512), nullable=False, server_default=""),
        sa.Column("selected_zones", JSONType, nullable=False),
        sa.Column("zone_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("effective_from", sa.Date(), nullable=True),
        sa.Column("effective_to", sa.Date(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
    )

    op.create_table(
        "zone_maps",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "zone_set_id",
            sa.Integer(),
            sa.ForeignKey("zone_sets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("origin_region_id", sa.Integer(), sa.ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("dest_region_id", sa.Integer(), sa.ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("zone_code", sa.String(32), nullable=False),
        sa.UniqueConstraint("zone_set_id", "origin_region_id", "dest_region_id", name="uq_zone_maps_set_pair"),
    )
    op.create_index("ix_zone_maps_zone_set_id", "zone_maps", ["zone_set_id"])

    op.create_table(
        "carrier_zone_bindings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("carrier_id", sa.String(64), nullable=False),
        sa.Column("service_id", sa.String(64), nullable=False),
        sa.Column(
            "zone_set_id",
            sa.Integer(),
            sa.ForeignKey("zone_sets.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("effective_from", sa.Date(), nullable=False),
        sa.Column("effective_to", sa.Date(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_czb_carrier_service", "carrier_zone_bindings", ["carrier_id", "service_id"])

    op.create_table(
        "carrier_zone_overrides",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("carrier_id", sa.String(64), nullable=False),
        sa.Column("service_id", sa.String(64), nullable=False),
        sa.Column("origin_region_id", sa.Integer(), sa.ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("dest_region_id", sa.Integer(), sa.ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("zone_code", sa.String(32), nullable=False),
        sa.UniqueConstraint(
            "carrier_id",
            "service_id",
            "origin_region_id",
            "dest_region_id",
            name="uq_czo_carrier_service_pair",
        ),
    )

    # ------------------------------------------------------------------
    # 计费：break set / break / tariff / 费率矩阵
    # ------------------------------------------------------------------
    op.create_table(
        "rating_break_sets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("metric", sa.String(16), nullable=False),
        sa.Column("unit", sa.String(16), nullable=False),
        sa.Column("method", sa.String(16), nullable=False, server_default="step"),
        sa.Column("meta", JSONType, nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )

    op.create_table(
        "rating_breaks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "break_set_id",
            sa.Integer(),
            sa.ForeignKey("rating_break_sets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("min_metric", sa.Numeric(12, 3), nullable=False),
        sa.Column("max_metric", sa.Numeric(12, 3), nullable=True),
        sa.Column("seq", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(256), nullable=False, server_default=""),
    )
    op.create_index("ix_rating_breaks_break_set_id", "rating_breaks", ["break_set_id"])

    op.create_table(
        "tariffs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column(
            "weight_break_set_id",
            sa.Integer(),
            sa.ForeignKey("rating_break_sets.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        sa.Column(
            "capacity_break_set_id",
            sa.Integer(),
            sa.ForeignKey("rating_break_sets.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        sa.Column("compare_policy", sa.String(8), nullable=True),
        sa.Column("meta", JSONType, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "rate_matrix_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("tariff_id", sa.Integer(), sa.ForeignKey("tariffs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("break_id", sa.Integer(), sa.ForeignKey("rating_breaks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("zone_code", sa.String(32), nullable=False),
        sa.Column("class_code", sa.String(16), nullable=True),
        sa.Column("rate_value", sa.Numeric(12, 4), nullable=False),
        sa.Column("min_charge", sa.Numeric(12, 2), nullable=True),
        sa.Column("flat_band", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index(
        "ix_rme_lookup",
        "rate_matrix_entries",
        ["tariff_id", "break_id", "zone_code", "class_code"],
    )


def downgrade() -> None:
    op.drop_index("ix_rme_lookup", table_name="rate_matrix_entries")
    op.drop_table("rate_matrix_entries")
    op.drop_table("tariffs")
    op.drop_index("ix_rating_breaks_break_set_id", table_name="rating_breaks")
    op.drop_table("rating_breaks")
    op.drop_table("rating_break_sets")
    op.drop_table("carrier_zone_overrides")
    op.drop_index("ix_czb_carrier_service", table_name="carrier_zone_bindings")
    op.drop_table("carrier_zone_bindings")
    op.drop_index("ix_zone_maps_zone_set_id", table_name="zone_maps")
    op.drop_table("zone_maps")
    op.drop_table("zone_sets")
    op.drop_table("regions")
