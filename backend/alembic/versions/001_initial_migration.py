"""Initial migration

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('company_name', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    # Create master_catalogs table
    op.create_table(
        'master_catalogs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('article_name', sa.String(), nullable=False),
        sa.Column('sole_color', sa.String(), nullable=True),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('category_id', sa.String(), nullable=False),
        sa.Column('brand_id', sa.String(), nullable=False),
        sa.Column('manufacturer_company_id', sa.String(), nullable=False),
        sa.Column('unit_id', sa.String(), nullable=False),
        sa.Column('stage', sa.String(length=10), nullable=False),
        sa.Column('expected_available_date', sa.Date(), nullable=True),
        sa.Column('primary_image_url', sa.String(), nullable=False),
        sa.Column('primary_image_key', sa.String(), nullable=True),
        sa.Column('secondary_images', sa.JSON(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_master_catalogs_id'), 'master_catalogs', ['id'], unique=False)
    op.create_index(op.f('ix_master_catalogs_article_name'), 'master_catalogs', ['article_name'], unique=False)
    op.create_index(op.f('ix_master_catalogs_gender'), 'master_catalogs', ['gender'], unique=False)
    op.create_index(op.f('ix_master_catalogs_category_id'), 'master_catalogs', ['category_id'], unique=False)
    op.create_index(op.f('ix_master_catalogs_brand_id'), 'master_catalogs', ['brand_id'], unique=False)
    op.create_index(
        op.f('ix_master_catalogs_manufacturer_company_id'), 'master_catalogs', ['manufacturer_company_id'], unique=False
    )
    op.create_index(op.f('ix_master_catalogs_stage'), 'master_catalogs', ['stage'], unique=False)
    op.create_index(op.f('ix_master_catalogs_is_deleted'), 'master_catalogs', ['is_deleted'], unique=False)

    # Create catalog_variants table
    op.create_table(
        'catalog_variants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('catalog_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('item_name', sa.String(), nullable=False),
        sa.Column('sku', sa.String(), nullable=False),
        sa.Column('cost_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('size_qty', sa.JSON(), nullable=False),
        sa.Column('selling_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('mrp', sa.Numeric(12, 2), nullable=False),
        sa.ForeignKeyConstraint(['catalog_id'], ['master_catalogs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_catalog_variants_id'), 'catalog_variants', ['id'], unique=False)
    op.create_index(op.f('ix_catalog_variants_catalog_id'), 'catalog_variants', ['catalog_id'], unique=False)

    # Create vendors table
    op.create_table(
        'vendors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('salutation', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('company_name', sa.String(), nullable=True),
        sa.Column('display_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('work_phone', sa.String(), nullable=True),
        sa.Column('mobile', sa.String(), nullable=True),
        sa.Column('pan', sa.String(), nullable=True),
        sa.Column('msme_registered', sa.Boolean(), nullable=True),
        sa.Column('currency', sa.String(), nullable=True),
        sa.Column('payment_terms', sa.String(), nullable=True),
        sa.Column('tds', sa.String(), nullable=True),
        sa.Column('enable_portal', sa.Boolean(), nullable=True),
        sa.Column('billing_address', sa.JSON(), nullable=True),
        sa.Column('shipping_address', sa.JSON(), nullable=True),
        sa.Column('contact_persons', sa.JSON(), nullable=False),
        sa.Column('bank_details', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_vendors_id'), 'vendors', ['id'], unique=False)
    op.create_index(op.f('ix_vendors_display_name'), 'vendors', ['display_name'], unique=False)

    # Create purchase_orders table
    op.create_table(
        'purchase_orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('po_number', sa.String(), nullable=False),
        sa.Column('vendor_id', sa.Integer(), nullable=False),
        sa.Column('vendor_name', sa.String(), nullable=True),
        sa.Column('reference_number', sa.String(), nullable=True),
        sa.Column('order_date', sa.Date(), nullable=True),
        sa.Column('delivery_date', sa.Date(), nullable=True),
        sa.Column('payment_terms', sa.String(), nullable=True),
        sa.Column('shipment_preference', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('terms_and_conditions', sa.Text(), nullable=True),
        sa.Column('sub_total', sa.Numeric(14, 2), nullable=False),
        sa.Column('discount_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('discount_amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('total_tax', sa.Numeric(14, 2), nullable=False),
        sa.Column('total', sa.Numeric(14, 2), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['vendor_id'], ['vendors.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_purchase_orders_id'), 'purchase_orders', ['id'], unique=False)
    op.create_index(op.f('ix_purchase_orders_po_number'), 'purchase_orders', ['po_number'], unique=True)
    op.create_index(op.f('ix_purchase_orders_vendor_id'), 'purchase_orders', ['vendor_id'], unique=False)
    op.create_index(op.f('ix_purchase_orders_status'), 'purchase_orders', ['status'], unique=False)

    # Create po_lines table
    op.create_table(
        'po_lines',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('po_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('article_id', sa.Integer(), nullable=True),
        sa.Column('variant_id', sa.Integer(), nullable=True),
        sa.Column('item_name', sa.String(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('sku', sa.String(), nullable=True),
        sa.Column('sku_company', sa.String(), nullable=True),
        sa.Column('item_tax_code', sa.String(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('tax_rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('tax_type', sa.String(length=10), nullable=False),
        sa.Column('base_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax_per_item', sa.Numeric(12, 2), nullable=False),
        sa.Column('unit_total', sa.Numeric(14, 2), nullable=False),
        sa.ForeignKeyConstraint(['po_id'], ['purchase_orders.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_po_lines_id'), 'po_lines', ['id'], unique=False)
    op.create_index(op.f('ix_po_lines_po_id'), 'po_lines', ['po_id'], unique=False)
    op.create_index(op.f('ix_po_lines_sku'), 'po_lines', ['sku'], unique=False)

    # Create inventory table (variant_id has no FK, variants are replaced wholesale)
    op.create_table(
        'inventory',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('variant_id', sa.Integer(), nullable=False),
        sa.Column('actual_stock', sa.Integer(), nullable=False),
        sa.Column('reserved_stock', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_inventory_id'), 'inventory', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_variant_id'), 'inventory', ['variant_id'], unique=True)

    # Create distributor_orders table
    op.create_table(
        'distributor_orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_number', sa.String(), nullable=False),
        sa.Column('distributor_id', sa.Integer(), nullable=False),
        sa.Column('distributor_name', sa.String(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('total_cartons', sa.Integer(), nullable=False),
        sa.Column('total_pairs', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('dispatched_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['distributor_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_distributor_orders_id'), 'distributor_orders', ['id'], unique=False)
    op.create_index(op.f('ix_distributor_orders_order_number'), 'distributor_orders', ['order_number'], unique=True)
    op.create_index(op.f('ix_distributor_orders_distributor_id'), 'distributor_orders', ['distributor_id'], unique=False)
    op.create_index(op.f('ix_distributor_orders_status'), 'distributor_orders', ['status'], unique=False)

    # Create distributor_order_items table
    op.create_table(
        'distributor_order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('variant_id', sa.Integer(), nullable=False),
        sa.Column('item_name', sa.String(), nullable=False),
        sa.Column('carton_count', sa.Integer(), nullable=False),
        sa.Column('pair_count', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(14, 2), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['distributor_orders.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_distributor_order_items_id'), 'distributor_order_items', ['id'], unique=False)
    op.create_index(op.f('ix_distributor_order_items_order_id'), 'distributor_order_items', ['order_id'], unique=False)


def downgrade() -> None:
    op.drop_table('distributor_order_items')
    op.drop_table('distributor_orders')
    op.drop_table('inventory')
    op.drop_table('po_lines')
    op.drop_table('purchase_orders')
    op.drop_table('vendors')
    op.drop_table('catalog_variants')
    op.drop_table('master_catalogs')
    op.drop_table('users')
