"""create inventory and menu tables

Revision ID: 3c1f0a9d7b21
Revises:
Create Date: 2026-10-19 09:12:44.518302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d7b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'ingredient_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('required_amount', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f('ix_ingredient_items_id'), 'ingredient_items', ['id'])
    op.create_index(op.f('ix_ingredient_items_name'), 'ingredient_items', ['name'])

    # ingredient_id deliberately carries no foreign key; see crud.cascade
    op.create_table(
        'inventory_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.Column('initial_amount', sa.Float(), nullable=False),
        sa.Column('current_amount', sa.Float(), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=False),
        sa.Column('total_cost', sa.Float(), nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f('ix_inventory_items_id'), 'inventory_items', ['id'])
    op.create_index(op.f('ix_inventory_items_ingredient_id'), 'inventory_items', ['ingredient_id'])

    op.create_table(
        'menu_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('in_stock', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f('ix_menu_items_id'), 'menu_items', ['id'])
    op.create_index(op.f('ix_menu_items_name'), 'menu_items', ['name'])


def downgrade() -> None:
    op.drop_table('menu_items')
    op.drop_table('inventory_items')
    op.drop_table('ingredient_items')
