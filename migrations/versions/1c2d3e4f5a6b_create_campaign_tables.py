"""create campaigns and campaign_links tables

Revision ID: 1c2d3e4f5a6b
Revises:
Create Date: 2026-01-12 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1c2d3e4f5a6b'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'campaigns',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'campaign_links',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('campaign_id', sa.String(length=36), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('canonical_url', sa.Text(), nullable=True),
        sa.Column('views', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('likes', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('comments', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('shares', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('saves', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ok'),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column('last_updated_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['campaign_id'], ['campaigns.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_campaign_links_campaign_id', 'campaign_links', ['campaign_id'])


def downgrade():
    op.drop_index('ix_campaign_links_campaign_id', table_name='campaign_links')
    op.drop_table('campaign_links')
    op.drop_table('campaigns')
