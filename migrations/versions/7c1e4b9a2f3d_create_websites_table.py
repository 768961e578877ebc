"""create websites table

Revision ID: 7c1e4b9a2f3d
Revises:
Create Date: 2026-10-19 10:12:41.518204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '7c1e4b9a2f3d'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('websites',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('user_id', sa.String(length=255), nullable=False),
    sa.Column('website_name', sa.String(length=63), nullable=False),
    sa.Column('website_title', sa.String(length=255), nullable=False),
    sa.Column('html_content', sa.Text(), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('pod_ip_address', sa.String(length=45), nullable=True),
    sa.Column('error_message', sa.Text(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('website_name')
    )
    # Owner listings and the provisioner's pending queue
    op.create_index('ix_websites_user_id', 'websites', ['user_id'])
    op.create_index('ix_websites_status', 'websites', ['status'])


def downgrade():
    op.drop_index('ix_websites_status', table_name='websites')
    op.drop_index('ix_websites_user_id', table_name='websites')
    op.drop_table('websites')
