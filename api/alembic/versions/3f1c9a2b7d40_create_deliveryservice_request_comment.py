"""create_deliveryservice_request_comment

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 09:12:31.402117

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'tm_user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=128), nullable=False),
        sa.Column('full_name', sa.String(length=256), nullable=True),
        sa.Column('email', sa.String(length=128), nullable=True),
        sa.Column('local_passwd', sa.String(length=60), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username')
    )

    op.create_table(
        'deliveryservice_request',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('assignee_id', sa.Integer(), nullable=True),
        sa.Column('change_type', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('deliveryservice', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['author_id'], ['tm_user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assignee_id'], ['tm_user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'deliveryservice_request_comment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('deliveryservice_request_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['author_id'], ['tm_user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['deliveryservice_request_id'], ['deliveryservice_request.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_dsrc_deliveryservice_request_id', 'deliveryservice_request_comment',
                    ['deliveryservice_request_id'], unique=False)

    op.create_table(
        'log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('level', sa.String(length=45), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('tm_user', sa.Integer(), nullable=False),
        sa.Column('ticketnum', sa.String(length=64), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['tm_user'], ['tm_user.id']),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('log')
    op.drop_index('ix_dsrc_deliveryservice_request_id', table_name='deliveryservice_request_comment')
    op.drop_table('deliveryservice_request_comment')
    op.drop_table('deliveryservice_request')
    op.drop_table('tm_user')
