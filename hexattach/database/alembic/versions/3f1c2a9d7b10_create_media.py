"""create media

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

aggregate_type = postgresql.ENUM(
    'image', 'video', 'audio', 'document', 'archive', 'vector', 'presentation', 'spreadsheet', 'other',
    name='media_aggregate_type',
    schema='hexattach',
    create_type=False,
)


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")
    aggregate_type.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'media',
        sa.Column('id', sa.UUID(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('seq', sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.text('clock_timestamp()'), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.text('clock_timestamp()'), nullable=True),
        sa.Column('data_origin', sa.Text(), nullable=True),
        sa.Column('meta_data', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('disk', sa.String(length=32), nullable=False),
        sa.Column('directory', sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column('filename', sa.Text(), nullable=False),
        sa.Column('extension', sa.String(length=32), server_default=sa.text("''"), nullable=False),
        sa.Column('mime_type', sa.String(length=128), nullable=True),
        sa.Column('aggregate_type', aggregate_type, server_default='other', nullable=False),
        sa.Column('size', sa.BigInteger(), server_default=sa.text('0'), nullable=False),
        sa.Column('tags', postgresql.ARRAY(sa.Text()), server_default=sa.text("'{}'::text[]"), nullable=False),
        sa.Column('host_type', sa.String(length=128), nullable=True),
        sa.Column('host_id', sa.String(length=255), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_media')),
        sa.UniqueConstraint('seq', name=op.f('uq_media_seq')),
        sa.UniqueConstraint('disk', 'directory', 'filename', 'extension',
                            name='uq_media_disk_directory_filename_extension'),
        schema='hexattach'
    )
    op.create_index('ix_media_disk_directory', 'media', ['disk', 'directory'], unique=False, schema='hexattach')
    op.create_index('ix_media_aggregate_type', 'media', ['aggregate_type'], unique=False, schema='hexattach')
    op.create_index('ix_media_host', 'media', ['host_type', 'host_id'], unique=False, schema='hexattach')
    op.create_index('ix_media_tags_gin', 'media', ['tags'], unique=False, schema='hexattach',
                    postgresql_using='gin')
    op.create_index('ix_media_deleted_at', 'media', ['deleted_at'], unique=False, schema='hexattach')


def downgrade() -> None:
    op.drop_index('ix_media_deleted_at', table_name='media', schema='hexattach')
    op.drop_index('ix_media_tags_gin', table_name='media', schema='hexattach')
    op.drop_index('ix_media_host', table_name='media', schema='hexattach')
    op.drop_index('ix_media_aggregate_type', table_name='media', schema='hexattach')
    op.drop_index('ix_media_disk_directory', table_name='media', schema='hexattach')
    op.drop_table('media', schema='hexattach')
    aggregate_type.drop(op.get_bind(), checkfirst=True)
