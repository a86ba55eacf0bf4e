"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id():
    return sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        _id(),
        *_timestamps(),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='admin'),
        sa.Column('profile_photo', sa.Text(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'clients',
        _id(),
        *_timestamps(),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('date_of_birth', sa.DateTime(), nullable=True),
        sa.Column('emergency_contact', postgresql.JSONB(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_clients_email', 'clients', ['email'], unique=True)

    op.create_table(
        'cases',
        _id(),
        *_timestamps(),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('case_type', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('court_details', postgresql.JSONB(), nullable=True),
        sa.Column('important_dates', postgresql.JSONB(), nullable=True),
        sa.Column('billable_hours', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_fees', sa.Numeric(10, 2), nullable=False, server_default='0'),
    )
    op.create_index('ix_cases_client_id', 'cases', ['client_id'])

    op.create_table(
        'consultations',
        _id(),
        *_timestamps(),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clients.id'), nullable=True),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('case_type', sa.String(), nullable=True),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('status', sa.String(), nullable=False, server_default='scheduled'),
        sa.Column('rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_consultations_client_id', 'consultations', ['client_id'])

    op.create_table(
        'invoices',
        _id(),
        *_timestamps(),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('case_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('cases.id'), nullable=True),
        sa.Column('invoice_number', sa.String(), nullable=False, unique=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('tax', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='draft'),
        sa.Column('due_date', sa.DateTime(), nullable=False),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('line_items', postgresql.JSONB(), nullable=True),
    )
    op.create_index('ix_invoices_client_id', 'invoices', ['client_id'])

    op.create_table(
        'communications',
        _id(),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('case_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('cases.id'), nullable=True),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('direction', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('attachments', postgresql.JSONB(), nullable=True),
    )
    op.create_index('ix_communications_client_id', 'communications', ['client_id'])
    op.create_index('ix_communications_case_id', 'communications', ['case_id'])

    op.create_table(
        'documents',
        _id(),
        *_timestamps(),
        sa.Column('filename', sa.String(), nullable=False),
        sa.Column('original_name', sa.String(), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sa.String(), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clients.id'), nullable=True),
        sa.Column('case_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('cases.id'), nullable=True),
        sa.Column('category', sa.String(), nullable=False, server_default='other'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('uploaded_by', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
    )
    op.create_index('ix_documents_client_id', 'documents', ['client_id'])
    op.create_index('ix_documents_case_id', 'documents', ['case_id'])

    op.create_table(
        'pending_file_deletions',
        _id(),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('path', sa.String(), nullable=False),
        sa.Column('document_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='1'),
    )

    op.create_table(
        'audit_logs',
        _id(),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('resource_type', sa.String(), nullable=False),
        sa.Column('resource_id', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='success'),
        sa.Column('ip', sa.String(), nullable=True),
        sa.Column('user_agent', sa.String(), nullable=True),
        sa.Column('details', postgresql.JSONB(), nullable=False, server_default='{}'),
    )
    op.create_index('ix_audit_logs_user_id', 'audit_logs', ['user_id'])

    op.create_table(
        'client_tokens',
        _id(),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(64), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_client_tokens_client_id', 'client_tokens', ['client_id'])
    op.create_index('ix_client_tokens_token', 'client_tokens', ['token'], unique=True)
    op.create_index('ix_client_tokens_expires_at', 'client_tokens', ['expires_at'])

    op.create_table(
        'ai_chats',
        _id(),
        *_timestamps(),
        sa.Column('session_id', sa.String(), nullable=False),
        sa.Column('client_email', sa.String(), nullable=True),
        sa.Column('messages', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
    )
    op.create_index('ix_ai_chats_session_id', 'ai_chats', ['session_id'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_ai_chats_session_id', table_name='ai_chats')
    op.drop_table('ai_chats')
    op.drop_index('ix_client_tokens_expires_at', table_name='client_tokens')
    op.drop_index('ix_client_tokens_token', table_name='client_tokens')
    op.drop_index('ix_client_tokens_client_id', table_name='client_tokens')
    op.drop_table('client_tokens')
    op.drop_index('ix_audit_logs_user_id', table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_table('pending_file_deletions')
    op.drop_index('ix_documents_case_id', table_name='documents')
    op.drop_index('ix_documents_client_id', table_name='documents')
    op.drop_table('documents')
    op.drop_index('ix_communications_case_id', table_name='communications')
    op.drop_index('ix_communications_client_id', table_name='communications')
    op.drop_table('communications')
    op.drop_index('ix_invoices_client_id', table_name='invoices')
    op.drop_table('invoices')
    op.drop_index('ix_consultations_client_id', table_name='consultations')
    op.drop_table('consultations')
    op.drop_index('ix_cases_client_id', table_name='cases')
    op.drop_table('cases')
    op.drop_index('ix_clients_email', table_name='clients')
    op.drop_table('clients')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
