"""Baseline migration - admissions CRM schema

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates users, prospects, communications, campaigns, public forms,
report definitions and the admission document/payment tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all admissions tables."""
    tz = sa.DateTime(timezone=True)

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False, unique=True),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('display_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('token_version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', tz, nullable=False),
    )
    op.create_index('idx_users_role', 'users', ['role'])

    # ==========================================================================
    # Public forms (referenced by prospects)
    # ==========================================================================
    op.create_table(
        'public_forms',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('slug', sa.String(64), nullable=False, unique=True),
        sa.Column('education_level', sa.String(30), nullable=False),
        sa.Column('origin', sa.String(50), nullable=False, server_default='public_form'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('config', sa.JSON(), nullable=True),
        sa.Column('created_at', tz, nullable=False),
        sa.Column('expires_at', tz, nullable=True),
    )

    # ==========================================================================
    # Prospects
    # ==========================================================================
    op.create_table(
        'prospects',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('education_level', sa.String(30), nullable=False),
        sa.Column('origin', sa.String(50), nullable=False),
        sa.Column('source_detail', sa.String(255), nullable=True),
        sa.Column('program_of_interest', sa.String(255), nullable=True),
        sa.Column('data_consent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(30), nullable=False, server_default='new'),
        sa.Column('priority', sa.String(10), nullable=False, server_default='medium'),
        sa.Column(
            'advisor_id', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('enrollment_value', sa.Numeric(10, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('additional_data', sa.JSON(), nullable=True),
        sa.Column(
            'public_form_id', sa.Uuid(),
            sa.ForeignKey('public_forms.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('registered_at', tz, nullable=False),
        sa.Column('last_interaction_at', tz, nullable=False),
        sa.Column('appointment_at', tz, nullable=True),
    )
    op.create_index('idx_prospects_advisor', 'prospects', ['advisor_id'])
    op.create_index('idx_prospects_status', 'prospects', ['status'])
    op.create_index('idx_prospects_origin', 'prospects', ['origin'])
    op.create_index('idx_prospects_last_interaction', 'prospects', ['last_interaction_at'])

    # ==========================================================================
    # Communications
    # ==========================================================================
    op.create_table(
        'communications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'prospect_id', sa.Uuid(),
            sa.ForeignKey('prospects.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'user_id', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('direction', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('result', sa.Text(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('state', sa.String(20), nullable=False, server_default='completed'),
        sa.Column('occurred_at', tz, nullable=False),
        sa.CheckConstraint(
            'duration_minutes IS NULL OR duration_minutes > 0',
            name='ck_communications_duration_positive',
        ),
    )
    op.create_index('idx_communications_prospect', 'communications', ['prospect_id', 'occurred_at'])
    op.create_index('idx_communications_user', 'communications', ['user_id', 'occurred_at'])

    # ==========================================================================
    # Campaigns
    # ==========================================================================
    op.create_table(
        'campaigns',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('channel', sa.String(30), nullable=False),
        sa.Column('budget', sa.Numeric(10, 2), nullable=False),
        sa.Column('spent', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('starts_at', tz, nullable=False),
        sa.Column('ends_at', tz, nullable=False),
        sa.Column('lead_target', sa.Integer(), nullable=True),
        sa.Column('enrollment_target', sa.Integer(), nullable=True),
        sa.Column('channel_config', sa.JSON(), nullable=True),
        sa.Column('created_at', tz, nullable=False),
        sa.CheckConstraint('spent <= budget', name='ck_campaigns_spent_within_budget'),
        sa.CheckConstraint('ends_at > starts_at', name='ck_campaigns_date_order'),
    )
    op.create_index('idx_campaigns_status', 'campaigns', ['status'])
    op.create_index('idx_campaigns_channel', 'campaigns', ['channel'])

    op.create_table(
        'campaign_prospects',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'campaign_id', sa.Uuid(),
            sa.ForeignKey('campaigns.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'prospect_id', sa.Uuid(),
            sa.ForeignKey('prospects.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('associated_at', tz, nullable=False),
        sa.UniqueConstraint('campaign_id', 'prospect_id', name='uq_campaign_prospect'),
    )
    op.create_index('idx_campaign_prospects_prospect', 'campaign_prospects', ['prospect_id'])

    # ==========================================================================
    # Report definitions
    # ==========================================================================
    op.create_table(
        'report_definitions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('frequency', sa.String(20), nullable=False),
        sa.Column('recipients', sa.JSON(), nullable=False),
        sa.Column('config', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_run_at', tz, nullable=True),
        sa.Column('next_run_at', tz, nullable=True),
        sa.Column('created_at', tz, nullable=False),
    )
    op.create_index('idx_report_definitions_due', 'report_definitions', ['is_active', 'next_run_at'])

    # ==========================================================================
    # Admission documents and payments
    # ==========================================================================
    op.create_table(
        'admission_documents',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'prospect_id', sa.Uuid(),
            sa.ForeignKey('prospects.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('document_type', sa.String(30), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_path', sa.Text(), nullable=False),
        sa.Column('size_bytes', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('uploaded_at', tz, nullable=False),
        sa.Column('reviewed_at', tz, nullable=True),
        sa.Column(
            'reviewed_by_user_id', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
    )
    op.create_index('idx_admission_documents_prospect', 'admission_documents', ['prospect_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'prospect_id', sa.Uuid(),
            sa.ForeignKey('prospects.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('concept', sa.String(30), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='MXN'),
        sa.Column('method', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('transaction_id', sa.String(255), nullable=True),
        sa.Column('payment_data', sa.JSON(), nullable=True),
        sa.Column('paid_at', tz, nullable=False),
        sa.Column('due_at', tz, nullable=True),
    )
    op.create_index('idx_payments_prospect', 'payments', ['prospect_id', 'status'])

    # ==========================================================================
    # Enrolled students
    # ==========================================================================
    op.create_table(
        'students',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'prospect_id', sa.Uuid(),
            sa.ForeignKey('prospects.id', ondelete='CASCADE'), nullable=False, unique=True,
        ),
        sa.Column('enrollment_number', sa.String(20), nullable=False, unique=True),
        sa.Column('education_level', sa.String(30), nullable=False),
        sa.Column('program', sa.String(255), nullable=False),
        sa.Column('modality', sa.String(20), nullable=False),
        sa.Column('shift', sa.String(20), nullable=False),
        sa.Column('starts_on', sa.Date(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('academic_data', sa.JSON(), nullable=True),
        sa.Column('enrolled_at', tz, nullable=False),
    )
    op.create_index('idx_students_status', 'students', ['status'])
    op.create_index('idx_students_modality', 'students', ['modality'])


def downgrade() -> None:
    """Drop all admissions tables."""
    op.drop_table('students')
    op.drop_table('payments')
    op.drop_table('admission_documents')
    op.drop_table('report_definitions')
    op.drop_table('campaign_prospects')
    op.drop_table('campaigns')
    op.drop_table('communications')
    op.drop_table('prospects')
    op.drop_table('public_forms')
    op.drop_table('users')
