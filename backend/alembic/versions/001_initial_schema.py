"""users and resume tables

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

CHILD_TABLES = ('education', 'experience', 'skills', 'projects', 'languages')


def _resume_fk():
    return sa.Column(
        'resume_id',
        sa.Integer(),
        sa.ForeignKey('resumes.id', ondelete='CASCADE'),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('role', sa.Enum('Admin', 'User', name='userrole'), nullable=False, server_default='User'),
        sa.Column(
            'auth_provider',
            sa.Enum('Local', 'Google', 'GitHub', name='authprovider'),
            nullable=False,
            server_default='Local',
        ),
        sa.Column('auth_provider_user_id', sa.String(255), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'resumes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('Draft', 'Published', 'Archived', name='resumestatus'),
            nullable=False,
            server_default='Draft',
        ),
        sa.Column('contact_information', sa.JSON(), nullable=True),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_resumes_user_id', 'resumes', ['user_id'])

    op.create_table(
        'education',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _resume_fk(),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('institution', sa.String(255), nullable=False),
        sa.Column('degree', sa.String(255), nullable=False),
        sa.Column('field_of_study', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.UniqueConstraint('resume_id', 'item_id', name='uq_education_resume_item'),
    )

    op.create_table(
        'experience',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _resume_fk(),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('achievements', sa.JSON(), nullable=False),
        sa.UniqueConstraint('resume_id', 'item_id', name='uq_experience_resume_item'),
    )

    op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _resume_fk(),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('level', sa.Integer(), nullable=True),
        sa.Column('category', sa.String(255), nullable=True),
        sa.UniqueConstraint('resume_id', 'item_id', name='uq_skills_resume_item'),
    )

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _resume_fk(),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(1000), nullable=True),
        sa.UniqueConstraint('resume_id', 'item_id', name='uq_projects_resume_item'),
    )

    op.create_table(
        'project_technologies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'project_id',
            sa.Integer(),
            sa.ForeignKey('projects.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('technology', sa.String(255), nullable=False),
    )
    op.create_index('ix_project_technologies_project_id', 'project_technologies', ['project_id'])

    op.create_table(
        'languages',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _resume_fk(),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('proficiency', sa.String(255), nullable=False),
        sa.UniqueConstraint('resume_id', 'item_id', name='uq_languages_resume_item'),
    )

    for table in CHILD_TABLES:
        op.create_index(f'ix_{table}_resume_id', table, ['resume_id'])


def downgrade() -> None:
    for table in CHILD_TABLES:
        op.drop_index(f'ix_{table}_resume_id', table_name=table)
    op.drop_index('ix_project_technologies_project_id', table_name='project_technologies')
    op.drop_table('languages')
    op.drop_table('project_technologies')
    op.drop_table('projects')
    op.drop_table('skills')
    op.drop_table('experience')
    op.drop_table('education')
    op.drop_index('ix_resumes_user_id', table_name='resumes')
    op.drop_table('resumes')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    sa.Enum(name='resumestatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='authprovider').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
