"""create_admin_tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-18 10:00:00.000000

관리자 기본 테이블 생성: user, role, menu, role_menu.
Create the admin scaffold tables: user, role, menu, role_menu.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    # 공통 감사 필드 — Shared id and audit columns
    return [
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('create_time', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('update_time', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # user — 로그인 계정 (role_id는 "1,3" 형태의 문자열)
    # Login accounts; role_id is a comma separated id string
    op.create_table(
        'user',
        *_audit_columns(),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('realname', sa.String(100), nullable=True),
        sa.Column('nickname', sa.String(100), nullable=True),
        sa.Column('role_id', sa.String(255), nullable=True),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    # role — 역할
    op.create_table(
        'role',
        *_audit_columns(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('remark', sa.String(255), nullable=True),
    )

    # menu — 디렉터리/메뉴/버튼 트리 (Directory/menu/button tree)
    op.create_table(
        'menu',
        *_audit_columns(),
        sa.Column('parent_id', sa.BigInteger(), nullable=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('router', sa.String(255), nullable=True),
        sa.Column('perms', sa.String(255), nullable=True),
        sa.Column('type', sa.SmallInteger(), server_default=sa.text('0'), nullable=False),
        sa.Column('icon', sa.String(100), nullable=True),
        sa.Column('order_num', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('view_path', sa.String(255), nullable=True),
        sa.Column('keep_alive', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('is_show', sa.Boolean(), server_default=sa.text('true'), nullable=False),
    )
    op.create_index('ix_menu_parent_id', 'menu', ['parent_id'])

    # role_menu — 역할별 메뉴/권한 매핑 (role ↔ menu grants)
    op.create_table(
        'role_menu',
        *_audit_columns(),
        sa.Column('role_id', sa.BigInteger(), sa.ForeignKey('role.id', ondelete='CASCADE'), nullable=False),
        sa.Column('menu_id', sa.BigInteger(), sa.ForeignKey('menu.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('role_id', 'menu_id', name='uq_role_menu'),
    )


def downgrade() -> None:
    op.drop_table('role_menu')
    op.drop_index('ix_menu_parent_id', table_name='menu')
    op.drop_table('menu')
    op.drop_table('role')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
