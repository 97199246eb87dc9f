"""init panel tables

Revision ID: 0001_init_panel
Revises: 
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init_panel"
down_revision = None
branch_labels = None
depends_on = None


def _counter(name):
    return sa.Column(name, sa.Integer(), nullable=False, server_default="0")


def upgrade():
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="customer"),
        sa.Column("status", sa.Enum("active", "disabled", name="accountstatus"), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)
    op.create_index("ix_accounts_created_by", "accounts", ["created_by"])

    op.create_table(
        "customer_props",
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("accounts.id"), primary_key=True),
        _counter("subdomain_current"),
        _counter("subdomain_max"),
        _counter("alias_current"),
        _counter("alias_max"),
        _counter("mail_current"),
        _counter("mail_max"),
        _counter("ftp_current"),
        _counter("ftp_max"),
        _counter("sql_db_current"),
        _counter("sql_db_max"),
        _counter("sql_user_current"),
        _counter("sql_user_max"),
        _counter("traffic_limit_mib"),
        _counter("diskspace_limit_mib"),
        sa.Column("diskspace_used_bytes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )

    op.create_table(
        "traffic_stats",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("web_bytes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("ftp_bytes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("smtp_bytes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("pop3_bytes", sa.BigInteger(), nullable=False, server_default="0"),
    )
    op.create_index("ix_traffic_stats_customer_id", "traffic_stats", ["customer_id"])
    op.create_index("ix_traffic_stats_recorded_at", "traffic_stats", ["recorded_at"])


def downgrade():
    op.drop_index("ix_traffic_stats_recorded_at", table_name="traffic_stats")
    op.drop_index("ix_traffic_stats_customer_id", table_name="traffic_stats")
    op.drop_table("traffic_stats")
    op.drop_table("customer_props")
    op.drop_index("ix_accounts_created_by", table_name="accounts")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
    sa.Enum(name="accountstatus").drop(op.get_bind(), checkfirst=True)
