"""
SQLAlchemy Core table definitions for the membership context.

members.user_id has no foreign key to auth_users: the
"delete all auth users" workflow removes auth users and their members
in two separate steps and must be able to reinsert auth users while
their members still exist.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("name", String(200), nullable=False),
)

auth_users = Table(
    "auth_users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("name", String(200), nullable=False),
    Column("password_hash", String(255), nullable=False),
)

teams = Table(
    "teams",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(200), nullable=False),
    Column("description", Text, nullable=False),
)

members = Table(
    "members",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "team_id",
        Uuid,
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("user_id", Uuid, nullable=False, index=True),
    Column("name", String(200), nullable=False),
    Column("identity_num", String(64), nullable=False),
    Column("role", String(64), nullable=False),
    Column("assigned_at", DateTime(timezone=True), nullable=False),
    Column("expired_at", DateTime(timezone=True), nullable=True),
    Column("modification_date", DateTime(timezone=True), nullable=True),
)
