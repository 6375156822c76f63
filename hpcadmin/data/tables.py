"""Table definitions for users, pirgs and their memberships."""

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(64), nullable=False, unique=True),
    Column("email", String(255), nullable=False),
    Column("firstname", String(128), nullable=False, server_default=""),
    Column("lastname", String(128), nullable=False, server_default=""),
)

pirgs = Table(
    "pirgs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(64), nullable=False, unique=True),
    Column("owner_id", Integer, ForeignKey("users.id"), nullable=False),
)

pirg_members = Table(
    "pirg_members",
    metadata,
    Column("pirg_id", Integer, ForeignKey("pirgs.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)
