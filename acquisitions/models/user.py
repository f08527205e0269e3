"""ORM model for user accounts."""

from sqlalchemy import Column, Integer, String, Text

from acquisitions.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    User account used for signup/signin and user management.

    role: 'admin' or 'user'. The display name lives in the ``username`` column.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("username", String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(50), nullable=False, default="user", server_default="user")
    password_hash = Column(Text, nullable=False)
