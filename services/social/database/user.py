"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from sqlalchemy import CheckConstraint, Column, Integer, String
from .base import Base
from .created_timestamp_mixin import CreatedTimestampMixin


class User(CreatedTimestampMixin, Base):
    """
    SQLAlchemy model representing a registered user.

    Attributes:
        id (int): Primary key, assigned by the database on insert.
        full_name (str): Display name, shown as the author of comments.
        email (str): Unique email address, used to log in.
        username (str): Unique username.
        password (str): bcrypt hash of the password. The plaintext password
            is never stored.
        age (int): Age of the user, always positive.
    """
    # pylint: disable=too-few-public-methods
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(32), unique=True, nullable=False, index=True)
    password = Column(String(128), nullable=False)
    age = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("age > 0", name="ck_users_age_positive"),
    )
