"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from sqlalchemy import Column, ForeignKey, Integer, Text
from .base import Base
from .created_timestamp_mixin import CreatedTimestampMixin


class ActivityLog(CreatedTimestampMixin, Base):
    """
    SQLAlchemy model for the append-only user activity log.

    Attributes:
        id (int): Primary key.
        user_id (int): User that performed the action (`users.id`).
        description (str): Free-text description of the action.
        created_at (datetime): When the action was recorded.
    """
    # pylint: disable=too-few-public-methods
    __tablename__ = "user_activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False,
                     index=True)
    description = Column(Text, nullable=False)
