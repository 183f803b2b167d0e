"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from sqlalchemy import Column, ForeignKey, Integer, Text
from .base import Base
from .created_timestamp_mixin import CreatedTimestampMixin


class Post(CreatedTimestampMixin, Base):
    """
    SQLAlchemy model for a post.

    Attributes:
        id (int): Primary key.
        content (str): Body text. Never empty: posts created without text
            are filled with a joke before they are stored.
        image_url (str): URL of the post's image.
        user_id (int): Owning user (`users.id`), fixed at creation.
    """
    # pylint: disable=too-few-public-methods
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False,
                     index=True)
