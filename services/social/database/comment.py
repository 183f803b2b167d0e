"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from sqlalchemy import Column, ForeignKey, Integer, Text
from .base import Base
from .created_timestamp_mixin import CreatedTimestampMixin


class Comment(CreatedTimestampMixin, Base):
    """
    SQLAlchemy model for a comment on a post.

    Attributes:
        id (int): Primary key.
        content (str): Comment text.
        post_id (int): Post commented on (`posts.id`). Comments are
            deleted together with their post.
        author_id (int): Commenting user (`users.id`), always the
            authenticated caller that created the comment.
    """
    # pylint: disable=too-few-public-methods
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    post_id = Column(Integer,
                     ForeignKey("posts.id", ondelete="CASCADE"),
                     nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
