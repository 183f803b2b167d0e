"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, func


class CreatedTimestampMixin:
    """
    SQLAlchemy mixin adding a creation timestamp to a model.

    Rows of the social service are never updated in place, so only the
    creation time is tracked.

    Attributes:
        created_at (datetime): Timezone-aware UTC timestamp of the insert.
            Filled in by the database when the insert does not supply it.
    """
    # pylint: disable=too-few-public-methods
    created_at = Column(DateTime(timezone=True),
                        default=lambda: datetime.now(timezone.utc),
                        server_default=func.now(),
                        nullable=False)
