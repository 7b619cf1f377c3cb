from sqlalchemy import Column, DateTime

from utils.clock import now


class TimestampMixin:
    """Mixin that provides created/modified timestamps.

    Timestamps are timezone-aware and taken in the zone configured through
    APP_TIMEZONE. Repositories stamp both columns from a single `now()` on insert;
    the column defaults only cover records written some other way.
    """
    created_at = Column(DateTime(timezone=True), default=now, nullable=False)
    modified_at = Column(DateTime(timezone=True), default=now, onupdate=now, nullable=False)
