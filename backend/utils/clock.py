import os
from datetime import date, datetime

import pytz


def get_timezone():
    """Zone used for stored timestamps and for deciding what "today" is."""
    return pytz.timezone(os.getenv("APP_TIMEZONE", "UTC"))


def now() -> datetime:
    return datetime.now(get_timezone())


def today() -> date:
    return now().date()
