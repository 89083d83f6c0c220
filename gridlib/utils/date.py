from datetime import date, datetime
from typing import Union

from dateutil.parser import isoparse
from pandas import Timestamp

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"


def to_date(date_like: Union[str, date, datetime, Timestamp]) -> date:
    """
    Normalize a date-like value to a ``datetime.date``.
    Accepts 'YYYY-MM-DD', 'YYYYMMDD' and other ISO 8601 strings.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like, fmt).date()
            except ValueError:
                continue
        try:
            return isoparse(date_like).date()
        except ValueError:
            raise ValueError(f"Unsupported date string format: {date_like!r}") from None
    raise TypeError(f"Unsupported type for date: {type(date_like)}")

