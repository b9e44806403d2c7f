"""
Date parsing and formatting for plant records.

Purchase dates travel as "YYYY-MM-DD", watering timestamps as
"YYYY-MM-DD HH:MM:SS" (the browser's datetime-local value with the
"T" replaced and seconds appended). Parsing is lenient about the
separator and precision; formatting is always canonical.
"""

from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def now():
    """Current local time, truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


def parse_date(value):
    """
    Parse a calendar date.

    Parameters
    ----------
    value : date, datetime or str
        A date, a datetime (its date part is kept), an ISO-8601 date or
        date-time string, or the keyword "today".

    Returns
    -------
    datetime.date

    Raises
    ------
    ValueError
        If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError("Expected a date string, got {}".format(
            type(value).__name__))

    text = value.strip()
    if text.lower() == "today":
        return date.today()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError("Invalid date: '{}'".format(value)) from None


def parse_datetime(value):
    """
    Parse a date-time.

    Accepts a datetime, a date (read as midnight), an ISO-8601 string with
    either "T" or a space between date and time, or the keyword "now".
    Naive values are taken as server local time, like "now"; aware
    values are converted to server local time and returned naive.
    Microseconds are dropped.

    Raises
    ------
    ValueError
        If the value cannot be read as a date-time.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.lower() == "now":
            return now()
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError("Invalid date-time: '{}'".format(value)) from None
    else:
        raise ValueError("Expected a date-time string, got {}".format(
            type(value).__name__))

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt.replace(microsecond=0)


def format_date(value):
    """Format a date as YYYY-MM-DD. None passes through."""
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


def format_datetime(value):
    """Format a datetime as YYYY-MM-DD HH:MM:SS. None passes through."""
    if value is None:
        return None
    return value.strftime(DATETIME_FORMAT)
