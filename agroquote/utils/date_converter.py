# agroquote/utils/date_converter.py

from datetime import date, datetime
from typing import Optional, Union

from agroquote.constants import DATE_FORMAT

def to_iso_str(gregorian_date: Optional[date]) -> str:
    """Formats a date as YYYY-MM-DD, or '-' when missing."""
    if gregorian_date is None:
        return "-"
    if not isinstance(gregorian_date, (date, datetime)):
        return str(gregorian_date)
    return gregorian_date.strftime(DATE_FORMAT)

def parse_iso_date(date_str: str) -> Optional[date]:
    """Parses a YYYY-MM-DD string into a date. Returns None for empty or invalid text."""
    if not isinstance(date_str, str) or not date_str.strip():
        return None
    try:
        return datetime.strptime(date_str.strip(), DATE_FORMAT).date()
    except ValueError:
        return None

def from_qdate(q_date: 'QDate') -> date:
    """Converts a PyQt QDate into a standard Python date."""
    return q_date.toPyDate()

def to_qdate(g_date: Optional[Union[date, datetime]]) -> 'QDate':
    """Converts a standard Python date into a PyQt QDate (today when None)."""
    from PyQt5.QtCore import QDate
    if g_date is None:
        return QDate.currentDate()
    return QDate(g_date.year, g_date.month, g_date.day)
