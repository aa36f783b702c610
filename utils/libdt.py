from datetime import datetime, date, timezone


def get_utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def serializable_datetime(dt) -> str:
    """
    Convert to serializable datetime iso format string, e.g. use in cleaned record dict or JSON response
    :param dt: datetime, date or an already serialised string
    :return:
    """
    if isinstance(dt, str):
        return dt

    if isinstance(dt, (datetime, date)):
        return dt.isoformat()


def long_date(dt) -> str:
    """
    Letter style date without zero padding, e.g. January 5, 2025
    :param dt: datetime or date
    :return:
    """
    return f"{dt:%B} {dt.day}, {dt.year}"


def folder_friendly_timestamp(dt: datetime) -> str:
    """
    Get a folder friendly timestamp of the format
    :param dt:
    :return:
    """
    return dt.strftime("%Y-%m-%d__%H-%M-%S")
