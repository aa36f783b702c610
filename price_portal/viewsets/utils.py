from typing import Optional

from rest_framework.response import Response

from price_portal.exceptions import InvalidQueryParameter
from price_processors.domain.normalizer import normalize_month


def _error_response(message, status_code=400, err=None) -> Response:
    data = {'errors': message}
    if err:
        data['detail'] = err
    return Response(
        data=data,
        status=status_code
    )


def _internal_error_response() -> Response:
    return Response(data={'message': "INTERNAL_SERVER_ERROR"}, status=500)


def _param(query_params, key: str) -> Optional[str]:
    value = query_params.get(key, None)
    if value is None:
        return None
    value = str(value).strip()
    if value == '' or value.lower() == 'all':
        return None
    return value


def _month_param(query_params, key='month') -> Optional[int]:
    raw = _param(query_params, key)
    if raw is None:
        return None
    month = normalize_month(raw)
    if month is None:
        raise InvalidQueryParameter(key, raw, "expect month 1-12, month name or 3-letter abbreviation")
    return month


def _year_param(query_params, key='year') -> Optional[int]:
    raw = _param(query_params, key)
    if raw is None:
        return None
    if not raw.isdigit() or len(raw) != 4:
        raise InvalidQueryParameter(key, raw, "expect 4-digit year")
    return int(raw)


def _choice_param(query_params, key: str, choices, default=None) -> Optional[str]:
    raw = _param(query_params, key)
    if raw is None:
        return default
    if raw not in choices:
        raise InvalidQueryParameter(key, raw, f"expect one of {', '.join(choices)}")
    return raw


def _int_param(query_params, key: str, default: Optional[int] = None) -> Optional[int]:
    raw = _param(query_params, key)
    if raw is None:
        return default
    if not raw.isdigit():
        raise InvalidQueryParameter(key, raw, "expect positive integer")
    return int(raw)
