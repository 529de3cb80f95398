"""
Display helpers for a rank list returned by the API.

Search and sort only re-order rows for display. Rank and medal always come
from the ``rank`` and ``tier`` fields the server computed, never from a
row's position in a filtered or re-sorted list.
"""
from decimal import Decimal, InvalidOperation

SORT_FIELDS = ('rank', 'name', 'marks')

MEDALS = {
    'gold': {'icon': 'trophy', 'color': '#f59e0b', 'bg': '#fef3c7'},
    'silver': {'icon': 'medal', 'color': '#9ca3af', 'bg': '#f3f4f6'},
    'bronze': {'icon': 'medal', 'color': '#c2410c', 'bg': '#fed7aa'},
}


def _field(result, name, default=None):
    if isinstance(result, dict):
        return result.get(name, default)
    return getattr(result, name, default)


def _marks(result):
    try:
        return Decimal(str(_field(result, 'total_marks', 0)))
    except InvalidOperation:
        return Decimal(0)


def _matches(result, query):
    total = _field(result, 'total_marks', '')
    haystack = (
        str(_field(result, 'student_name', '') or '').lower(),
        str(_field(result, 'roll_number', '') or '').lower(),
        str(total).lower(),
    )
    return any(query in value for value in haystack)


def filter_and_sort(results, query='', sort_by='rank', order='asc'):
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"sort_by must be one of {', '.join(SORT_FIELDS)}")
    if order not in ('asc', 'desc'):
        raise ValueError("order must be 'asc' or 'desc'")

    rows = list(results)
    query = (query or '').strip().lower()
    if query:
        rows = [row for row in rows if _matches(row, query)]

    if sort_by == 'name':
        key = lambda row: str(_field(row, 'student_name', '') or '').lower()
    elif sort_by == 'marks':
        key = _marks
    else:
        key = lambda row: _field(row, 'rank', 0)

    return sorted(rows, key=key, reverse=(order == 'desc'))


def medal_for(result):
    """Badge metadata for a gold, silver or bronze row, otherwise None"""
    tier = _field(result, 'tier')
    if tier not in MEDALS:
        return None
    return {'tier': tier, 'rank': _field(result, 'rank'), **MEDALS[tier]}
