"""Fuzzy dates. Datasets describe validity with loose expressions like `1850`,
`185x`, `~1850` or `1850-03`; each expression stands for a range of instants.

`fuzzy_range()` converts an expression into the earliest and latest instant
it can refer to. Expressions are never rewritten in output; the range is only
used to compare expressions from different datasets.
"""

import arrow
import re

_RE_YEAR = re.compile(r'^(\d{1,4})\??$')
_RE_MONTH = re.compile(r'^(\d{4})-(\d{2})$')
_RE_DAY = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')
_RE_DECADE = re.compile(r'^(\d{3})(?:x|0s)$')
_RE_CENTURY = re.compile(r'^(\d{2})xx$')
_RE_APPROXIMATE = re.compile(r'^~\s*(\d{1,4})$')
_RE_RANGE = re.compile(r'^\[\s*([^,\]]+?)\s*,\s*([^,\]]+?)\s*\]$')

MIN_YEAR = 1
MAX_YEAR = 9999

def fuzzy_range(expr, approximate_years=5):
    """Returns `(earliest, latest)` UTC datetimes covered by `expr`.

    Raises `ValueError` if the expression cannot be resolved.

    Args:
        approximate_years: Margin, on each side, for `~YYYY` expressions.
    """
    if isinstance(expr, bool) or expr is None:
        raise ValueError(f'Bad date: {expr!r}')
    if isinstance(expr, int):
        expr = str(expr)
    if not isinstance(expr, str):
        raise ValueError(f'Bad date: {expr!r}')

    s = expr.strip()
    if not s:
        raise ValueError(f'Bad date: {expr!r}')

    m = _RE_RANGE.match(s)
    if m is None and s.count('/') == 1:
        m = re.match(r'^(.+?)/(.+)$', s)
    if m is not None:
        start = fuzzy_range(m.group(1), approximate_years)[0]
        end = fuzzy_range(m.group(2), approximate_years)[1]
        if end < start:
            raise ValueError(f'Bad date: {expr!r} ends before it starts')
        return start, end

    m = _RE_YEAR.match(s)
    if m is not None:
        return _years(int(m.group(1)), int(m.group(1)), expr)

    m = _RE_DECADE.match(s)
    if m is not None:
        y = int(m.group(1)) * 10
        return _years(y, y + 9, expr)

    m = _RE_CENTURY.match(s)
    if m is not None:
        y = int(m.group(1)) * 100
        return _years(y, y + 99, expr)

    m = _RE_APPROXIMATE.match(s)
    if m is not None:
        y = int(m.group(1))
        return _years(max(MIN_YEAR, y - approximate_years),
                min(MAX_YEAR, y + approximate_years), expr)

    m = _RE_MONTH.match(s)
    if m is not None:
        return _span(expr, 'month', int(m.group(1)), int(m.group(2)), 1)

    m = _RE_DAY.match(s)
    if m is not None:
        return _span(expr, 'day', int(m.group(1)), int(m.group(2)),
                int(m.group(3)))

    # Anything else must be a full timestamp, which is a single instant
    try:
        t = arrow.get(s).to('UTC')
    except (TypeError, ValueError, arrow.parser.ParserError):
        raise ValueError(f'Bad date: {expr!r}')
    return t.datetime, t.datetime


def earliest(expr, approximate_years=5):
    """Returns the earliest instant of `expr`, or None if it does not
    resolve.
    """
    try:
        return fuzzy_range(expr, approximate_years)[0]
    except ValueError:
        return None


def latest(expr, approximate_years=5):
    """Returns the latest instant of `expr`, or None if it does not resolve.
    """
    try:
        return fuzzy_range(expr, approximate_years)[1]
    except ValueError:
        return None


def _span(expr, frame, year, month, day):
    try:
        lo, hi = arrow.Arrow(year, month, day, tzinfo='UTC').span(frame)
    except ValueError:
        raise ValueError(f'Bad date: {expr!r}')
    return lo.datetime, hi.datetime


def _years(first, last, expr):
    if first < MIN_YEAR or last > MAX_YEAR:
        raise ValueError(f'Bad date: {expr!r} out of range')
    lo = arrow.Arrow(first, 1, 1, tzinfo='UTC')
    hi = arrow.Arrow(last, 1, 1, tzinfo='UTC').ceil('year')
    return lo.datetime, hi.datetime
