
from spacetime.dates import earliest, fuzzy_range, latest

import datetime
import pytest

def _d(*args):
    return datetime.datetime(*args, tzinfo=datetime.timezone.utc)

def test_year():
    lo, hi = fuzzy_range('1850')
    assert lo == _d(1850, 1, 1)
    assert hi == _d(1850, 12, 31, 23, 59, 59, 999999)

def test_int_year():
    assert fuzzy_range(1850) == fuzzy_range('1850')

def test_uncertain_year():
    assert fuzzy_range('1850?') == fuzzy_range('1850')

def test_month():
    lo, hi = fuzzy_range('2000-02')
    assert lo == _d(2000, 2, 1)
    assert hi.date() == datetime.date(2000, 2, 29)

def test_day():
    lo, hi = fuzzy_range('2001-05-17')
    assert lo == _d(2001, 5, 17)
    assert hi.date() == datetime.date(2001, 5, 17)

def test_decade():
    assert earliest('185x') == _d(1850, 1, 1)
    assert latest('185x').year == 1859
    assert fuzzy_range('1850s') == fuzzy_range('185x')

def test_century():
    assert earliest('18xx') == _d(1800, 1, 1)
    assert latest('18xx').year == 1899

def test_approximate():
    assert earliest('~1850') == _d(1845, 1, 1)
    assert latest('~1850').year == 1855
    assert latest('~1850', approximate_years=1).year == 1851

def test_range():
    lo, hi = fuzzy_range('[1850, 1870-06]')
    assert lo == _d(1850, 1, 1)
    assert hi.date() == datetime.date(1870, 6, 30)
    assert fuzzy_range('1850/1870-06') == (lo, hi)

def test_timestamp():
    lo, hi = fuzzy_range('2021-08-01T03:45:56+02:00')
    assert lo == hi == _d(2021, 8, 1, 1, 45, 56)

def test_bad():
    for d in ['hey there', '', None, True, '2000-13', '[1900, 1800]', {}]:
        with pytest.raises(ValueError) as exc:
            fuzzy_range(d)
        assert 'Bad date' in str(exc.value)
        assert earliest(d) is None
        assert latest(d) is None
