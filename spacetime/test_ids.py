
from spacetime.ids import expand

def test_expand_local():
    assert expand('ds1', '42') == 'ds1/42'

def test_expand_global():
    """Ids from another dataset pass through"""
    assert expand('ds1', 'ds2/42') == 'ds2/42'

def test_expand_int():
    assert expand('ds1', 42) == 'ds1/42'
