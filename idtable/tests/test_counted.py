import copy

import pytest

from idtable import CountedM2M


def test_counted_basic():
    m2m = CountedM2M()
    assert len(m2m) == 0
    assert not m2m
    assert m2m.add(1, 'a')
    assert not m2m.add(1, 'a')
    assert m2m.add(1, 'b')
    assert m2m.count(1, 'a') == 2
    assert m2m.inv.count('a', 1) == 2
    assert m2m.count(1, 'z') == 0
    assert len(m2m) == 1
    assert m2m.inv['a'] == frozenset([1])
    assert set(m2m.values()) == set(['a', 'b'])
    assert m2m.inv.getall(['a', 'b']) == frozenset([1])

    assert not m2m.remove(1, 'a')
    assert m2m[1] == frozenset(['a', 'b'])
    assert m2m.remove(1, 'a')
    assert m2m[1] == frozenset(['b'])
    assert 'a' not in m2m.inv
    assert m2m.discard(1, 'b')
    assert not m2m.discard(1, 'b')
    assert 1 not in m2m
    assert m2m.get(1) == frozenset()
    with pytest.raises(KeyError):
        m2m[1]
    with pytest.raises(KeyError):
        m2m.remove(1, 'b')


def test_counted_inv_add():
    m2m = CountedM2M()
    m2m.inv.add('a', 1)
    m2m.add(1, 'a')
    assert m2m.count(1, 'a') == 2
    assert m2m.inv.remove('a', 1) is False
    assert m2m.remove(1, 'a') is True
    assert not m2m and not m2m.inv


def test_counted_update():
    m2m = CountedM2M([(1, 'a'), (1, 'a'), (2, 'b')])
    assert m2m.count(1, 'a') == 2
    other = CountedM2M({1: ['a', 'a'], 2: ['b']})
    assert other == m2m
    merged = CountedM2M(m2m)
    merged.update(other)
    assert merged.count(1, 'a') == 4
    assert merged.count(2, 'b') == 2
    assert set(merged.iteritems()) == set([(1, 'a'), (2, 'b')])


def test_counted_copy():
    def _chk_dup(dup_func):
        m2m = CountedM2M([(1, 2)])
        other = dup_func(m2m)
        assert other == m2m
        m2m.add(1, 2)
        assert other != m2m
        assert other[1] == m2m[1]
        m2m.add(1, 3)
        assert other[1] != m2m[1]

    _chk_dup(copy.copy)
    _chk_dup(copy.deepcopy)
    _chk_dup(CountedM2M)
    _chk_dup(CountedM2M.copy)


def test_counted_copy_of_inv():
    m2m = CountedM2M([(1, 'a'), (1, 'a'), (2, 'a')])
    flipped = CountedM2M(m2m.inv)
    assert flipped == m2m.inv
    assert flipped.count('a', 1) == 2
    assert flipped.inv == m2m


def test_counted_listeners():
    """listeners only hear about pairs appearing and disappearing"""
    class Recorder(object):
        def __init__(self):
            self.events = []
        def notify_add(self, key, val):
            self.events.append(('add', key, val))
        def notify_remove(self, key, val):
            self.events.append(('remove', key, val))

    m2m = CountedM2M()
    fwd, back = Recorder(), Recorder()
    m2m.listeners.append(fwd)
    m2m.inv.listeners.append(back)
    m2m.add(1, 'a')
    m2m.add(1, 'a')
    m2m.remove(1, 'a')
    assert fwd.events == [('add', 1, 'a')]
    m2m.remove(1, 'a')
    assert fwd.events == [('add', 1, 'a'), ('remove', 1, 'a')]
    assert back.events == [('add', 'a', 1), ('remove', 'a', 1)]


def test_counted_repr():
    m2m = CountedM2M([(1, 'a'), (1, 'a')])
    assert repr(m2m) == "CountedM2M([(1, 'a', 2)])"
