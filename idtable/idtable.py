from __future__ import annotations

import logging
from typing import Iterable, Iterator, Protocol, runtime_checkable

from .counted import CountedM2M

log = logging.getLogger(__name__)


@runtime_checkable
class Identified(Protocol):
    """
    anything that can be a row, column or value of an IdTable

    id() must return the same non-negative integer for the whole
    time the object is in a table, and must be unique among the
    objects used on the same axis; neither is checked -- an object
    whose id changes silently corrupts the table
    """
    def id(self) -> int: ...


class IdTable(object):
    """
    a two dimensional table of sets: each (row, column) cell holds
    a set of values, where rows, columns and values are all known
    only by their integer identities

    alongside the cells, two axis indices are kept up to date:
    .rows maps a row to every value held under that row in any column,
    .cols maps a column to every value held under that column in any row

    a value held in several cells of the same row is counted once per
    cell, so clearing one of those cells leaves it in the row index;
    the same goes for columns

    .grid maps each row to the columns it has occupied cells in
    (and .grid.inv each column to its rows)
    """
    __slots__ = ('tuples', 'rows', 'cols', 'grid', 'listeners')

    def __init__(self, triples=None):
        self.tuples = {}  # {(row_id, col_id): set(value_id)}
        self.rows = CountedM2M()
        self.cols = CountedM2M()
        self.grid = CountedM2M()
        self.listeners = []
        if triples.__class__ is self.__class__:
            self.tuples = dict(
                [(k, set(v)) for k, v in triples.tuples.items()])
            self.rows = CountedM2M(triples.rows)
            self.cols = CountedM2M(triples.cols)
            self.grid = CountedM2M(triples.grid)
            return
        if triples:
            self.update(triples)

    def insert(self, row: Identified, col: Identified, value: Identified) -> bool:
        """
        put value in the cell at (row, col)

        returns False if it was already there
        """
        return self.insert_ids(row.id(), col.id(), value.id())

    def insert_ids(self, row_id: int, col_id: int, value_id: int) -> bool:
        key = (row_id, col_id)
        cell = self.tuples.get(key)
        if cell is None:
            cell = self.tuples[key] = set()
        elif value_id in cell:
            return False
        cell.add(value_id)
        self.rows.add(row_id, value_id)
        self.cols.add(col_id, value_id)
        self.grid.add(row_id, col_id)
        for listener in self.listeners:
            listener.notify_insert(row_id, col_id, value_id)
        return True

    def remove(self, row_id: int, col_id: int, value_id: int) -> bool:
        """
        take value_id out of the cell at (row_id, col_id)

        a no-op returning False if the cell does not hold it
        """
        key = (row_id, col_id)
        cell = self.tuples.get(key)
        if cell is None or value_id not in cell:
            return False
        cell.remove(value_id)
        if not cell:
            del self.tuples[key]
        self.rows.remove(row_id, value_id)
        self.cols.remove(col_id, value_id)
        self.grid.remove(row_id, col_id)
        for listener in self.listeners:
            listener.notify_remove(row_id, col_id, value_id)
        return True

    def remove_row(self, row_id: int) -> int:
        """remove every value under row_id, returning how many were removed"""
        removed = 0
        for col_id in self.grid.get(row_id):
            for value_id in frozenset(self.tuples[row_id, col_id]):
                self.remove(row_id, col_id, value_id)
                removed += 1
        log.debug("removed %d values from row %r", removed, row_id)
        return removed

    def remove_column(self, col_id: int) -> int:
        """remove every value under col_id, returning how many were removed"""
        removed = 0
        for row_id in self.grid.inv.get(col_id):
            for value_id in frozenset(self.tuples[row_id, col_id]):
                self.remove(row_id, col_id, value_id)
                removed += 1
        log.debug("removed %d values from column %r", removed, col_id)
        return removed

    def update(self, triples: Iterable) -> None:
        """given an iterable of (row_id, col_id, value_id), insert them all"""
        if type(triples) is type(self):
            triples = list(triples.iteritems())
        for row_id, col_id, value_id in triples:
            self.insert_ids(row_id, col_id, value_id)

    def cell(self, row_id: int, col_id: int) -> frozenset:
        return frozenset(self.tuples.get((row_id, col_id), ()))

    def row(self, row_id: int) -> frozenset:
        """every value held under row_id, in any column"""
        return self.rows.get(row_id)

    def column(self, col_id: int) -> frozenset:
        """every value held under col_id, in any row"""
        return self.cols.get(col_id)

    def columns_of(self, row_id: int) -> frozenset:
        return self.grid.get(row_id)

    def rows_of(self, col_id: int) -> frozenset:
        return self.grid.inv.get(col_id)

    def rows_with(self, value_id: int) -> frozenset:
        return self.rows.inv.get(value_id)

    def columns_with(self, value_id: int) -> frozenset:
        return self.cols.inv.get(value_id)

    def cells(self):
        return self.tuples.keys()

    def iteritems(self) -> Iterator[tuple[int, int, int]]:
        for (row_id, col_id), cell in self.tuples.items():
            for value_id in cell:
                yield row_id, col_id, value_id

    def is_empty(self) -> bool:
        """
        True when no cell holds a value; the agreement of the indices
        with the cells is only audited when assertions are enabled
        """
        empty = not self.tuples
        # every index drains together with the cells
        assert empty == (not self.rows) == (not self.cols) == (not self.grid)
        return empty

    def check(self) -> None:
        """
        rebuild every index from the cells and compare;
        raises AssertionError on the first mismatch
        """
        rows, cols, grid = CountedM2M(), CountedM2M(), CountedM2M()
        for (row_id, col_id), cell in self.tuples.items():
            assert cell, "empty cell {!r}".format((row_id, col_id))
            grid.add(row_id, col_id)
            for value_id in cell:
                rows.add(row_id, value_id)
                cols.add(col_id, value_id)
        assert rows == self.rows, "row index out of sync"
        assert cols == self.cols, "column index out of sync"
        assert grid.data == self.grid.data, "grid out of sync"
        for (row_id, col_id), cell in self.tuples.items():
            assert self.grid.count(row_id, col_id) == len(cell)

    def copy(self) -> "IdTable":
        return self.__class__(self)

    __copy__ = copy

    def __contains__(self, key):
        """(row_id, col_id) tests for an occupied cell,
        (row_id, col_id, value_id) for a value in a cell"""
        if type(key) is not tuple:
            return False
        if len(key) == 3:
            return key[2] in self.tuples.get(key[:2], ())
        return key in self.tuples

    def __iter__(self):
        return self.iteritems()

    def __len__(self):
        return self.tuples.__len__()

    def __eq__(self, other):
        return type(self) == type(other) and self.tuples == other.tuples

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r)' % (cn, sorted(self.iteritems()))
