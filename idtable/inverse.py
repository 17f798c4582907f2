"""
An InverseTable is a snapshot taken from an IdTable: for each
occupied cell, which values can be seen from the cell's column
but not from its row (and the other way around)

It is rebuilt from scratch on demand rather than maintained;
keeping it current would mean revisiting every cell that shares
a row or column with each changed cell
"""
import logging
from types import MappingProxyType

log = logging.getLogger(__name__)


def _frozen(data):
    return MappingProxyType(dict(
        [(k, frozenset(v)) for k, v in (data or {}).items()]))


class InverseTable(object):
    """
    read-only mapping of (row_id, col_id) -> frozenset of value ids

    [r, c] is the values of column c that row r does not have;
    .row_except[r, c] is the values of row r that column c does not have
    """
    __slots__ = ('column_except', 'row_except')

    def __init__(self, column_except=None, row_except=None):
        self.column_except = _frozen(column_except)
        self.row_except = _frozen(row_except)

    @classmethod
    def rebuild_from(cls, table):
        column_except, row_except = {}, {}
        rows, cols = table.rows.data, table.cols.data
        for key in table.tuples:
            row_id, col_id = key
            row_vals, col_vals = rows[row_id], cols[col_id]
            column_except[key] = frozenset(col_vals - row_vals)
            row_except[key] = frozenset(row_vals - col_vals)
        log.debug("rebuilt inverse over %d cells", len(column_except))
        return cls(column_except, row_except)

    def get(self, key, default=frozenset()):
        return self.column_except.get(key, default)

    def __getitem__(self, key):
        return self.column_except[key]

    def keys(self):
        return self.column_except.keys()

    def items(self):
        return self.column_except.items()

    def __contains__(self, key):
        return key in self.column_except

    def __iter__(self):
        return self.column_except.__iter__()

    def __len__(self):
        return self.column_except.__len__()

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __eq__(self, other):
        return (type(self) == type(other)
                and dict(self.column_except) == dict(other.column_except)
                and dict(self.row_except) == dict(other.row_except))

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r)' % (cn, sorted(self.column_except.items()))
