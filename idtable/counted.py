class _Tmp(object):
    __slots__ = ('inv', 'data', 'counts', 'listeners', '_fwd')
    # just a little trick to avoid __init__


class CountedM2M(object):
    """
    a dict-like entity that represents a many-to-many relationship
    between two groups of objects, where every (key, val) pair
    carries an occurrence count

    behaves like a dict-of-frozensets; a pair is visible as soon as
    its count is at least 1 and disappears when the count returns
    to 0, so add() / remove() may be called once per contributing
    source and the visible sets stay the union over all sources

    also has .inv which is kept up to date, a dict-of-frozensets in
    the other direction sharing the same counts
    """
    __slots__ = ('inv', 'data', 'counts', 'listeners', '_fwd')

    def __init__(self, items=None):
        self.listeners = []
        self._fwd = True
        self.inv = _Tmp()
        self.inv.listeners = []
        self.inv.inv = self
        self.inv._fwd = False
        self.inv.__class__ = self.__class__
        if items.__class__ is self.__class__:
            self.data = dict(
                [(k, set(v)) for k, v in items.data.items()])
            self.inv.data = dict(
                [(k, set(v)) for k, v in items.inv.data.items()])
            if items._fwd:
                counts = dict(items.counts)
            else:
                # copying an .inv; counts are stored forward-keyed
                counts = dict(
                    [((v, k), n) for (k, v), n in items.counts.items()])
            self.counts = self.inv.counts = counts
            return
        self.data = {}
        self.inv.data = {}
        self.counts = self.inv.counts = {}
        if items:
            self.update(items)

    def _pair(self, key, val):
        if self._fwd:
            return key, val
        return val, key

    def _notify_add(self, key, val):
        for listener in self.listeners:
            listener.notify_add(key, val)
        for listener in self.inv.listeners:
            listener.notify_add(val, key)

    def _notify_remove(self, key, val):
        for listener in self.listeners:
            listener.notify_remove(key, val)
        for listener in self.inv.listeners:
            listener.notify_remove(val, key)

    def count(self, key, val):
        """how many times (key, val) is currently held; 0 if absent"""
        return self.counts.get(self._pair(key, val), 0)

    def add(self, key, val):
        """
        count one more occurrence of (key, val)

        returns True if the pair just became visible
        """
        pair = self._pair(key, val)
        if pair in self.counts:
            self.counts[pair] += 1
            return False
        self.counts[pair] = 1
        if key not in self.data:
            self.data[key] = set()
        self.data[key].add(val)
        if val not in self.inv.data:
            self.inv.data[val] = set()
        self.inv.data[val].add(key)
        self._notify_add(key, val)
        return True

    def remove(self, key, val):
        """
        count one less occurrence of (key, val)

        returns True if the pair is no longer visible;
        raises KeyError if the pair is not held at all
        """
        pair = self._pair(key, val)
        if self.counts[pair] > 1:
            self.counts[pair] -= 1
            return False
        del self.counts[pair]
        self.data[key].remove(val)
        if not self.data[key]:
            del self.data[key]
        self.inv.data[val].remove(key)
        if not self.inv.data[val]:
            del self.inv.data[val]
        self._notify_remove(key, val)
        return True

    def discard(self, key, val):
        if self._pair(key, val) not in self.counts:
            return False
        return self.remove(key, val)

    def update(self, iterable):
        """given an iterable of (key, val), add them all"""
        if type(iterable) is type(self):
            for key, val in iterable.iteritems():
                for _ in range(iterable.count(key, val)):
                    self.add(key, val)
        elif callable(getattr(iterable, 'keys', None)):
            for k in iterable.keys():
                for v in iterable[k]:
                    self.add(k, v)
        else:
            for key, val in iterable:
                self.add(key, val)

    def get(self, key, default=frozenset()):
        try:
            return self[key]
        except KeyError:
            return default

    def getall(self, keys):
        """
        combine the values of many keys together
        without changing the return type
        """
        empty, sofar = set(), set()
        for key in keys:
            sofar |= self.data.get(key, empty)
        return frozenset(sofar)

    def __getitem__(self, key):
        return frozenset(self.data[key])

    def iteritems(self):
        for key in self.data:
            for val in self.data[key]:
                yield key, val

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.inv.data.keys()

    def copy(self):
        return self.__class__(self)

    __copy__ = copy

    def __contains__(self, key):
        return key in self.data

    def __iter__(self):
        return self.data.__iter__()

    def __len__(self):
        return self.data.__len__()

    def __eq__(self, other):
        if type(self) != type(other) or self.data != other.data:
            return False
        for key, val in self.iteritems():
            if self.count(key, val) != other.count(key, val):
                return False
        return True

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r)' % (cn, [
            (key, val, self.count(key, val)) for key, val in self.iteritems()])
