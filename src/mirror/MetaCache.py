#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from types import MappingProxyType

from .concurrent.Lock import Lock
from .Log import Log
from .Members import Members


class MetaEntry:
    """Immutable (field table, method table) pair of one type.

    fields:  name -> Field
    methods: name -> (signature -> Method)
    """

    __slots__ = ("_type", "_fields", "_methods")

    def __init__(self, type_, fields, methods):
        self._type = type_
        self._fields = MappingProxyType(dict(fields))
        self._methods = MappingProxyType({n: MappingProxyType(dict(m)) for n, m in methods.items()})

    def type(self):
        return self._type

    def fields(self):
        return self._fields

    def methods(self):
        return self._methods

    def __repr__(self):
        return f"MetaEntry({self._type.qname()}, {len(self._fields)} fields, {len(self._methods)} methods)"


class MetaBuilder:
    """Builds the deduplicated tables of one type.

    The method resolution order is walked child first, so the first field
    seen for a name, and the first method seen for a (name, signature)
    pair, is the most derived one; later duplicates are discarded.
    """

    def __init__(self, members=None):
        self._members = members if members is not None else Members()

    def members(self):
        return self._members

    def build(self, type_):
        fields = {}
        methods = {}
        for t in self._members.levels(type_):
            declaredFields, declaredMethods = self._members.declared(t)
            for f in declaredFields:
                if f.name() not in fields:
                    fields[f.name()] = f
            for m in declaredMethods:
                overloads = methods.setdefault(m.name(), {})
                sig = m.signature()
                if sig not in overloads:
                    overloads[sig] = m
        return MetaEntry(type_, fields, methods)


class MetaCache:
    """Process-wide map from Type to its MetaEntry.

    Entries are built lazily on first demand and never evicted. Lookups of
    a present entry take no lock; a miss takes the single cache lock,
    re-checks, builds and publishes the complete entry with one dict
    assignment, so readers never see a partially built table and each
    type is built exactly once.
    """

    _cur = None
    _curLock = Lock()

    def __init__(self, members=None):
        self._builder = MetaBuilder(members)
        self._lock = Lock()
        self._map = {}
        self._log = Log.get("mirror")

    @staticmethod
    def cur():
        """Default process-wide cache"""
        if MetaCache._cur is None:
            with MetaCache._curLock:
                if MetaCache._cur is None:
                    MetaCache._cur = MetaCache()
        return MetaCache._cur

    def members(self):
        return self._builder.members()

    def ensureCached(self, type_):
        """Build and insert the entry for type_ if absent; idempotent.

        Args:
            type_: Type or Python class

        Returns:
            The cached MetaEntry
        """
        t = self._toType(type_)
        entry = self._map.get(t)
        if entry is not None:
            return entry
        with self._lock:
            entry = self._map.get(t)
            if entry is None:
                entry = self._builder.build(t)
                self._map[t] = entry
                self._log.debug(f"built metadata for {t.qname()}: "
                                f"{len(entry.fields())} fields, {len(entry.methods())} methods")
        return entry

    def ensureCachedBatch(self, types):
        """Pre-warm the cache for every type in the list"""
        for t in types:
            self.ensureCached(t)

    def cachePod(self, name):
        """Discover the types of a package (and subpackages) and pre-warm them.

        Returns:
            List of Types cached
        """
        from .Pod import Pod
        types = Pod.find(name).types()
        self.ensureCachedBatch(types)
        return types

    def fieldTable(self, type_):
        return self.ensureCached(type_).fields()

    def methodTable(self, type_):
        return self.ensureCached(type_).methods()

    def isCached(self, type_):
        return self._toType(type_) in self._map

    def size(self):
        return len(self._map)

    def _toType(self, type_):
        from .Err import ArgErr
        from .Type import Type
        if type_ is None:
            raise ArgErr.make("Type descriptor is null")
        if not isinstance(type_, (Type, type)):
            raise ArgErr.make(f"Not a type: {type_!r}")
        return Type.find(type_)
