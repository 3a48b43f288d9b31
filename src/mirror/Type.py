#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect

from .concurrent.ConcurrentMap import ConcurrentMap
from .Kinds import Kind


class Type:
    """Type class - reflection handle for a Python class.

    There is exactly one Type per class; Type.find(cls) and Type.of(obj)
    always return the same instance, so a Type is usable as a cache key.
    """

    # Cache of Type instances by class for identity comparison
    _cache = ConcurrentMap()

    def __init__(self, cls):
        self._cls = cls
        self._qname = Kind.qnameOf(cls)
        self._name = cls.__name__
        # Explicit metadata registered via af_/am_
        self._slots_info = []
        self._sealed = False

    @staticmethod
    def of(obj):
        """Get type of object; a class or Type denotes itself."""
        if obj is None:
            return None
        if isinstance(obj, Type):
            return obj
        if isinstance(obj, type):
            return Type.find(obj)
        return Type.find(type(obj))

    @staticmethod
    def find(target, checked=True):
        """Find type by class, Type or qname string - returns cached singleton.

        Args:
            target: Python class, Type, or 'module::Qualname'
            checked: If True, raise instead of returning None

        Returns:
            Type instance or None (if checked=False and not found)
        """
        if isinstance(target, Type):
            return target
        if isinstance(target, type):
            t = Type._cache.get(target)
            if t is not None:
                return t
            return Type._cache.getOrAdd(target, Type(target))
        if isinstance(target, str) and "::" in target:
            cls = Type._resolveQname(target)
            if cls is not None:
                return Type.find(cls)
            if checked:
                from .Err import UnknownTypeErr
                raise UnknownTypeErr.make(f"Unknown type: {target}")
            return None
        if checked:
            from .Err import ArgErr
            raise ArgErr.make(f"Not a type: {target!r}")
        return None

    @staticmethod
    def _resolveQname(qname):
        import importlib

        module_name, _, qualname = qname.partition("::")
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            return None
        for part in qualname.split("."):
            obj = getattr(obj, part, None)
            if obj is None:
                return None
        return obj if isinstance(obj, type) else None

    def cls(self):
        """Python class this type describes"""
        return self._cls

    def name(self):
        return self._name

    def qname(self):
        return self._qname

    def inheritance(self):
        """Return inheritance chain from this type to object, child first."""
        return [Type.find(c) for c in self._cls.__mro__]

    def isAbstract(self):
        return inspect.isabstract(self._cls)

    def make(self, args=None):
        """Create instance using the no-arg (or given args) constructor.

        Raises:
            ConstructionErr: if the class cannot be instantiated
        """
        from .Err import ConstructionErr

        if self.isAbstract():
            raise ConstructionErr.makeFor(self)
        try:
            return self._cls(*(args or []))
        except Exception as e:
            raise ConstructionErr.makeFor(self, e)

    #########################################################################
    # Slot Reflection - Metadata Registration
    #########################################################################

    def af_(self, name, flags, type_sig, attr=None, getter=None, setter=None):
        """Add field metadata.

        Registered slots replace introspection for this class level:
          Type.find(Point).af_('x', FConst.Public, 'sys::Long')

        Args:
            name: Field name
            flags: Slot flags (FConst values)
            type_sig: Type tag or Python annotation
            attr: Storage attribute name if different from name
            getter: Optional callable(target)
            setter: Optional callable(target, val)

        Returns:
            self for method chaining
        """
        from .Field import Field
        self._checkOpen()
        f = Field(self, name, flags or 0, Kind.tagOf(type_sig), attr, getter, setter)
        self._slots_info.append(f)
        return self

    def am_(self, name, flags, returns_sig, params=None, func=None):
        """Add method metadata.

        Several am_ calls with the same name and different parameter
        lists declare overloads:
          Type.find(Calc).am_('add', 0, 'sys::Int', [Param('a', 'sys::Int')], add1)

        Args:
            name: Method name
            flags: Slot flags (FConst values)
            returns_sig: Return type tag or annotation
            params: List of Param objects
            func: Python function implementing the method

        Returns:
            self for method chaining
        """
        from .Method import Method
        from .Param import Param
        self._checkOpen()
        params = [Param(p.name(), Kind.tagOf(p.type()), p.hasDefault()) for p in (params or [])]
        m = Method(self, name, flags or 0, Kind.tagOf(returns_sig), params, func)
        self._slots_info.append(m)
        return self

    def isRegistered(self):
        return len(self._slots_info) > 0

    def registeredSlots(self):
        """Slots registered via af_/am_; seals the type against further registration."""
        self._sealed = True
        return list(self._slots_info)

    def _checkOpen(self):
        if self._sealed:
            from .Err import ArgErr
            raise ArgErr.make(f"Metadata of {self._qname} already published")

    #########################################################################
    # Slot Reflection - Lookup Methods
    #########################################################################

    def fields(self):
        """Return all fields of the cached field table."""
        from .MetaCache import MetaCache
        return list(MetaCache.cur().fieldTable(self).values())

    def field(self, name, checked=True):
        """Find field by name.

        Args:
            name: Field name to find
            checked: If True, raise NoSuchFieldErr if not found

        Returns:
            Field instance or None (if checked=False and not found)
        """
        from .MetaCache import MetaCache
        f = MetaCache.cur().fieldTable(self).get(name)
        if f is not None:
            return f
        if checked:
            from .Err import NoSuchFieldErr
            raise NoSuchFieldErr.makeFor(self, name)
        return None

    def methods(self):
        """Return all methods (every overload) of the cached method table."""
        from .MetaCache import MetaCache
        result = []
        for overloads in MetaCache.cur().methodTable(self).values():
            result.extend(overloads.values())
        return result

    def method(self, name, argTypes=None, checked=True):
        """Find method by name, disambiguated by argTypes if overloaded.

        Returns:
            Method instance or None (if checked=False and not found)
        """
        from .Reflect import Reflect
        from .Err import NoSuchMethodErr
        try:
            return Reflect.cur().findMethod(self, name, argTypes)
        except NoSuchMethodErr:
            if checked:
                raise
            return None

    def __eq__(self, other):
        if not isinstance(other, Type):
            return False
        return self._cls is other._cls

    def __hash__(self):
        return hash(self._cls)

    def toStr(self):
        return self._qname

    def __repr__(self):
        return self._qname
