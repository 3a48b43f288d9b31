#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Err import ArgErr, NoSuchFieldErr, NoSuchMethodErr
from .Kinds import Kind
from .MetaCache import MetaCache
from .Type import Type


class Reflect:
    """Dynamic field access, method invocation and property copying by name.

    Every operation resolves the target type, looks the member up in the
    cached tables of a MetaCache and then uses the member's own accessor.
    A class (or Type) given where an instance is expected denotes the type
    itself, which is how static fields and methods are reached.
    """

    _cur = None

    def __init__(self, cache=None):
        self._cache = cache if cache is not None else MetaCache.cur()

    @staticmethod
    def cur():
        """Default instance bound to MetaCache.cur()"""
        if Reflect._cur is None:
            Reflect._cur = Reflect()
        return Reflect._cur

    def cache(self):
        return self._cache

    #########################################################################
    # Accessor
    #########################################################################

    def getField(self, obj, name):
        """Read field 'name' of an instance, or a static field of a class.

        Raises:
            NoSuchFieldErr: if the type has no such field
        """
        return self._field(self._targetType(obj), name).get(self._target(obj))

    def setField(self, obj, name, val):
        """Write field 'name' of an instance, or a static field of a class.

        Raises:
            NoSuchFieldErr: if the type has no such field
        """
        self._field(self._targetType(obj), name).set_(self._target(obj), val)

    def getFieldType(self, type_, name):
        """Return the declared type tag of a field."""
        return self._field(self._targetType(type_), name).type()

    def _field(self, t, name):
        f = self._cache.fieldTable(t).get(name)
        if f is None:
            raise NoSuchFieldErr.makeFor(t, name)
        return f

    #########################################################################
    # Invoker
    #########################################################################

    def invoke(self, obj, name, args=None, argTypes=None):
        """Invoke method 'name' on an instance, or a static method of a class.

        Args:
            obj: Instance, class or Type
            name: Method name
            args: List of argument values
            argTypes: Parameter types (tags or annotations) selecting one
                      overload; ignored when the name is not overloaded

        Returns:
            The method's return value
        """
        m = self.findMethod(self._targetType(obj), name, argTypes)
        return m.callOn(self._target(obj), args)

    def findMethod(self, type_, name, argTypes=None):
        """Resolve a method by name, by exact signature if overloaded.

        There is no best-match search: several overloads require argTypes
        whose signature string equals one overload's signature exactly.

        Raises:
            NoSuchMethodErr: unknown name, missing argTypes, or no exact match
        """
        t = self._targetType(type_)
        overloads = self._cache.methodTable(t).get(name)
        if not overloads:
            raise NoSuchMethodErr.makeFor(t, name)
        if len(overloads) == 1:
            return next(iter(overloads.values()))
        if argTypes is None:
            raise NoSuchMethodErr(f"No such method {name}() in the {t.qname()}: "
                                  f"{len(overloads)} overloads require argTypes", None, t, name)
        sig = Kind.signature([Kind.tagOf(a) for a in argTypes])
        m = overloads.get(sig)
        if m is None:
            raise NoSuchMethodErr.makeFor(t, name, sig)
        return m

    #########################################################################
    # Property Copier / Converter
    #########################################################################

    def copyProperties(self, src, dst, acceptNull=True):
        """Copy compatible non-static fields from src to dst.

        A field is copied when dst has a field of the same name whose type
        tag is identical, or primitive/boxed equivalent (sys::Int and
        sys::Int? for example). Other fields are skipped silently; an
        error reading or writing a compatible field aborts the copy.

        Args:
            src: Source instance
            dst: Destination instance
            acceptNull: If False, None source values are not written
        """
        if src is None or dst is None:
            raise ArgErr.make("copyProperties requires source and destination")
        srcFields = self._cache.fieldTable(Type.of(src))
        dstFields = self._cache.fieldTable(Type.of(dst))
        for name, sf in srcFields.items():
            if sf.isStatic():
                continue
            df = dstFields.get(name)
            if df is None or df.isStatic() or df.isReadonly():
                continue
            if not Reflect.isCompatible(sf.type(), df.type()):
                continue
            val = sf.get(src)
            if val is None and not acceptNull:
                continue
            df.set_(dst, val)

    def convert(self, src, destType):
        """Create a default instance of destType and copy src into it (no None values)."""
        t = self._targetType(destType)
        dst = t.make()
        self.copyProperties(src, dst, False)
        return dst

    def convertList(self, srcs, destType):
        """Convert each element, preserving order"""
        return [self.convert(src, destType) for src in srcs]

    @staticmethod
    def isCompatible(srcTag, dstTag):
        return srcTag == dstTag or Kind.isEquivalent(srcTag, dstTag)

    #########################################################################
    # Target resolution
    #########################################################################

    def _targetType(self, obj):
        if obj is None:
            raise ArgErr.make("Target is null")
        return Type.of(obj)

    def _target(self, obj):
        if isinstance(obj, Type):
            return obj.cls()
        return obj
