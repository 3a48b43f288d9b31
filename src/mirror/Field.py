#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot, FConst


class Field(Slot):
    """Field reflection - a declared field of a type.

    Fields are created either:
    1. By explicit registration via Type.af_()
    2. By introspection of the class body (see Members)

    The accessor bypasses the normal Python attribute protocol: values are
    read with object.__getattribute__ and written with object.__setattr__,
    so custom __setattr__ guards and frozen dataclasses do not apply, and
    name-mangled private attributes are reached through their storage name.
    """

    def __init__(self, parent=None, name="", flags=0, type_=None, attr=None, getter=None, setter=None):
        """Create a Field reflection object.

        Args:
            parent: Declaring Type
            name: Field name
            flags: Slot flags (FConst values)
            type_: Type tag string
            attr: Storage attribute name, defaults to name
            getter: Optional callable(target) used instead of direct access
            setter: Optional callable(target, val) used instead of direct access
        """
        super().__init__(parent, name, flags)
        self._type = type_ if type_ is not None else "sys::Obj"
        self._attr = attr if attr is not None else name
        self._getter = getter
        self._setter = setter

    def isField(self):
        return True

    def type(self):
        """Get field type tag."""
        return self._type

    def attr(self):
        """Get storage attribute name."""
        return self._attr

    def isReadonly(self):
        return self._getter is not None and self._setter is None

    def get(self, obj=None):
        """Get field value from object.

        Args:
            obj: Object to get field from (None or a class for static fields)

        Returns:
            Field value, or None if the attribute was never assigned
        """
        from .Err import ArgErr

        if self.isStatic():
            if self._getter is not None:
                return self._getter(self._owner())
            return self._owner().__dict__.get(self._attr)

        if obj is None or isinstance(obj, type):
            raise ArgErr.make(f"Instance field {self.qname()} requires target object")

        if self._getter is not None:
            return self._getter(obj)
        try:
            return object.__getattribute__(obj, self._attr)
        except AttributeError:
            return None

    def set_(self, obj, val):
        """Set field value on object.

        Args:
            obj: Object to set field on (None or a class for static fields)
            val: Value to set
        """
        from .Err import ArgErr, ReflectErr

        if self.isReadonly():
            raise ReflectErr.make(f"Cannot set readonly field {self.qname()}")

        if self.isStatic():
            owner = self._owner()
            if self._setter is not None:
                self._setter(owner, val)
                return
            try:
                type.__setattr__(owner, self._attr, val)
            except (AttributeError, TypeError) as e:
                raise ReflectErr.make(f"Cannot set static field {self.qname()}", e)
            return

        if obj is None or isinstance(obj, type):
            raise ArgErr.make(f"Instance field {self.qname()} requires target object")

        if self._setter is not None:
            self._setter(obj, val)
            return
        try:
            object.__setattr__(obj, self._attr, val)
        except (AttributeError, TypeError) as e:
            raise ReflectErr.make(f"Cannot set field {self.qname()}", e)

    def _owner(self):
        """Python class that stores static values."""
        return self._parent.cls()

    @staticmethod
    def storageName(cls, name):
        """Attribute name Python actually stores for a declared name."""
        if name.startswith("__") and not name.endswith("__"):
            return f"_{cls.__name__.lstrip('_')}{name}"
        return name

    @staticmethod
    def fromProperty(parent, name, prop, tag):
        """Create a Field backed by a property's fget/fset."""
        flags = Slot.visibilityFlags(name) | FConst.Getter
        if prop.fset is not None:
            flags |= FConst.Setter
        return Field(parent, name, flags, tag, None, prop.fget, prop.fset)

    @staticmethod
    def fromCachedProperty(parent, name, prop, tag):
        """Create a readonly Field computed (and cached) by a functools.cached_property."""
        flags = Slot.visibilityFlags(name) | FConst.Getter
        return Field(parent, name, flags, tag, None, lambda obj: prop.__get__(obj, type(obj)))

    def toStr(self):
        return f"{self._type} {self.qname()}"
