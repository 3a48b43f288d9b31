#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot, FConst


class Method(Slot):
    """Method reflection - a declared method of a type.

    Methods are created either:
    1. By explicit registration via Type.am_()
    2. By introspection of the class body (see Members)
    """

    def __init__(self, parent=None, name="", flags=0, returns=None, params=None, func=None, varargs=False):
        """Create a Method reflection object.

        Args:
            parent: Declaring Type
            name: Method name
            flags: Slot flags (FConst values)
            returns: Return type tag
            params: List of Param objects
            func: Plain Python function; instance methods take the target
                  first, class methods take the class first
            varargs: True if the function accepts extra positional arguments
        """
        super().__init__(parent, name, flags)
        self._returns = returns if returns is not None else "sys::Obj"
        self._params = list(params) if params is not None else []
        self._func = func
        self._varargs = varargs
        self._signature = None

    def isMethod(self):
        return True

    def isClassMethod(self):
        return (self._flags & FConst.ClassMethod) != 0

    def returns(self):
        """Get return type tag."""
        return self._returns

    def params(self):
        """Get parameter list (copy)."""
        return list(self._params)

    def paramTypes(self):
        return [p.type() for p in self._params]

    def func(self):
        return self._func

    def signature(self):
        """Overload signature built from the ordered parameter tags."""
        if self._signature is None:
            from .Kinds import Kind
            self._signature = Kind.signature(self.paramTypes())
        return self._signature

    def callOn(self, target, args=None):
        """Call method on a specific target object.

        Args:
            target: Object to call method on; for static methods it may be
                    None, the class, or an instance (ignored except for
                    class methods, which receive its class)
            args: List of arguments (method args, NOT including target)

        Returns:
            Whatever the method returns. Exceptions raised by the method
            itself propagate unchanged.
        """
        from .Err import ArgErr

        args = list(args) if args is not None else []

        min_args = sum(1 for p in self._params if not p.hasDefault())
        max_args = len(self._params)
        if len(args) < min_args:
            raise ArgErr.make(f"Method {self.qname()} requires {min_args} arguments, got {len(args)}")
        if len(args) > max_args and not self._varargs:
            raise ArgErr.make(f"Method {self.qname()} takes at most {max_args} arguments, got {len(args)}")

        if self._func is None:
            raise ArgErr.make(f"Method {self.qname()} has no implementation")

        if self.isStatic():
            if self.isClassMethod():
                if isinstance(target, type):
                    cls = target
                elif target is not None:
                    cls = type(target)
                else:
                    cls = self._parent.cls()
                return self._func(cls, *args)
            return self._func(*args)

        if target is None or isinstance(target, type):
            raise ArgErr.make(f"Instance method {self.qname()} requires target object")
        return self._func(target, *args)

    def toStr(self):
        return f"{self._returns} {self.qname()}{self.signature()}"
