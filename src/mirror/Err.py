#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


class Err(Exception):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        self._msg = msg
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    def msg(self):
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def toStr(self):
        name = type(self).__name__
        if self._msg:
            return f"{name}: {self._msg}"
        return name

    def __str__(self):
        return self.toStr()


class ArgErr(Err):
    """Argument error - invalid descriptor, missing target or wrong arity"""
    pass


class ReflectErr(Err):
    """Wraps a failure of the underlying attribute machinery"""
    pass


class UnknownTypeErr(Err):
    """Unknown type error - qname does not resolve to a class"""
    pass


class UnknownPodErr(Err):
    """Unknown pod error - package cannot be found on the import path"""
    pass


class NoSuchFieldErr(Err):
    """Field lookup failed on a type's field table"""

    def __init__(self, msg=None, cause=None, type_=None, name=None):
        super().__init__(msg, cause)
        self._type = type_
        self._name = name

    @classmethod
    def makeFor(cls, type_, name):
        return cls(f"No such field {name} in the {type_.qname()}", None, type_, name)

    def type(self):
        return self._type

    def name(self):
        return self._name


class NoSuchMethodErr(Err):
    """Method lookup failed, either unknown name or no overload matching the signature"""

    def __init__(self, msg=None, cause=None, type_=None, name=None, signature=None):
        super().__init__(msg, cause)
        self._type = type_
        self._name = name
        self._signature = signature

    @classmethod
    def makeFor(cls, type_, name, signature=None):
        if signature is None:
            msg = f"can not found any method is named {name} in the {type_.qname()}"
        else:
            msg = f"No such method {name}{signature} in the {type_.qname()}"
        return cls(msg, None, type_, name, signature)

    def type(self):
        return self._type

    def name(self):
        return self._name

    def signature(self):
        return self._signature


class ConstructionErr(Err):
    """Type could not be default-constructed"""

    def __init__(self, msg=None, cause=None, type_=None):
        super().__init__(msg, cause)
        self._type = type_

    @classmethod
    def makeFor(cls, type_, cause=None):
        return cls(f"Cannot construct {type_.qname()}", cause, type_)

    def type(self):
        return self._type
