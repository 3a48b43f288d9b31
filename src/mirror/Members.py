#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import dataclasses
import functools
import inspect
import typing

from .Field import Field
from .Kinds import Kind
from .Method import Method
from .Param import Param
from .Slot import FConst, Modifier, Slot


class Members:
    """Member enumerator - the directly declared fields and methods of one type.

    Types that registered metadata via Type.af_/am_ report exactly those
    slots. Otherwise the class body is introspected:

    - own annotations become fields (ClassVar[...] ones are static)
    - __slots__ entries without an annotation become untyped fields
    - properties become fields accessed through fget/fset
    - other plain class attributes become static fields
    - functions become instance methods, staticmethod/classmethod static
      ones; a function declared with @typing.overload contributes one
      method per overload signature, all invoking the implementation
    """

    # Never reported as methods: construction hooks, not callable by name
    _SKIP_METHODS = {"__init__", "__new__", "__init_subclass__", "__class_getitem__"}

    # Bookkeeping that typing.Protocol stores on every protocol class
    _SKIP_FIELDS = {"_is_protocol", "_is_runtime_protocol"}

    def __init__(self, dunders=None):
        """
        Args:
            dunders: Enumerate __dunder__ methods; defaults to the 'dunders' config
        """
        if dunders is None:
            from .Env import Env
            dunders = Env.cur().configBool("dunders")
        self._dunders = dunders

    def declared(self, type_):
        """Return (fields, methods) declared directly on type_, no inheritance."""
        if type_.isRegistered():
            slots = type_.registeredSlots()
            fields = [s for s in slots if s.isField()]
            methods = [s for s in slots if s.isMethod()]
            return fields, methods
        return self._introspectFields(type_), self._introspectMethods(type_)

    def levels(self, type_):
        """Declaring levels of type_ in method resolution order, child first.

        Mixins and other secondary bases are included; the typing
        machinery behind Generic and Protocol is not.
        """
        from .Type import Type
        return [t for t in Type.find(type_).inheritance() if not Members._isMachinery(t.cls())]

    def declaredFields(self, type_, modifier=Modifier.WHOLE, backtrack=False):
        """Declared fields, optionally walking the ancestors child first."""
        from .Type import Type
        levels = self.levels(type_) if backtrack else [Type.find(type_)]
        result = []
        for t in levels:
            fields, _ = self.declared(t)
            result.extend(f for f in fields if Modifier.accepts(modifier, f))
        return result

    def declaredMethods(self, type_, modifier=Modifier.WHOLE, backtrack=False):
        """Declared methods, optionally walking the ancestors child first."""
        from .Type import Type
        levels = self.levels(type_) if backtrack else [Type.find(type_)]
        result = []
        for t in levels:
            _, methods = self.declared(t)
            result.extend(m for m in methods if Modifier.accepts(modifier, m))
        return result

    #########################################################################
    # Introspection
    #########################################################################

    def _introspectFields(self, type_):
        cls = type_.cls()
        ns = cls.__dict__
        annotations = Members._ownAnnotations(cls)
        fields = []
        seen = set()

        # annotation keys are already mangled by the compiler
        for attr, ann in annotations.items():
            if isinstance(ns.get(attr), property):
                continue
            if isinstance(ann, dataclasses.InitVar):
                seen.add(attr)
                continue
            name = Members._declaredName(cls, attr)
            flags = Slot.visibilityFlags(name)
            if Kind.isClassVar(ann):
                flags |= FConst.Static
            fields.append(Field(type_, name, flags, Kind.tagOf(ann), attr))
            seen.add(attr)

        slots = ns.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            attr = Field.storageName(cls, name)
            if name in ("__dict__", "__weakref__") or attr in seen:
                continue
            fields.append(Field(type_, name, Slot.visibilityFlags(name), Kind.Obj, attr))
            seen.add(attr)

        for name, val in ns.items():
            if name in seen or name in Members._SKIP_FIELDS:
                continue
            if (name.startswith("__") and name.endswith("__")) or name.startswith("_abc_"):
                continue
            if isinstance(val, property):
                tag = Kind.Obj
                if val.fget is not None:
                    tag = Kind.tagOf(Members._hints(val.fget).get("return", inspect.Parameter.empty))
                fields.append(Field.fromProperty(type_, name, val, tag))
                continue
            if isinstance(val, functools.cached_property):
                tag = Kind.tagOf(Members._hints(val.func).get("return", inspect.Parameter.empty))
                fields.append(Field.fromCachedProperty(type_, name, val, tag))
                continue
            if Members._isStaticValue(val):
                flags = Slot.visibilityFlags(name) | FConst.Static
                fields.append(Field(type_, Members._declaredName(cls, name), flags, Kind.tagOf(type(val)), name))

        return fields

    def _introspectMethods(self, type_):
        cls = type_.cls()
        methods = []
        for name, val in cls.__dict__.items():
            if name in Members._SKIP_METHODS:
                continue
            if name.startswith("__") and name.endswith("__") and not self._dunders:
                continue

            flags = Slot.visibilityFlags(name)
            if isinstance(val, staticmethod):
                func = val.__func__
                flags |= FConst.Static
                skip = 0
            elif isinstance(val, classmethod):
                func = val.__func__
                flags |= FConst.Static | FConst.ClassMethod
                skip = 1
            elif inspect.isfunction(val):
                func = val
                skip = 1
            else:
                continue

            declared = Members._declaredName(cls, name)
            overloads = typing.get_overloads(func)
            if overloads:
                for stub in overloads:
                    params, returns, varargs = Members._signatureOf(stub, skip)
                    methods.append(Method(type_, declared, flags, returns, params, func, varargs))
            else:
                params, returns, varargs = Members._signatureOf(func, skip)
                methods.append(Method(type_, declared, flags, returns, params, func, varargs))
        return methods

    @staticmethod
    def _signatureOf(func, skip):
        """Return (params, returns tag, varargs) skipping the bound first parameter."""
        try:
            sig = inspect.signature(func)
        except (ValueError, TypeError):
            return [], Kind.Obj, True
        hints = Members._hints(func)
        params = []
        varargs = False
        for i, (name, p) in enumerate(sig.parameters.items()):
            if i < skip:
                continue
            if p.kind == inspect.Parameter.VAR_POSITIONAL:
                varargs = True
                continue
            if p.kind in (inspect.Parameter.KEYWORD_ONLY, inspect.Parameter.VAR_KEYWORD):
                continue
            ann = hints.get(name, p.annotation)
            params.append(Param(name, Kind.tagOf(ann), p.default is not inspect.Parameter.empty))
        returns = Kind.tagOf(hints.get("return", sig.return_annotation))
        return params, returns, varargs

    @staticmethod
    def _hints(func):
        try:
            return typing.get_type_hints(func, include_extras=True)
        except (NameError, AttributeError, TypeError, SyntaxError):
            return getattr(func, "__annotations__", {}) or {}

    @staticmethod
    def _ownAnnotations(cls):
        try:
            hints = inspect.get_annotations(cls, eval_str=True)
        except (NameError, AttributeError, TypeError, SyntaxError):
            hints = inspect.get_annotations(cls)
        return dict(hints)

    @staticmethod
    def _isStaticValue(val):
        # descriptors compute a value per access; only plain stored values qualify
        if isinstance(val, type) or hasattr(type(val), "__get__"):
            return False
        return True

    @staticmethod
    def _isMachinery(cls):
        return cls.__module__ in ("typing", "typing_extensions")

    @staticmethod
    def _declaredName(cls, attr):
        """Undo name mangling: '_Cls__x' was declared as '__x'."""
        prefix = f"_{cls.__name__.lstrip('_')}__"
        if attr.startswith(prefix) and not attr.endswith("__"):
            return "__" + attr[len(prefix):]
        return attr
