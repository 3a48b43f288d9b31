#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import datetime
import decimal
import inspect
import types
import typing
from typing import Annotated


class Kind:
    """Semantic type tags for declared fields and parameters.

    Tags are plain strings. Primitive kinds are 'sys::Int' style names, their
    boxed (nullable) counterpart carries a trailing '?'. User classes are
    tagged by their qname 'module::Qualname'.
    """

    Byte = "sys::Byte"
    Short = "sys::Short"
    Int = "sys::Int"
    Long = "sys::Long"
    Float = "sys::Float"
    Double = "sys::Double"
    Bool = "sys::Bool"
    Char = "sys::Char"

    Str = "sys::Str"
    Bytes = "sys::Bytes"
    Date = "sys::Date"
    DateTime = "sys::DateTime"
    Time = "sys::Time"
    Decimal = "sys::Decimal"
    List = "sys::List"
    Map = "sys::Map"
    Obj = "sys::Obj"
    Void = "sys::Void"

    # Primitive kind -> boxed kind
    _PRIMITIVE_BOXED = {
        Byte: Byte + "?",
        Short: Short + "?",
        Int: Int + "?",
        Long: Long + "?",
        Float: Float + "?",
        Double: Double + "?",
        Bool: Bool + "?",
        Char: Char + "?",
    }

    # Python classes with a fixed tag; datetime before date since it subclasses it
    _TYPE_MAP = {
        bool: Bool,
        int: Int,
        float: Float,
        str: Str,
        bytes: Bytes,
        datetime.datetime: DateTime,
        datetime.date: Date,
        datetime.time: Time,
        decimal.Decimal: Decimal,
        list: List,
        dict: Map,
        object: Obj,
        type(None): Void,
    }

    # Builtin names seen in unresolved string annotations
    _NAME_MAP = {
        "bool": Bool,
        "int": Int,
        "float": Float,
        "str": Str,
        "bytes": Bytes,
        "list": List,
        "dict": Map,
        "object": Obj,
        "None": Void,
        "Any": Obj,
    }

    @staticmethod
    def isPrimitive(tag):
        return tag in Kind._PRIMITIVE_BOXED

    @staticmethod
    def boxed(tag):
        """Return the boxed tag of a primitive kind, or None."""
        return Kind._PRIMITIVE_BOXED.get(tag)

    @staticmethod
    def isEquivalent(a, b):
        """True if one tag is a primitive kind and the other its boxed counterpart."""
        if Kind._PRIMITIVE_BOXED.get(a) == b:
            return True
        if Kind._PRIMITIVE_BOXED.get(b) == a:
            return True
        return False

    @staticmethod
    def qnameOf(cls):
        return f"{cls.__module__}::{cls.__qualname__}"

    @staticmethod
    def signature(tags):
        """Build the overload signature string from an ordered tag list."""
        return "(" + ",".join(tags) + ")"

    @staticmethod
    def tagOf(annotation):
        """Convert a Python annotation (or a tag string) to a type tag.

        Args:
            annotation: class, typing construct, tag string, or
                inspect.Parameter.empty for unannotated declarations

        Returns:
            Tag string
        """
        if annotation is inspect.Parameter.empty or annotation is typing.Any:
            return Kind.Obj
        if annotation is None:
            return Kind.Void

        if isinstance(annotation, str):
            if "::" in annotation:
                return annotation
            return Kind._NAME_MAP.get(annotation, annotation)

        origin = typing.get_origin(annotation)

        if origin is Annotated:
            for meta in annotation.__metadata__:
                if isinstance(meta, str) and "::" in meta:
                    return meta
            return Kind.tagOf(typing.get_args(annotation)[0])

        if origin is typing.ClassVar:
            args = typing.get_args(annotation)
            return Kind.tagOf(args[0]) if args else Kind.Obj

        if origin is typing.Union or origin is types.UnionType:
            args = typing.get_args(annotation)
            rest = [a for a in args if a is not type(None)]
            if len(rest) == 1:
                inner = Kind.tagOf(rest[0])
                if len(rest) < len(args) and Kind.isPrimitive(inner):
                    return Kind.boxed(inner)
                return inner
            return Kind.Obj

        if origin is not None:
            return Kind.tagOf(origin)

        if isinstance(annotation, type):
            tag = Kind._TYPE_MAP.get(annotation)
            if tag is not None:
                return tag
            return Kind.qnameOf(annotation)

        return Kind.Obj

    @staticmethod
    def isClassVar(annotation):
        if isinstance(annotation, str):
            return annotation.startswith("ClassVar") or annotation.startswith("typing.ClassVar")
        return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


# Annotation aliases for kinds Python does not distinguish natively
Byte = Annotated[int, Kind.Byte]
Short = Annotated[int, Kind.Short]
Int = Annotated[int, Kind.Int]
Long = Annotated[int, Kind.Long]
Float = Annotated[float, Kind.Float]
Double = Annotated[float, Kind.Double]
Bool = Annotated[bool, Kind.Bool]
Char = Annotated[str, Kind.Char]
