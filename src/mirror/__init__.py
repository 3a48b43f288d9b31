#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# mirror - type metadata cache and dynamic property bridge

# Errors
from .Err import (Err, ArgErr, ReflectErr, UnknownTypeErr, UnknownPodErr,
                  NoSuchFieldErr, NoSuchMethodErr, ConstructionErr)

# Type tags
from .Kinds import Kind

# Reflection
from .Slot import Slot, FConst, Modifier
from .Param import Param
from .Field import Field
from .Method import Method
from .Type import Type
from .Members import Members
from .MetaCache import MetaCache, MetaBuilder, MetaEntry
from .Reflect import Reflect
from .Pod import Pod

# Environment
from .Env import Env
from .Log import Log, LogLevel


def ensureCached(type_):
    return MetaCache.cur().ensureCached(type_)


def ensureCachedBatch(types):
    MetaCache.cur().ensureCachedBatch(types)


def getField(obj, name):
    return Reflect.cur().getField(obj, name)


def setField(obj, name, val):
    Reflect.cur().setField(obj, name, val)


def getFieldType(type_, name):
    return Reflect.cur().getFieldType(type_, name)


def invoke(obj, name, args=None, argTypes=None):
    return Reflect.cur().invoke(obj, name, args, argTypes)


def copyProperties(src, dst, acceptNull=True):
    Reflect.cur().copyProperties(src, dst, acceptNull)


def convert(src, destType):
    return Reflect.cur().convert(src, destType)


def convertList(srcs, destType):
    return Reflect.cur().convertList(srcs, destType)
