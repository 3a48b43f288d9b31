#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


# Flag constants
class FConst:
    """Slot flag constants."""
    Public = 0x00000001
    Private = 0x00000002
    Protected = 0x00000004
    Static = 0x00000800
    Getter = 0x00010000
    Setter = 0x00020000
    ClassMethod = 0x00040000


class Modifier:
    """Filter used when enumerating declared members."""
    WHOLE = "whole"
    STATIC = "static"
    NON_STATIC = "nonStatic"

    @staticmethod
    def accepts(modifier, slot):
        if modifier == Modifier.STATIC:
            return slot.isStatic()
        if modifier == Modifier.NON_STATIC:
            return not slot.isStatic()
        return True


class Slot:
    """Base class for Field and Method reflection."""

    def __init__(self, parent=None, name="", flags=0):
        self._parent = parent
        self._name = name
        self._flags = flags

    def parent(self):
        """Get declaring type."""
        return self._parent

    def name(self):
        """Get slot name."""
        return self._name

    def qname(self):
        """Get qualified name (Type.slotName)."""
        if self._parent:
            return f"{self._parent.qname()}.{self._name}"
        return self._name

    def isField(self):
        return False

    def isMethod(self):
        return False

    def isPrivate(self):
        return (self._flags & FConst.Private) != 0

    def isProtected(self):
        return (self._flags & FConst.Protected) != 0

    def isStatic(self):
        return (self._flags & FConst.Static) != 0

    def toStr(self):
        return self.qname()

    def __repr__(self):
        return self.toStr()

    @staticmethod
    def visibilityFlags(name):
        """Flags implied by Python naming conventions."""
        if name.startswith("__") and not name.endswith("__"):
            return FConst.Private
        if name.startswith("_") and not name.endswith("__"):
            return FConst.Protected
        return FConst.Public
