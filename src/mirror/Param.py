#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#


class Param:
    """Method parameter metadata for reflection.

    Represents a single declared parameter:
    - name: Parameter name
    - type: Parameter type tag (e.g. 'sys::Int', 'sys::Int?', 'app.model::User')
    - hasDefault: Whether parameter has a default value
    """

    def __init__(self, name, param_type, has_default=False):
        self._name = name
        self._type = param_type
        self._has_default = has_default

    def name(self):
        """Get parameter name."""
        return self._name

    def type(self):
        """Get parameter type tag."""
        return self._type

    def hasDefault(self):
        """Check if parameter has a default value."""
        return self._has_default

    def toStr(self):
        return f"{self._type} {self._name}"

    def __repr__(self):
        return f"Param({self._name}, {self._type})"
