#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import importlib
import inspect
import pkgutil

from .Log import Log


class Pod:
    """Pod - a Python package (or plain module) used for type discovery.

    Walks the package and all of its subpackages, whether they live in a
    directory tree or inside a zip archive on sys.path, and reports the
    concrete classes defined there.
    """

    _pods = {}

    def __init__(self, name, module):
        self._name = name
        self._module = module
        self._types = None

    @staticmethod
    def find(name, checked=True):
        """Find pod by dotted package name.

        Args:
            name: Package or module name, '/' separators are accepted
            checked: If True, raise UnknownPodErr if not importable

        Returns:
            Pod instance or None (if checked=False and not found)
        """
        name = name.replace("/", ".").replace("\\", ".").strip(".")
        pod = Pod._pods.get(name)
        if pod is not None:
            return pod
        try:
            module = importlib.import_module(name)
        except ModuleNotFoundError as e:
            if checked:
                from .Err import UnknownPodErr
                raise UnknownPodErr.make(f"can not found '{name}' in the import path", e)
            return None
        pod = Pod(name, module)
        Pod._pods[name] = pod
        return pod

    def name(self):
        return self._name

    def module(self):
        return self._module

    def isPackage(self):
        return hasattr(self._module, "__path__")

    def modules(self):
        """Import and return this module and every submodule below it."""
        from .Err import ReflectErr

        log = Log.get("mirror")
        result = [self._module]
        if not self.isPackage():
            return result
        for info in pkgutil.walk_packages(self._module.__path__, prefix=self._name + "."):
            try:
                result.append(importlib.import_module(info.name))
            except Exception as e:
                log.err(f"Cannot load module {info.name}", e)
                raise ReflectErr.make(f"Cannot load module {info.name}", e)
            log.debug(f"scanned module {info.name}")
        return result

    def types(self):
        """Return the concrete classes defined in this pod, nested ones included."""
        if self._types is None:
            from .Type import Type
            seen = set()
            found = []
            for module in self.modules():
                for cls in Pod._classesOf(module):
                    if cls in seen or inspect.isabstract(cls):
                        continue
                    seen.add(cls)
                    found.append(Type.find(cls))
            self._types = found
        return list(self._types)

    @staticmethod
    def _classesOf(module):
        result = []
        pending = [v for v in vars(module).values()
                   if isinstance(v, type) and v.__module__ == module.__name__]
        while pending:
            cls = pending.pop(0)
            result.append(cls)
            for v in vars(cls).values():
                if isinstance(v, type) and v.__qualname__.startswith(cls.__qualname__ + "."):
                    pending.append(v)
        return result

    def toStr(self):
        return self._name

    def __repr__(self):
        return self._name
