#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os


class Env:
    """Runtime environment - configuration read from MIRROR_* variables"""

    _instance = None

    # Config keys and their defaults
    _DEFAULTS = {
        "logLevel": "info",
        "dunders": "false",
    }

    def __init__(self, vars=None):
        self._vars = dict(os.environ) if vars is None else dict(vars)

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    @staticmethod
    def reset(env=None):
        """Replace the current environment (None re-reads os.environ lazily)."""
        Env._instance = env

    def config(self, key, defVal=None):
        """Lookup a config value.

        'logLevel' is read from MIRROR_LOGLEVEL; unset keys fall back to
        defVal, then to the built-in default.
        """
        val = self._vars.get("MIRROR_" + key.upper())
        if val is not None:
            return val
        if defVal is not None:
            return defVal
        return Env._DEFAULTS.get(key)

    def configBool(self, key, defVal=False):
        val = self.config(key)
        if val is None:
            return defVal
        return val.strip().lower() in ("true", "yes", "1", "on")
