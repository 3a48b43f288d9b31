#
# Log - Logging support
#
import logging


class LogLevel:
    """
    LogLevel represents the severity of a log message.
    """

    _levels = {}

    def __init__(self, name, ordinal, pyLevel):
        self._name = name
        self._ordinal = ordinal
        self._pyLevel = pyLevel

    @staticmethod
    def fromStr(name, checked=True):
        """Parse LogLevel from string"""
        level = LogLevel._levels.get(name.strip().lower())
        if level is not None:
            return level
        if checked:
            from .Err import ArgErr
            raise ArgErr.make(f"Unknown log level: {name}")
        return None

    @staticmethod
    def vals():
        return [LogLevel.debug, LogLevel.info, LogLevel.warn, LogLevel.err, LogLevel.silent]

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def pyLevel(self):
        return self._pyLevel

    def toStr(self):
        return self._name

    def __lt__(self, other):
        return self._ordinal < other._ordinal

    def __le__(self, other):
        return self._ordinal <= other._ordinal

    def __eq__(self, other):
        if not isinstance(other, LogLevel):
            return False
        return self._ordinal == other._ordinal

    def __hash__(self):
        return hash(self._ordinal)


LogLevel.debug = LogLevel("debug", 0, logging.DEBUG)
LogLevel.info = LogLevel("info", 1, logging.INFO)
LogLevel.warn = LogLevel("warn", 2, logging.WARNING)
LogLevel.err = LogLevel("err", 3, logging.ERROR)
LogLevel.silent = LogLevel("silent", 4, logging.CRITICAL + 10)

for _level in LogLevel.vals():
    LogLevel._levels[_level.name()] = _level


class Log:
    """
    Log provides named logging on top of the standard logging module.
    """

    _logs = {}

    def __init__(self, name, register=True):
        if not Log._isValidName(name):
            from .Err import ArgErr
            raise ArgErr.make(f"Invalid log name: {name}")

        if register and name in Log._logs:
            from .Err import ArgErr
            raise ArgErr.make(f"Log already registered: {name}")

        from .Env import Env
        self._name = name
        self._level = LogLevel.fromStr(Env.cur().config("logLevel"), False) or LogLevel.info
        self._pyLogger = logging.getLogger(name)

        if register:
            Log._logs[name] = self

    @staticmethod
    def _isValidName(name):
        """Validate log name - must be valid identifier characters"""
        if not name:
            return False
        for c in name:
            if not (c.isalnum() or c == '.' or c == '_'):
                return False
        return True

    @staticmethod
    def get(name):
        """Get or create a log by name"""
        log = Log._logs.get(name)
        if log is not None:
            return log
        return Log._logs.setdefault(name, Log(name, False))

    def name(self):
        return self._name

    def level(self, value=None):
        """Get or set log level - called as log.level() or log.level(newLevel)"""
        if value is None:
            return self._level
        self._level = value
        return None

    def isEnabled(self, level):
        return level._ordinal >= self._level._ordinal and level is not LogLevel.silent

    def debug(self, msg, err=None):
        if self.isEnabled(LogLevel.debug):
            self.log(LogLevel.debug, msg, err)

    def err(self, msg, err=None):
        if self.isEnabled(LogLevel.err):
            self.log(LogLevel.err, msg, err)

    def log(self, level, msg, err=None):
        """Forward a record to the Python logger"""
        self._pyLogger.log(level.pyLevel(), msg, exc_info=err)

    def toStr(self):
        return self._name
