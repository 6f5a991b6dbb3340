#
# Log - Logging support for objmeta
#
import logging

from .Obj import Obj


class LogLevel(Obj):
    """
    LogLevel represents the severity of a log message and the matching
    level of the standard logging module.
    """

    _levels = {}

    def __init__(self, name, ordinal, pyLevel):
        self._name = name
        self._ordinal = ordinal
        self._pyLevel = pyLevel
        LogLevel._levels[name] = self

    @staticmethod
    def fromStr(name, checked=True):
        """Parse LogLevel from string such as 'debug' or 'WARN'"""
        level = LogLevel._levels.get(str(name).strip().lower())
        if level is None and checked:
            from .Err import ParseErr
            raise ParseErr.make(f"Unknown log level: {name}")
        return level

    @staticmethod
    def vals():
        return sorted(LogLevel._levels.values(), key=lambda lvl: lvl._ordinal)

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def pyLevel(self):
        """Level number used by the standard logging module"""
        return self._pyLevel

    def toStr(self):
        return self._name


LogLevel._debug = LogLevel("debug", 0, logging.DEBUG)
LogLevel._info = LogLevel("info", 1, logging.INFO)
LogLevel._warn = LogLevel("warn", 2, logging.WARNING)
LogLevel._err = LogLevel("err", 3, logging.ERROR)
LogLevel._silent = LogLevel("silent", 4, logging.CRITICAL + 10)


class LogRec(Obj):
    """
    LogRec is one message passed to the log handlers.
    """

    def __init__(self, level, logName, msg, err=None):
        self._level = level
        self._logName = logName
        self._msg = msg
        self._err = err

    def level(self):
        return self._level

    def logName(self):
        return self._logName

    def msg(self):
        return self._msg

    def toStr(self):
        return f"[{self._level.name()}] [{self._logName}] {self._msg}"


class Log(Obj):
    """
    Log provides named logging on top of the standard logging module.

    Records go to every global handler and then to the logging.Logger of
    the same name. The initial level is read from the 'log.level' config
    key; an unknown level name raises ParseErr.
    """

    _logs = {}
    _handlers = []

    def __init__(self, name, register=True):
        """Create a new log. If register=True, adds to global registry."""
        if not Log._isValidName(name):
            from .Err import ArgErr
            raise ArgErr.make(f"Invalid log name: {name}")

        if register and name in Log._logs:
            from .Err import ArgErr
            raise ArgErr.make(f"Log already registered: {name}")

        self._name = name
        self._level = Log._configLevel()
        self._pyLogger = logging.getLogger(name)

        if register:
            Log._logs[name] = self

    @staticmethod
    def _isValidName(name):
        """Log names are dotted identifiers"""
        return bool(name) and all(c.isalnum() or c in "._" for c in name)

    @staticmethod
    def _configLevel():
        from .Env import Env
        return LogLevel.fromStr(Env.cur().config("log.level", "info"))

    @staticmethod
    def get(name):
        """Get or create a log by name"""
        log = Log._logs.get(name)
        if log is None:
            log = Log(name, True)
        return log

    def name(self):
        return self._name

    def level(self, value=None):
        """Get or set log level - called as log.level() or log.level(newLevel)"""
        if value is None:
            return self._level
        self._level = value
        return None

    def isEnabled(self, level):
        return level._ordinal >= self._level._ordinal

    def debug(self, msg, err=None):
        self._log(LogLevel._debug, msg, err)

    def info(self, msg, err=None):
        self._log(LogLevel._info, msg, err)

    def warn(self, msg, err=None):
        self._log(LogLevel._warn, msg, err)

    def err(self, msg, err=None):
        self._log(LogLevel._err, msg, err)

    def _log(self, level, msg, err):
        if self.isEnabled(level):
            self.log(LogRec(level, self._name, msg, err))

    def log(self, rec):
        """Pass a record to the handlers and the Python logger"""
        for handler in Log._handlers:
            try:
                handler(rec)
            except Exception:
                self._pyLogger.exception("Log handler failed: %r", handler)
        self._pyLogger.log(rec._level.pyLevel(), rec._msg, exc_info=rec._err)

    def toStr(self):
        return self._name

    @staticmethod
    def handlers():
        """Get global log handlers"""
        return list(Log._handlers)

    @staticmethod
    def addHandler(handler):
        """Add a global log handler"""
        if not callable(handler):
            from .Err import ArgErr
            raise ArgErr.make("Handler must be callable")
        Log._handlers.append(handler)

    @staticmethod
    def removeHandler(handler):
        """Remove a global log handler"""
        if handler in Log._handlers:
            Log._handlers.remove(handler)
