#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Err(Exception, Obj):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        self._msg = msg
        self._cause = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    def msg(self):
        # Empty string when no message provided, never None
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def toStr(self):
        qname = self.typeof().qname()
        if self._msg:
            return f"{qname}: {self._msg}"
        return qname

    def traceToStr(self):
        """Return stack trace as string"""
        import traceback

        s = self.toStr()

        tb = getattr(self, '__traceback__', None)
        if tb:
            lines = traceback.format_tb(tb)
            s += "\n" + "".join(lines)

        if self._cause:
            if hasattr(self._cause, 'traceToStr'):
                s += "\n  Caused by: " + self._cause.traceToStr()
            else:
                s += f"\n  Caused by: {self._cause}"

        return s

    def __str__(self):
        return self.toStr()


class ParseErr(Err):
    """Parse error - malformed config line or log level"""
    pass


class ArgErr(Err):
    """Argument error"""
    pass


class UnsupportedErr(Err):
    """Unsupported operation error - value cannot take part in the operation"""
    pass


class UnsafeErr(Err):
    """Unsafe operation error - operation would silently discard state"""
    pass


class UnknownTypeErr(Err):
    """Unknown type error"""
    pass


class UnknownSlotErr(Err):
    """Unknown slot error - thrown when slot lookup fails"""
    pass


class IOErr(Err):
    """IO error"""

    @staticmethod
    def make(msg=None, cause=None):
        return IOErr(msg, cause)
