#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class TaintedStr(str):
    """String value marked as coming from an untrusted source.

    A tainted Scalar stringifies to a TaintedStr, which lets objects whose
    __str__ returns str(scalar) report the scalar's taint.
    """
    __slots__ = ()


class Scalar(Obj):
    """Mutable box around one immutable value.

    Python strings and numbers cannot be changed in place, so Scalar is the
    value that carries a taint flag. Assigning a new value resets the flag
    to the taint of the new value.

    Usage:
        s = Scalar("input")     # or Scalar.make("input")
        s.set("other")          # Reassign
        use_value(s.val())      # Access current value
    """

    def __init__(self, val=None):
        self._val = val
        self._tainted = isinstance(val, TaintedStr)

    @staticmethod
    def make(val=None):
        """Factory method for creating Scalar wrapper"""
        return Scalar(val)

    def val(self):
        """Get current value"""
        return self._val

    def set(self, val):
        """Replace the current value"""
        self._val = val
        self._tainted = isinstance(val, TaintedStr)
        return self

    def toStr(self):
        return str(self._val)

    def __str__(self):
        s = str(self._val)
        if self._tainted:
            return TaintedStr(s)
        return s

    def __int__(self):
        return int(self._val)

    def __float__(self):
        return float(self._val)

    def __bool__(self):
        return bool(self._val)
