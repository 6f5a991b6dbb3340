#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect

from .Slot import Slot, FConst


class Method(Slot):
    """Method reflection - one operation declared directly on a Type.

    Methods are created by Type when it reflects over its class namespace.
    The wrapped object is the raw namespace entry (function, classmethod,
    staticmethod or builtin descriptor), never a bound method.
    """

    def __init__(self, parent=None, name="", flags=0, func=None):
        super().__init__(parent, name, flags)
        self._func = func

    @staticmethod
    def make(parent, name, func, overrides=False):
        """Create a Method, deriving flags from the namespace entry"""
        flags = FConst.Private if name.startswith("_") and not name.endswith("__") else FConst.Public
        if isinstance(func, staticmethod):
            flags |= FConst.Static
        elif isinstance(func, classmethod):
            flags |= FConst.ClassLevel
        if getattr(func, "__isabstractmethod__", False):
            flags |= FConst.Abstract
        if Method._code(func) is None:
            flags |= FConst.Native
        if overrides:
            flags |= FConst.Override
        return Method(parent, name, flags, func)

    @staticmethod
    def isMethodEntry(val):
        """Return true if a class namespace entry is an operation"""
        if isinstance(val, (staticmethod, classmethod)):
            return True
        if isinstance(val, type):
            return False
        return inspect.isroutine(val)

    @staticmethod
    def _code(func):
        if isinstance(func, (staticmethod, classmethod)):
            func = func.__func__
        try:
            func = inspect.unwrap(func)
        except ValueError:
            return None
        return getattr(func, "__code__", None)

    def isMethod(self):
        return True

    def func(self):
        """Get the raw namespace entry"""
        return self._func

    def code(self):
        """Get the code object of the Python implementation, or None if native"""
        return Method._code(self._func)

    def callOn(self, instance, owner, args=None, kwargs=None):
        """Invoke the method bound as it would be for instance/owner.

        Args:
            instance: Receiver, or None for class-level dispatch
            owner: Class the lookup started from
            args: Positional arguments
            kwargs: Keyword arguments
        """
        func = self._func
        if hasattr(func, "__get__"):
            func = func.__get__(instance, owner)
        return func(*(args or []), **(kwargs or {}))

    def call(self, *args):
        """Call as a plain function: static methods or explicit receiver first"""
        if isinstance(self._func, classmethod):
            return self.callOn(None, self._parent.pyClass(), args)
        if isinstance(self._func, staticmethod):
            return self._func.__func__(*args)
        return self._func(*args)
