#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .ObjUtil import ObjUtil
from .Scalar import Scalar, TaintedStr


class Taint:
    """Taint tracking over scalars and overloaded values.

    Only a Scalar can change its taint in place. A TaintedStr is always
    tainted. Other objects report the taint of their string or numeric
    conversion when they overload one, and are untainted otherwise.
    """

    @staticmethod
    def isTainted(obj):
        if isinstance(obj, Scalar):
            return obj._tainted
        if isinstance(obj, TaintedStr):
            return True
        if not ObjUtil.isOverloaded(obj):
            return False
        return Taint.isTainted(ObjUtil.overloadedVal(obj))

    @staticmethod
    def taint(obj):
        """Mark obj as tainted.

        Raises:
            UnsupportedErr: obj cannot carry taint in place
        """
        from .Err import UnsupportedErr
        if isinstance(obj, Scalar):
            if not obj._tainted:
                obj._tainted = True
                Taint._log().debug(f"Tainted scalar @{id(obj):x}")
            return
        if isinstance(obj, TaintedStr):
            return
        if ObjUtil.isOverloaded(obj):
            if Taint.isTainted(obj):
                return
            raise UnsupportedErr.make("Untainted overloaded objects cannot normally be made tainted")
        if ObjUtil.isPlain(obj):
            raise UnsupportedErr.make(
                f"Immutable {type(obj).__name__} values cannot be tainted in place; wrap it in a Scalar")
        raise UnsupportedErr.make("Only scalars can normally be made tainted")

    @staticmethod
    def untaint(obj):
        """Clear the taint of obj.

        Raises:
            UnsafeErr: obj is tainted through a conversion it does not own
        """
        from .Err import UnsafeErr
        if isinstance(obj, Scalar):
            if obj._tainted:
                obj._tainted = False
                Taint._log().debug(f"Untainted scalar @{id(obj):x}")
            return
        if isinstance(obj, TaintedStr):
            raise UnsafeErr.make("Tainted strings are immutable and cannot be untainted; wrap it in a Scalar")
        if ObjUtil.isOverloaded(obj) and Taint.isTainted(obj):
            raise UnsafeErr.make("Tainted overloaded objects cannot normally be untainted")

    @staticmethod
    def _log():
        from .Log import Log
        return Log.get("objmeta")
