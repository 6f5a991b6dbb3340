#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import functools
import inspect
import io
import math
import numbers
import re
from collections.abc import Mapping, Sequence, Set


class ObjUtil:
    """Utility methods for inspecting and comparing arbitrary values"""

    # Values which are not references: no storage shape of their own
    _PLAIN = (str, bytes, numbers.Number)

    # Numeric literal forms accepted as numbers inside strings
    _NUMBER_RE = re.compile(
        r"^\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)\s*$",
        re.IGNORECASE)
    _INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")

    @staticmethod
    def isPlain(obj):
        """Return true for None, strings, bytes and numbers"""
        return obj is None or isinstance(obj, ObjUtil._PLAIN)

    @staticmethod
    def reftype(obj):
        """Return storage-shape tag, or None for plain values.

        Tags: SCALAR, ARRAY, HASH, SET, CODE, CLASS, IO
        """
        from .Scalar import Scalar
        if isinstance(obj, Scalar):
            return "SCALAR"
        if ObjUtil.isPlain(obj):
            return None
        if isinstance(obj, type):
            return "CLASS"
        if isinstance(obj, Mapping):
            return "HASH"
        if isinstance(obj, Set):
            return "SET"
        if isinstance(obj, Sequence):
            return "ARRAY"
        if isinstance(obj, io.IOBase):
            return "IO"
        if inspect.isroutine(obj) or isinstance(obj, functools.partial):
            return "CODE"
        if hasattr(obj, "__dict__"):
            return "HASH"
        if ObjUtil._slotNames(type(obj)):
            return "ARRAY"
        return "SCALAR"

    @staticmethod
    def _slotNames(cls):
        names = []
        for c in reversed(cls.__mro__):
            slots = c.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for name in slots:
                if name not in ("__dict__", "__weakref__") and name not in names:
                    names.append(name)
        return names

    @staticmethod
    def fields(obj):
        """Return the attribute storage of an object as a dict.

        Covers both __slots__ and __dict__; unset slots are skipped.
        """
        result = {}
        for name in ObjUtil._slotNames(type(obj)):
            try:
                result[name] = getattr(obj, name)
            except AttributeError:
                continue
        result.update(getattr(obj, "__dict__", {}))
        return result

    #########################################################################
    # Overloads
    #########################################################################

    @staticmethod
    def isOverloaded(obj):
        """Return true if obj is a reference with str or numeric conversion"""
        if ObjUtil.isPlain(obj):
            return False
        from .Type import Type
        overloads = Type.of(obj).overloads()
        return "str" in overloads or "num" in overloads

    @staticmethod
    def overloadedVal(obj):
        """Return the value obj converts to, preferring the string form.

        Calls the hook directly so str subclasses such as TaintedStr survive.
        """
        from .Type import Type
        t = Type.of(obj)
        if t.isStrOverloaded():
            return type(obj).__str__(obj)
        for hook in Type._NUM_HOOKS:
            fn = getattr(type(obj), hook, None)
            if fn is not None:
                return fn(obj)
        return None

    #########################################################################
    # Equality
    #########################################################################

    @staticmethod
    def looksLikeNumber(val):
        if isinstance(val, bool) or isinstance(val, numbers.Number):
            return True
        if isinstance(val, bytes):
            val = val.decode("utf-8", "replace")
        if isinstance(val, str):
            return ObjUtil._NUMBER_RE.match(val) is not None
        return False

    @staticmethod
    def _toNum(val):
        if isinstance(val, bytes):
            val = val.decode("utf-8", "replace")
        if isinstance(val, str):
            if ObjUtil._INT_RE.match(val):
                return int(val)
            return float(val)
        return val

    @staticmethod
    def _toStr(val):
        if isinstance(val, bytes):
            return val.decode("utf-8", "replace")
        return str(val)

    @staticmethod
    def scalarsEqual(a, b):
        """Compare two plain values: numerically if both look like numbers,
        otherwise as strings"""
        if a is None:
            return b is None
        if b is None:
            return False
        if isinstance(a, bytes) and isinstance(b, bytes):
            return a == b
        if ObjUtil.looksLikeNumber(a) and ObjUtil.looksLikeNumber(b):
            na, nb = ObjUtil._toNum(a), ObjUtil._toNum(b)
            # NaN equality: NaN equals NaN
            if isinstance(na, float) and isinstance(nb, float):
                if math.isnan(na) and math.isnan(nb):
                    return True
            return na == nb
        return ObjUtil._toStr(a) == ObjUtil._toStr(b)

    @staticmethod
    def isEqual(a, b):
        """Deep comparison over nested containers and objects"""
        return ObjUtil._equal(a, b, set())

    @staticmethod
    def _equal(a, b, seen):
        if a is b:
            return True

        from .Scalar import Scalar
        from .Type import Type

        a_plain = ObjUtil.isPlain(a)
        b_plain = ObjUtil.isPlain(b)
        if a_plain and b_plain:
            return ObjUtil.scalarsEqual(a, b)

        # User-defined equality wins, except on containers
        for x in (a, b):
            if ObjUtil._isValueObj(x) and "eq" in Type.of(x).overloads():
                return bool(a == b)

        # Overloaded objects compare by their converted values
        a_over = ObjUtil._isValueObj(a) and ObjUtil.isOverloaded(a)
        b_over = ObjUtil._isValueObj(b) and ObjUtil.isOverloaded(b)
        if a_over or b_over:
            if (a_plain or a_over) and (b_plain or b_over):
                va = a if a_plain else ObjUtil.overloadedVal(a)
                vb = b if b_plain else ObjUtil.overloadedVal(b)
                return ObjUtil.scalarsEqual(va, vb)
            return False

        if a_plain or b_plain:
            return False

        kind = ObjUtil.reftype(a)
        if kind != ObjUtil.reftype(b):
            return False

        # Already comparing this pair further up: assume equal
        key = (id(a), id(b))
        if key in seen:
            return True
        seen.add(key)

        if kind == "SCALAR":
            if isinstance(a, Scalar) and isinstance(b, Scalar):
                return ObjUtil._equal(a.val(), b.val(), seen)
            return False

        if kind == "HASH":
            if isinstance(a, Mapping) and isinstance(b, Mapping):
                return ObjUtil._mapsEqual(a, b, seen)
            if type(a) is not type(b):
                return False
            return ObjUtil._mapsEqual(ObjUtil.fields(a), ObjUtil.fields(b), seen)

        if kind == "ARRAY":
            if isinstance(a, Sequence) and isinstance(b, Sequence):
                return ObjUtil._seqsEqual(a, b, seen)
            if type(a) is not type(b):
                return False
            return ObjUtil._mapsEqual(ObjUtil.fields(a), ObjUtil.fields(b), seen)

        if kind == "SET":
            if len(a) != len(b):
                return False
            remaining = list(b)
            for x in a:
                for i, y in enumerate(remaining):
                    if ObjUtil._equal(x, y, seen):
                        del remaining[i]
                        break
                else:
                    return False
            return True

        # CODE, CLASS, IO: identity only
        return False

    @staticmethod
    def _isValueObj(x):
        """Return true for references compared by their own hooks.

        Scalars and containers always compare structurally.
        """
        from .Scalar import Scalar
        if ObjUtil.isPlain(x) or isinstance(x, Scalar):
            return False
        return not isinstance(x, (Mapping, Sequence, Set))

    @staticmethod
    def _mapsEqual(a, b, seen):
        if len(a) != len(b):
            return False
        for k in a:
            if k not in b:
                return False
            if not ObjUtil._equal(a[k], b[k], seen):
                return False
        return True

    @staticmethod
    def _seqsEqual(a, b, seen):
        if len(a) != len(b):
            return False
        for x, y in zip(a, b):
            if not ObjUtil._equal(x, y, seen):
                return False
        return True
