#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import functools
import inspect
import numbers
from collections.abc import Mapping, Sequence, Set

from objmeta.ObjUtil import ObjUtil


class PlainEncoder:
    """Lowers any value into plain data: dict, list, str, int, float, bool, None.

    Objects may supply their own plain form with a to_json() method;
    otherwise their public attributes are used.
    """

    def __init__(self):
        self._inProgress = set()

    @staticmethod
    def encode(obj):
        return PlainEncoder().toData(obj)

    def toData(self, obj):
        from objmeta.Scalar import Scalar
        from objmeta.Type import Type

        if obj is None:
            return None
        if isinstance(obj, bool):
            return bool(obj)
        if isinstance(obj, int):
            return int(obj)
        if isinstance(obj, float):
            return float(obj)
        if isinstance(obj, numbers.Number):
            return self._number(obj)
        if isinstance(obj, str):
            return str.__str__(obj)
        if isinstance(obj, bytes):
            return obj.decode("utf-8", "replace")
        if isinstance(obj, Scalar):
            return self.toData(obj.val())
        if isinstance(obj, type):
            return Type.qnameOf(obj)
        if inspect.isroutine(obj) or isinstance(obj, functools.partial):
            from objmeta.Err import IOErr
            raise IOErr.make(f"Not serializable: {Type.of(obj).qname()}")

        key = id(obj)
        if key in self._inProgress:
            from objmeta.Err import IOErr
            raise IOErr.make(f"Cyclic structure: {Type.of(obj).qname()}")
        self._inProgress.add(key)
        try:
            return self._refToData(obj)
        finally:
            self._inProgress.discard(key)

    def _refToData(self, obj):
        hook = getattr(obj, "to_json", None)
        if callable(hook):
            return self.toData(hook())
        if isinstance(obj, Mapping):
            return {self._key(k): self.toData(v) for k, v in obj.items()}
        if isinstance(obj, Set):
            items = [self.toData(x) for x in obj]
            return sorted(items, key=repr)
        if isinstance(obj, Sequence):
            return [self.toData(x) for x in obj]
        return {name: self.toData(val)
                for name, val in ObjUtil.fields(obj).items()
                if not name.startswith("_")}

    def _number(self, obj):
        if isinstance(obj, numbers.Integral):
            return int(obj)
        if isinstance(obj, numbers.Real):
            return float(obj)
        # Decimal, complex: keep exact text
        return str(obj)

    def _key(self, k):
        if isinstance(k, str):
            return str.__str__(k)
        if k is None:
            return "null"
        if isinstance(k, bool):
            return "true" if k else "false"
        if isinstance(k, bytes):
            return k.decode("utf-8", "replace")
        return str(k)
