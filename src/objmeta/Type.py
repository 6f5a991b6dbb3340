#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import builtins
import sys
import weakref

from .Obj import Obj


class Type(Obj):
    """Type class - reflection over a Python class.

    A Type is the registry record for one class: its qualified name, its
    direct parents, its linearized ancestry (the class MRO) and the methods
    declared in its namespace. Types are found through the registry:

        Type.of(obj)        type of a value
        Type.fromClass(cls) type of a class object
        Type.find(qname)    type by qualified name, from loaded modules

    The registry holds classes weakly so it never extends their lifetime.
    """

    # Registry of Type instances
    _byClass = weakref.WeakKeyDictionary()
    _cache = weakref.WeakValueDictionary()

    # Universal root of every linearized ancestry
    _ROOT = object

    # Conversion hooks which count as overloads
    _STR_HOOKS = ("__str__",)
    _NUM_HOOKS = ("__int__", "__float__", "__index__")

    def __init__(self, cls):
        self._cls = weakref.ref(cls)
        self._qname = Type.qnameOf(cls)
        self._name = cls.__name__

    @staticmethod
    def qnameOf(cls):
        """Qualified name of a class; builtins are unqualified"""
        module = getattr(cls, "__module__", None)
        qualname = getattr(cls, "__qualname__", cls.__name__)
        if module is None or module == "builtins":
            return qualname
        return f"{module}.{qualname}"

    @staticmethod
    def of(obj):
        """Get type of object"""
        return Type.fromClass(type(obj))

    @staticmethod
    def fromClass(cls):
        """Get the cached Type for a class object"""
        t = Type._byClass.get(cls)
        if t is None:
            t = Type(cls)
            Type._byClass[cls] = t
            Type._cache[t._qname] = t
        return t

    @staticmethod
    def find(qname, checked=True):
        """Find type by qname - returns cached singleton.

        Args:
            qname: Dotted name such as 'dict' or 'collections.OrderedDict'
            checked: If True, raise UnknownTypeErr if not found

        Returns:
            Type instance or None (if checked=False and not found)
        """
        t = Type._cache.get(qname)
        if t is not None:
            return t

        cls = Type._resolve(qname)
        if cls is None:
            if checked:
                from .Err import UnknownTypeErr
                raise UnknownTypeErr.make(qname)
            return None

        from .Log import Log
        Log.get("objmeta").debug(f"Resolved type {qname}")
        return Type.fromClass(cls)

    @staticmethod
    def _resolve(qname):
        """Map a dotted name to a class of an already loaded module.

        Modules are never imported here, so resolving a name has no side
        effects; a class is reachable once its module has been loaded.
        """
        if not qname:
            return None
        if "." not in qname:
            cls = getattr(builtins, qname, None)
            return cls if isinstance(cls, type) else None

        # Longest loaded module prefix wins, the rest are attributes
        parts = qname.split(".")
        for i in range(len(parts) - 1, 0, -1):
            obj = sys.modules.get(".".join(parts[:i]))
            if obj is None:
                continue
            for attr in parts[i:]:
                obj = getattr(obj, attr, None)
                if obj is None:
                    return None
            return obj if isinstance(obj, type) else None
        return None

    def pyClass(self):
        """Return the Python class, or None if it has been collected"""
        return self._cls()

    def _clsOrErr(self):
        cls = self._cls()
        if cls is None:
            from .Err import UnknownTypeErr
            raise UnknownTypeErr.make(f"Class no longer exists: {self._qname}")
        return cls

    def name(self):
        return self._name

    def qname(self):
        return self._qname

    def toStr(self):
        return self._qname

    def isRoot(self):
        return self._cls() is Type._ROOT

    #########################################################################
    # Inheritance
    #########################################################################

    def isa(self):
        """Return direct parent types, without the implicit root"""
        return [Type.fromClass(c) for c in self._clsOrErr().__bases__ if c is not Type._ROOT]

    def inheritance(self):
        """Return linearized ancestry: this type, then ancestors in lookup
        order, ending with the root type."""
        return [Type.fromClass(c) for c in self._clsOrErr().__mro__]

    def fits(self, that):
        """Return true if that is this type or one of its ancestors"""
        if isinstance(that, type):
            that = Type.fromClass(that)
        elif isinstance(that, str):
            that = Type.find(that, False)
            if that is None:
                return False
        return that in self.inheritance()

    #########################################################################
    # Slot Reflection
    #########################################################################

    def declared(self):
        """Return name -> Method for operations declared directly on this type.

        Computed on every call so later changes to the class are seen.
        """
        from .Method import Method
        cls = self._clsOrErr()
        ancestors = cls.__mro__[1:]
        result = {}
        for name, val in vars(cls).items():
            if not Method.isMethodEntry(val):
                continue
            overrides = any(name in vars(base) for base in ancestors)
            result[name] = Method.make(self, name, val, overrides)
        return result

    def methods(self, withRoot=False, justMine=False):
        """Return methods available on this type, sorted by name.

        Args:
            withRoot: Include methods only provided by the root type
            justMine: Only methods declared directly on this type

        Returns:
            List of Method; for each name the one dispatch would find
        """
        types = [self] if justMine else self.inheritance()
        found = {}
        for t in types:
            if t.isRoot() and not withRoot:
                continue
            for name, m in t.declared().items():
                found.setdefault(name, m)
        return [found[name] for name in sorted(found)]

    def method(self, name, checked=True):
        """Find the method dispatch would use for name.

        Args:
            name: Method name to find
            checked: If True, raise UnknownSlotErr if not found

        Returns:
            Method instance or None (if checked=False and not found)
        """
        for t in self.inheritance():
            m = t.declared().get(name)
            if m is not None:
                return m
        if checked:
            from .Err import UnknownSlotErr
            raise UnknownSlotErr.make(f"{self._qname}.{name}")
        return None

    def symbols(self):
        """Return the read-only namespace mapping of the class"""
        return vars(self._clsOrErr())

    #########################################################################
    # Overloads
    #########################################################################

    def overloads(self):
        """Return the set of overloaded conversions: 'str', 'num', 'eq'.

        Only classes outside builtins count; the root never does.
        """
        found = set()
        for c in self._clsOrErr().__mro__:
            if c is Type._ROOT or c.__module__ == "builtins":
                continue
            ns = vars(c)
            if any(h in ns for h in Type._STR_HOOKS):
                found.add("str")
            if any(h in ns for h in Type._NUM_HOOKS):
                found.add("num")
            if ns.get("__eq__") is not None:
                found.add("eq")
        return frozenset(found)

    def isStrOverloaded(self):
        return "str" in self.overloads()

    def isNumOverloaded(self):
        return "num" in self.overloads()
