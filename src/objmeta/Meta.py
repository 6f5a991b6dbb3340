#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect

from .Obj import Obj
from .Env import Env
from .Type import Type
from .ObjUtil import ObjUtil
from .Taint import Taint


class Meta(Obj):
    """Meta handle - reflective operations over one subject value.

    Handles are created by mo() and mc() on every call and are never cached.
    Every operation is reached through the handle, so nothing is ever added
    to the subject's own namespace and no user method can collide with it.

    InstanceMeta and ClassMeta share this implementation and differ only in
    how the subject's type is resolved.
    """

    # Formats accepted by dump()
    _FORMATS = ("perl", "json", "yaml")

    def __init__(self, subject):
        self._subject = subject

    def subject(self):
        return self._subject

    def type_(self):
        """Return the Type descriptor the handle reflects on"""
        raise NotImplementedError

    def _superTarget(self):
        """Return (instance, owner) used to bind parent methods"""
        raise NotImplementedError

    def equals(self, that):
        return type(self) is type(that) and self._subject is that._subject

    def hash(self):
        return Env.cur().idHash(self._subject)

    def toStr(self):
        return f"{type(self).__name__}({self.class_()}@{self.id():x})"

    #########################################################################
    # Identity
    #########################################################################

    def id(self):
        """Stable unique token for the subject's lifetime"""
        return Env.cur().idHash(self._subject)

    def class_(self):
        """Name of the subject's type"""
        return self.type_().qname()

    def reftype(self):
        """Storage-shape tag of the subject, or None for plain values"""
        return ObjUtil.reftype(self._subject)

    #########################################################################
    # Inheritance
    #########################################################################

    def ISA(self):
        """Names of the direct parent types"""
        return [t.qname() for t in self.type_().isa()]

    def linear_isa(self):
        """Names of the type and its ancestors in method lookup order"""
        return [t.qname() for t in self.type_().inheritance()]

    def is_a(self, other):
        """Return true if other (class or name) is in the linearized ancestry"""
        return self.type_().fits(other)

    def methods(self, with_universal=False, just_mine=False):
        """Names of methods available on the type.

        Args:
            with_universal: Include methods provided only by the root type
            just_mine: Only methods declared directly on the type
        """
        return [m.name() for m in self.type_().methods(with_universal, just_mine)]

    def can(self, name):
        """Return the Method dispatch would use for name, or None"""
        return self.type_().method(name, False)

    def symbol_table(self):
        """Read-only namespace of the type"""
        return self.type_().symbols()

    def super(self, *args, **kwargs):
        """Call the next implementation of the calling method.

        The search runs over the subject's runtime ancestry, starting after
        the class which defines the caller, so it follows the actual lookup
        order under multiple inheritance.

        Raises:
            UnknownSlotErr: caller is not a method of the type, or no parent
                implementation exists
        """
        from .Err import UnknownSlotErr

        frame = inspect.currentframe().f_back
        try:
            code = frame.f_code
        finally:
            del frame

        t = self.type_()
        ancestry = t.inheritance()
        start = None
        for i, ancestor in enumerate(ancestry):
            for key, m in ancestor.declared().items():
                if m.code() is code:
                    name = Meta._demangle(ancestor, key)
                    start = i + 1
                    break
            if start is not None:
                break
        if start is None:
            raise UnknownSlotErr.make(f"{code.co_name} is not a method of {t.qname()}")

        for ancestor in ancestry[start:]:
            m = ancestor.declared().get(Meta._mangle(ancestor, name))
            if m is None:
                continue
            from .Log import Log
            Log.get("objmeta").debug(f"super {t.qname()}.{name} -> {m.qname()}")
            instance, owner = self._superTarget()
            return m.callOn(instance, owner, args, kwargs)

        raise UnknownSlotErr.make(f"No parent method {name} for {t.qname()}")

    @staticmethod
    def _manglePrefix(t):
        return "_" + t.name().lstrip("_") + "__"

    @staticmethod
    def _demangle(t, key):
        """Map a private namespace key such as _C__x back to __x"""
        prefix = Meta._manglePrefix(t)
        if key.startswith(prefix) and not key.endswith("__") and prefix != "___":
            return "__" + key[len(prefix):]
        return key

    @staticmethod
    def _mangle(t, name):
        """Namespace key of name as declared inside type t"""
        if name.startswith("__") and not name.endswith("__") and t.name().lstrip("_"):
            return Meta._manglePrefix(t) + name[2:]
        return name

    #########################################################################
    # Taint
    #########################################################################

    def is_tainted(self):
        return Taint.isTainted(self._subject)

    def taint(self):
        """Mark subject as tainted; raises UnsupportedErr if it cannot be"""
        Taint.taint(self._subject)

    def untaint(self):
        """Clear subject's taint; raises UnsafeErr if it cannot be"""
        Taint.untaint(self._subject)

    #########################################################################
    # Equality and checksums
    #########################################################################

    def is_equal(self, other):
        """Deep comparison of the subject with other"""
        return ObjUtil.isEqual(self._subject, other)

    def checksum(self, algorithm=None, format=None):
        """Digest of the subject's type and current content.

        Args:
            algorithm: 'sha1' (default) or 'md5'
            format: 'hex' (default), 'base64' or 'binary'

        Returns:
            str, or bytes for the binary format
        """
        from .Digest import Digest
        from objmetax.PerlEncoder import PerlEncoder

        env = Env.cur()
        if algorithm is None:
            algorithm = env.config("checksum.algorithm", "sha1")
        if format is None:
            format = env.config("checksum.format", "hex")

        data = Type.of(self._subject).qname() + "\n" + PerlEncoder.encode(self._subject, 0)
        return Digest.checksum(data, algorithm, format)

    #########################################################################
    # Serialization
    #########################################################################

    def dump(self, format=None):
        """Serialize subject as 'perl' (default), 'json' or 'yaml'"""
        if format is None:
            format = Env.cur().config("dump.format", "perl")
        fmt = str(format).lower()
        if fmt == "perl":
            from objmetax.PerlEncoder import PerlEncoder
            return PerlEncoder.encode(self._subject, Meta._dumpIndent())
        if fmt == "json":
            from objmetax.JsonEncoder import JsonEncoder
            return JsonEncoder.encode(self._subject)
        if fmt == "yaml":
            from objmetax.YamlEncoder import YamlEncoder
            return YamlEncoder.encode(self._subject)
        from .Err import ArgErr
        raise ArgErr.make(f"format must be {', '.join(Meta._FORMATS)}: {format}")

    def as_perl(self):
        return self.dump("perl")

    def as_json(self):
        return self.dump("json")

    def as_yaml(self):
        return self.dump("yaml")

    @staticmethod
    def _dumpIndent():
        val = Env.cur().config("dump.indent", "2")
        try:
            indent = int(val)
        except ValueError:
            from .Err import ArgErr
            raise ArgErr.make(f"dump.indent must be an integer: {val}")
        if indent < 0:
            from .Err import ArgErr
            raise ArgErr.make(f"dump.indent must not be negative: {val}")
        return indent


class InstanceMeta(Meta):
    """Meta handle treating the subject as data"""

    def type_(self):
        return Type.of(self._subject)

    def _superTarget(self):
        return self._subject, type(self._subject)


class ClassMeta(Meta):
    """Meta handle treating the subject as a type.

    A class subject is itself the type, a string subject names one, and
    any other value stands for its own class.
    """

    def type_(self):
        s = self._subject
        if isinstance(s, type):
            return Type.fromClass(s)
        if isinstance(s, str):
            return Type.find(s)
        return Type.of(s)

    def class_(self):
        if isinstance(self._subject, str):
            return self._subject
        return self.type_().qname()

    def _superTarget(self):
        t = self.type_()
        return None, t._clsOrErr()


def mo(obj):
    """Meta handle on obj in instance-view"""
    return InstanceMeta(obj)


def mc(obj):
    """Meta handle on obj in class-view"""
    return ClassMeta(obj)
