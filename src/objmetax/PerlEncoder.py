#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""
PerlEncoder serializes a value as a terse Perl data literal with sorted
hash keys.
"""

import functools
import inspect
import numbers
from collections.abc import Mapping, Sequence, Set

from objmeta.ObjUtil import ObjUtil


class PerlEncoder:
    """Serializes values to Perl literal text.

    A reference met again while it is still being written is a cycle; it is
    written as the path from the root, e.g. $VAR1->{'self'}.
    """

    # Builtin containers written without a bless() wrapper
    _UNBLESSED = (dict, list, tuple, set, frozenset)

    # Integers up to this many digits are written bare, longer ones quoted
    _BARE_INT_DIGITS = 9

    # Name of the root value in back-references
    _ROOT = "$VAR1"

    def __init__(self, indent=2):
        """Create encoder.

        Args:
            indent: Spaces per nesting level; 0 writes everything on one line
        """
        self.buf = []
        self.level = 0
        self.indent = indent
        self.path = PerlEncoder._ROOT
        self._inProgress = {}

    @staticmethod
    def encode(obj, indent=2):
        """Encode value to string.

        Args:
            obj: Value to serialize
            indent: Spaces per nesting level

        Returns:
            Serialized string representation
        """
        enc = PerlEncoder(indent)
        enc.writeObj(obj)
        return "".join(enc.buf)

    def writeObj(self, obj):
        """Write value to the buffer.

        Args:
            obj: Value to serialize
        """
        from objmeta.Scalar import Scalar

        if obj is None:
            self.w("undef")
            return

        if isinstance(obj, bool):
            self.w("1" if obj else "''")
            return

        if isinstance(obj, int):
            s = str(int(obj))
            if len(s.lstrip("-")) <= PerlEncoder._BARE_INT_DIGITS:
                self.w(s)
            else:
                self.wStrLiteral(s)
            return

        if isinstance(obj, numbers.Number):
            self.wStrLiteral(str(obj))
            return

        if isinstance(obj, str):
            self.wStrLiteral(obj)
            return

        if isinstance(obj, bytes):
            self.wStrLiteral(obj.decode("latin-1"))
            return

        if isinstance(obj, type):
            from objmeta.Type import Type
            self.wStrLiteral(Type.qnameOf(obj))
            return

        if inspect.isroutine(obj) or isinstance(obj, functools.partial):
            self.w('sub { "DUMMY" }')
            return

        key = id(obj)
        if key in self._inProgress:
            self.w(self._inProgress[key])
            return
        self._inProgress[key] = self.path
        try:
            if isinstance(obj, Scalar):
                self.w("\\")
                self._writeAt(obj.val(), "${" + self.path + "}")
            else:
                self._writeRef(obj)
        finally:
            del self._inProgress[key]

    def _writeRef(self, obj):
        from objmeta.Type import Type

        blessed = type(obj) not in PerlEncoder._UNBLESSED
        if blessed:
            self.w("bless( ")

        if isinstance(obj, Mapping):
            self.writeHash(obj)
        elif isinstance(obj, Set):
            self.writeArray(self._sortedMembers(obj))
        elif isinstance(obj, Sequence):
            self.writeArray(list(obj))
        else:
            self.writeHash(ObjUtil.fields(obj))

        if blessed:
            self.w(", ")
            self.wStrLiteral(Type.of(obj).qname())
            self.w(" )")

    def _writeAt(self, obj, path):
        """Write a nested value reachable from the root through path"""
        outer = self.path
        self.path = path
        self.writeObj(obj)
        self.path = outer

    def _elemPath(self, sub):
        # Arrow only after the root or a dereference
        if self.path == PerlEncoder._ROOT or self.path.startswith("${"):
            return self.path + "->" + sub
        return self.path + sub

    def _sortedMembers(self, members):
        """Order set members by their compact encoding"""
        return sorted(members, key=lambda m: PerlEncoder.encode(m, 0))

    def writeArray(self, items):
        """Write array literal.

        Args:
            items: List of values
        """
        if not items:
            self.w("[]")
            return

        self.w("[")
        self.level += 1
        for i, item in enumerate(items):
            if i > 0:
                self.w(",")
            self.wNewline()
            self.wIndent()
            self._writeAt(item, self._elemPath(f"[{i}]"))
        self.level -= 1
        self.wNewline()
        self.wIndent()
        self.w("]")

    def writeHash(self, m):
        """Write hash literal with keys in sorted order.

        Args:
            m: Mapping to write
        """
        if not m:
            self.w("{}")
            return

        pairs = sorted(((self._keyLiteral(k), v) for k, v in m.items()), key=lambda p: p[0])

        self.w("{")
        self.level += 1
        for i, (k, v) in enumerate(pairs):
            if i > 0:
                self.w(",")
            self.wNewline()
            self.wIndent()
            self.w(k)
            self.w(" => ")
            self._writeAt(v, self._elemPath("{" + k + "}"))
        self.level -= 1
        self.wNewline()
        self.wIndent()
        self.w("}")

    def _keyLiteral(self, k):
        """Key text: strings quoted, numbers bare, other keys by their
        compact encoding, so 1 and '1' stay distinct"""
        if isinstance(k, str):
            return PerlEncoder._quote(k)
        if isinstance(k, bytes):
            return PerlEncoder._quote(k.decode("latin-1"))
        if isinstance(k, bool):
            return str(int(k))
        if isinstance(k, numbers.Number):
            return str(k)
        return PerlEncoder.encode(k, 0)

    @staticmethod
    def _quote(s):
        return "'" + s.replace("\\", "\\\\").replace("'", "\\'") + "'"

    def wStrLiteral(self, s):
        """Write single-quoted string literal.

        Args:
            s: String to write

        Returns:
            self for chaining
        """
        self.w(PerlEncoder._quote(s))
        return self

    def wNewline(self):
        if self.indent:
            self.w("\n")
        return self

    def wIndent(self):
        """Write indentation.

        Returns:
            self for chaining
        """
        self.w(" " * (self.level * self.indent))
        return self

    def w(self, s):
        """Write string to output.

        Args:
            s: String to write

        Returns:
            self for chaining
        """
        self.buf.append(s)
        return self
