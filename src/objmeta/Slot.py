#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


# Flag constants
class FConst:
    """Slot flag constants."""
    Public = 0x00000001
    Private = 0x00000002
    Native = 0x00000010
    Override = 0x00000200
    Abstract = 0x00000400
    Static = 0x00000800
    ClassLevel = 0x00001000


class Slot(Obj):
    """Base class for Method reflection."""

    def __init__(self, parent=None, name="", flags=0):
        self._parent = parent
        self._name = name
        self._flags = flags

    def parent(self):
        """Get declaring type."""
        return self._parent

    def name(self):
        """Get slot name."""
        return self._name

    def flags_(self):
        """Get raw flags value."""
        return self._flags

    def qname(self):
        """Get qualified name (Type.slotName)."""
        if self._parent:
            return f"{self._parent.qname()}.{self._name}"
        return self._name

    def isMethod(self):
        """Return true if this is a Method."""
        return False

    def isPublic(self):
        return (self._flags & FConst.Public) != 0

    def isPrivate(self):
        return (self._flags & FConst.Private) != 0

    def isStatic(self):
        return (self._flags & FConst.Static) != 0

    def isClassLevel(self):
        """Return true if bound to the class rather than an instance."""
        return (self._flags & FConst.ClassLevel) != 0

    def isAbstract(self):
        return (self._flags & FConst.Abstract) != 0

    def isOverride(self):
        """Return true if an ancestor declares a slot of the same name."""
        return (self._flags & FConst.Override) != 0

    def isNative(self):
        """Return true if implemented outside Python (builtin)."""
        return (self._flags & FConst.Native) != 0

    def toStr(self):
        return self.qname()

    def __repr__(self):
        return self.toStr()

    @staticmethod
    def find(qname, checked=True):
        """Find slot by qualified name like 'collections.OrderedDict.keys'.

        Args:
            qname: Qualified name in format 'module.Type.slot'
            checked: If True, raise UnknownSlotErr if not found

        Returns:
            Slot instance or None
        """
        dot_idx = qname.rfind('.')
        if dot_idx < 0:
            if checked:
                from .Err import UnknownSlotErr
                raise UnknownSlotErr.make(f"Invalid slot qname: {qname}")
            return None

        type_qname = qname[:dot_idx]
        slot_name = qname[dot_idx + 1:]

        from .Type import Type
        type_obj = Type.find(type_qname, checked)
        if type_obj is None:
            return None

        return type_obj.method(slot_name, checked)
