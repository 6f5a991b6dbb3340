#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

class Obj:
    """Base class for all objmeta runtime objects"""

    def equals(self, that):
        return self is that

    def hash(self):
        from .Env import Env
        return Env.cur().idHash(self)

    def toStr(self):
        return f"{type(self).__name__}@{self.hash():x}"

    def typeof(self):
        """Return the Type descriptor for this object"""
        # Import here to avoid circular dependency
        from .Type import Type
        return Type.fromClass(type(self))

    def __str__(self):
        return self.toStr()

    def __eq__(self, other):
        return self.equals(other)

    def __hash__(self):
        return self.hash()

    def __repr__(self):
        return self.toStr()
