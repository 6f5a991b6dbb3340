#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# objmeta - meta-object protocol over every Python value

# Base types
from .Obj import Obj
from .ObjUtil import ObjUtil

# Reflection
from .Type import Type
from .Slot import Slot, FConst
from .Method import Method

# Scalars and taint
from .Scalar import Scalar, TaintedStr
from .Taint import Taint

# Checksums
from .Digest import Digest

# Environment and logging
from .Env import Env
from .Log import Log, LogLevel, LogRec

# Errors
from .Err import Err, ArgErr, ParseErr, UnsupportedErr, UnsafeErr, UnknownTypeErr, UnknownSlotErr, IOErr

# Meta accessors
from .Meta import Meta, InstanceMeta, ClassMeta, mo, mc
