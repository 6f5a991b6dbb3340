#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""
objmetax - serialization of arbitrary values as Perl literals, JSON and YAML.
"""

from .PerlEncoder import PerlEncoder
from .PlainEncoder import PlainEncoder
from .JsonEncoder import JsonEncoder
from .YamlEncoder import YamlEncoder
