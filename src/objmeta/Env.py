#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os
from pathlib import Path

from .Obj import Obj


class Env(Obj):
    """Runtime environment - identity hashes and configuration lookup"""

    _instance = None

    # Environment variables override the props file: checksum.format -> OBJMETA_CHECKSUM_FORMAT
    _VAR_PREFIX = "OBJMETA_"

    # Props file relative to the working directory
    _CONFIG_URI = "etc/objmeta/config.props"

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    def __init__(self):
        self._propsCache = {}

    def idHash(self, obj):
        """Get identity hash code for object.

        Returns the same value for the lifetime of the object.
        """
        return id(obj)

    def workDir(self):
        """Get working directory used to locate etc/ files"""
        return Path(os.environ.get("OBJMETA_HOME", os.getcwd()))

    def vars(self):
        """Return environment variables as an immutable snapshot"""
        from types import MappingProxyType
        return MappingProxyType(dict(os.environ))

    def props(self, uri):
        """Load props file relative to workDir.

        Args:
            uri: Path of props file relative to workDir

        Returns:
            Dict of properties; empty if the file does not exist
        """
        path = self.workDir() / uri
        cache_key = str(path)

        # Re-read when the file changed since it was cached
        mtime = path.stat().st_mtime if path.exists() else None
        if cache_key in self._propsCache:
            cached_mtime, cached_props = self._propsCache[cache_key]
            if cached_mtime == mtime:
                return cached_props

        props = {}
        if mtime is not None:
            props = Env._parseProps(path.read_text(encoding="utf-8"), str(path))

        self._propsCache[cache_key] = (mtime, props)
        return props

    def config(self, key, defVal=None):
        """Get configuration value.

        Args:
            key: Config key such as 'checksum.algorithm'
            defVal: Default value if not found

        Returns:
            Config value or default
        """
        var = Env._VAR_PREFIX + key.replace(".", "_").upper()
        val = os.environ.get(var)
        if val is not None and val != "":
            return val

        val = self.props(Env._CONFIG_URI).get(key)
        if val is not None:
            return val

        return defVal

    def reload(self):
        """Clear cached props files"""
        self._propsCache.clear()
        return self

    @staticmethod
    def _parseProps(text, source="props"):
        """Parse 'key=value' lines, skipping blanks and comments"""
        props = {}
        for num, line in enumerate(text.splitlines(), 1):
            line = line.strip()
            if not line or line.startswith("#") or line.startswith("//"):
                continue
            eq = line.find("=")
            if eq <= 0:
                from .Err import ParseErr
                raise ParseErr.make(f"Invalid props line {source}:{num}: {line}")
            props[line[:eq].strip()] = line[eq + 1:].strip()
        return props
