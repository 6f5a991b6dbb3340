#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import base64
import hashlib

from .Obj import Obj


class Digest(Obj):
    """Message digest over hashlib with the checksum output formats"""

    # Map accepted algorithm names to hashlib names
    _ALGO_MAP = {
        'SHA1': 'sha1',
        'SHA-1': 'sha1',
        'MD5': 'md5',
    }

    _FORMATS = ("hex", "base64", "binary")

    def __init__(self, algorithm):
        algo_name = Digest._ALGO_MAP.get(str(algorithm).upper())
        if algo_name is None:
            from .Err import ArgErr
            raise ArgErr.make(f"algorithm must be sha1 or md5: {algorithm}")
        self._algorithm = algo_name
        self._hasher = hashlib.new(algo_name)

    @staticmethod
    def checksum(data, algorithm="sha1", format="hex"):
        """Digest a string in one step.

        Args:
            data: String or bytes to digest
            algorithm: 'sha1' or 'md5'
            format: 'hex', 'base64' or 'binary'

        Returns:
            str for hex and base64, bytes for binary
        """
        fmt = Digest._checkFormat(format)
        return Digest(algorithm).update(data).format(fmt)

    @staticmethod
    def _checkFormat(format):
        fmt = str(format).lower()
        if fmt not in Digest._FORMATS:
            from .Err import ArgErr
            raise ArgErr.make(f"format must be {', '.join(Digest._FORMATS)}: {format}")
        return fmt

    def algorithm(self):
        return self._algorithm

    def digestSize(self):
        return self._hasher.digest_size

    def update(self, data):
        """Update with a string (UTF-8) or bytes"""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._hasher.update(data)
        return self

    def digest(self):
        """Complete the digest and return raw bytes. Resets afterward."""
        result = self._hasher.digest()
        self._hasher = hashlib.new(self._algorithm)
        return result

    def format(self, format="hex"):
        """Complete the digest in the given output format"""
        fmt = Digest._checkFormat(format)
        raw = self.digest()
        if fmt == "hex":
            return raw.hex()
        if fmt == "base64":
            # Unpadded
            return base64.b64encode(raw).decode('ascii').rstrip('=')
        return raw
