#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import json

from .PlainEncoder import PlainEncoder


class JsonEncoder:
    """Serializes values to JSON text."""

    @staticmethod
    def encode(obj, indent=None):
        """Encode value to a JSON string.

        Args:
            obj: Value to serialize
            indent: Optional indent for pretty output

        Returns:
            JSON text
        """
        return json.dumps(PlainEncoder.encode(obj), ensure_ascii=False, indent=indent)
