#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import yaml

from .PlainEncoder import PlainEncoder


class YamlEncoder:
    """Serializes values to a YAML document."""

    @staticmethod
    def encode(obj):
        """Encode value to a YAML string.

        Block style, keys kept in insertion order, document starts with '---'.
        """
        return yaml.safe_dump(
            PlainEncoder.encode(obj),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            explicit_start=True,
        )
