#!/usr/bin/env python3
"""
KUBECHART EXPORTER - Round-Trip Serializer
------------------------------------------
Author: KubeChart Team
Date: 2026-10-18
"""

import io
from typing import Any

from ruamel.yaml import YAML


class ChartExporter:
    """
    Converts rewritten round-trip trees back to YAML text.
    Key order and comments are those of the source stream, so the same
    input always serializes to the same bytes.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Standard K8s: 2 spaces, but sequences are indented 4 (offset 2)
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def export(self, body: Any) -> str:
        stream = io.StringIO()
        self.yaml.dump(body, stream)
        return stream.getvalue()
