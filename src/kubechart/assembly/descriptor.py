#!/usr/bin/env python3
"""
KUBECHART DESCRIPTOR - Chart.yaml Merger
----------------------------------------
Stamps release metadata onto a chart descriptor. The merge is plain field
assignment on a copy: every key other than version, appVersion and
description comes through untouched.

Author: KubeChart Team
Date: 2026-10-18
"""

import io
import copy
import logging
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from kubechart.core.errors import ChartIOError, SchemaError

logger = logging.getLogger("kubechart.descriptor")

DESCRIPTOR_FILE = "Chart.yaml"


def _yaml() -> YAML:
    yaml = YAML(typ='rt')
    yaml.preserve_quotes = True
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    return yaml


def merge(descriptor: Any, version: str, app_version: str,
          description: Optional[str] = None) -> CommentedMap:
    """
    Returns a copy of `descriptor` with the three release fields set.
    A `description` of None keeps whatever the descriptor already says.
    Merging the same values twice gives the same descriptor.
    """
    if not version or not str(version).strip():
        raise SchemaError(None, "version", "must be non-empty")
    if not app_version or not str(app_version).strip():
        raise SchemaError(None, "appVersion", "must be non-empty")

    merged = copy.deepcopy(descriptor) if descriptor is not None else CommentedMap()
    merged["version"] = str(version)
    # Helm reads an unquoted appVersion like 1.10 as a float
    merged["appVersion"] = DoubleQuotedScalarString(app_version)
    if description is not None:
        merged["description"] = description
    elif "description" not in merged:
        merged["description"] = ""
    return merged


def load_descriptor(path: Path) -> CommentedMap:
    """Reads Chart.yaml. An empty file loads as an empty descriptor."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8-sig')
    except OSError as e:
        raise ChartIOError(str(path), f"cannot read descriptor: {e}") from e

    try:
        data = _yaml().load(text)
    except YAMLError as e:
        raise ChartIOError(str(path), f"descriptor is not valid YAML: {e}") from e

    if data is None:
        return CommentedMap()
    if not isinstance(data, (dict, CommentedMap)):
        raise ChartIOError(str(path), f"descriptor must be a mapping, got {type(data).__name__}")
    return data


def dump_descriptor(descriptor: Any, path: Path):
    path = Path(path)
    stream = io.StringIO()
    _yaml().dump(descriptor, stream)
    try:
        path.write_text(stream.getvalue(), encoding='utf-8')
    except OSError as e:
        raise ChartIOError(str(path), f"cannot write descriptor: {e}") from e
    logger.info(f"Wrote descriptor {path}")
