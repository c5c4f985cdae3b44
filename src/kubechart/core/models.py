#!/usr/bin/env python3
"""
KUBECHART CORE MODELS
---------------------
Defines the fundamental data structures used across the KubeChart assembler.
A Document is one resource from the rendered stream; a PlannedFile is the
decision about where (and whether) that resource lands inside the chart.

Author: KubeChart Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Any, List

from ruamel.yaml.comments import CommentedMap


class Category(Enum):
    """Output-routing class derived from a resource's `kind`."""
    CRD = "CustomResourceDefinition"
    ROLE_BINDING = "RoleBinding"
    NAMESPACE = "Namespace"
    GENERIC = "Generic"


@dataclass
class Document:
    """
    The atomic unit of a rendered manifest stream.

    `index` is the zero-based position among the non-empty documents of the
    stream and is the document's identity for the whole run.
    """
    index: int              # Position in the source stream
    body: Any               # Round-trip tree (usually a CommentedMap)
    source: str = ""        # The raw text segment the body was parsed from

    @property
    def kind(self) -> Optional[Any]:
        if isinstance(self.body, (dict, CommentedMap)):
            return self.body.get("kind")
        return None

    @property
    def name(self) -> Optional[str]:
        if not isinstance(self.body, (dict, CommentedMap)):
            return None
        metadata = self.body.get("metadata")
        if isinstance(metadata, (dict, CommentedMap)):
            return metadata.get("name")
        return None


@dataclass
class PlannedFile:
    """One entry of the output plan."""
    document: Document                   # The rewritten copy, never the parsed original
    category: Category
    directory: Optional[str] = None      # 'crds' / 'templates'; None when dropped
    filename: Optional[str] = None
    changes: List[str] = field(default_factory=list)

    @property
    def dropped(self) -> bool:
        return self.directory is None

    @property
    def relative_path(self) -> Optional[str]:
        if self.dropped:
            return None
        return f"{self.directory}/{self.filename}"
