#!/usr/bin/env python3
"""
KUBECHART ASSEMBLY CONTEXT
--------------------------
State of a single assembly run, filled in by the AssemblyPipeline stage by
stage and handed to the engine for materialization.

Author: KubeChart Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from typing import List

from kubechart.core.models import Category, Document, PlannedFile


@dataclass
class AssemblyContext:
    raw_text: str                                             # The stream as received
    documents: List[Document] = field(default_factory=list)   # Parsed, never mutated
    plan: List[PlannedFile] = field(default_factory=list)     # One entry per document

    @property
    def written(self) -> List[PlannedFile]:
        return [p for p in self.plan if not p.dropped]

    @property
    def dropped(self) -> List[PlannedFile]:
        return [p for p in self.plan if p.dropped]

    def count(self, category: Category) -> int:
        return sum(1 for p in self.plan if p.category is category)
