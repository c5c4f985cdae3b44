#!/usr/bin/env python3
"""
KUBECHART FIELD REWRITER - Install-Time Parametrisation
-------------------------------------------------------
The RewriteEngine turns environment-specific manifests into chart templates.
Baked-in namespaces are removed because the installer assigns the namespace,
and RoleBinding subjects are pointed at a placeholder the installer resolves.

Rules work on a deep copy; the parsed stream is never touched.

Author: KubeChart Team
Date: 2026-10-18
"""

import copy
from typing import Any, List, Optional, Tuple

from ruamel.yaml.comments import CommentedMap

from kubechart.core.config import DEFAULT_PLACEHOLDER
from kubechart.core.errors import MutationError
from kubechart.core.models import Category, Document

CHART_LABEL = "helm.sh/chart"


class RewriteEngine:
    """
    Runs every document through an ordered registry of rewrite rules.
    Each rule returns a log message when it changed something, else "".
    """

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER, chart_label: Optional[str] = None):
        self.placeholder = placeholder
        self.chart_label = chart_label

        self.active_rules = [
            self._rule_strip_namespace,
            self._rule_template_subject_namespace,
        ]
        if chart_label:
            self.active_rules.append(self._rule_chart_label)

    def rewrite(self, doc: Document, category: Category) -> Tuple[Document, List[str]]:
        """
        Returns a rewritten copy of `doc` and the list of changes applied.
        Raises MutationError when a field has a shape a rule cannot handle.
        """
        rewritten = Document(index=doc.index, body=copy.deepcopy(doc.body), source=doc.source)
        changes = []

        for rule in self.active_rules:
            msg = rule(rewritten, category)
            if msg:
                changes.append(msg)

        return rewritten, changes

    def _metadata(self, doc: Document) -> Optional[Any]:
        metadata = doc.body.get("metadata")
        if metadata is None:
            return None
        if not isinstance(metadata, (dict, CommentedMap)):
            raise MutationError(doc.index, "metadata",
                                f"expected a mapping, got {type(metadata).__name__}")
        return metadata

    def _rule_strip_namespace(self, doc: Document, category: Category) -> str:
        """Policy: no resource carries its own namespace into the chart."""
        metadata = self._metadata(doc)
        if metadata is None or "namespace" not in metadata:
            return ""
        old = metadata.pop("namespace")
        return f"Removed metadata.namespace ({old})"

    def _rule_template_subject_namespace(self, doc: Document, category: Category) -> str:
        """
        Policy: a binding's subject must live in the release namespace.
        Only subjects[0] is rewritten; extra subjects pass through as-is.
        """
        if category is not Category.ROLE_BINDING:
            return ""

        subjects = doc.body.get("subjects")
        if subjects is None:
            return ""
        if not isinstance(subjects, list):
            raise MutationError(doc.index, "subjects",
                                f"expected a sequence, got {type(subjects).__name__}")
        if not subjects:
            return ""

        first = subjects[0]
        if not isinstance(first, (dict, CommentedMap)):
            raise MutationError(doc.index, "subjects[0]",
                                f"expected a mapping, got {type(first).__name__}")

        first["namespace"] = self.placeholder
        return f"Templated subjects[0].namespace as {self.placeholder}"

    def _rule_chart_label(self, doc: Document, category: Category) -> str:
        """Policy: every resource is labelled with the chart it ships in."""
        metadata = self._metadata(doc)
        if metadata is None:
            metadata = CommentedMap()
            doc.body["metadata"] = metadata

        labels = metadata.get("labels")
        if labels is None:
            labels = CommentedMap()
            metadata["labels"] = labels
        elif not isinstance(labels, (dict, CommentedMap)):
            raise MutationError(doc.index, "metadata.labels",
                                f"expected a mapping, got {type(labels).__name__}")

        if labels.get(CHART_LABEL) == self.chart_label:
            return ""
        labels[CHART_LABEL] = self.chart_label
        return f"Labelled {CHART_LABEL}={self.chart_label}"


def rewrite(doc: Document, category: Category, placeholder: str = DEFAULT_PLACEHOLDER) -> Document:
    """Applies the default rule set and returns only the rewritten document."""
    rewritten, _ = RewriteEngine(placeholder=placeholder).rewrite(doc, category)
    return rewritten
