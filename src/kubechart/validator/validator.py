#!/usr/bin/env python3
"""
KUBECHART VALIDATOR - Identity Gate
-----------------------------------
The assembler treats resources as opaque trees, so validation stops at the
one field every routing decision depends on: `kind`. Anything beyond that
(API schemas, references, ordering) is the installer's business.

Author: KubeChart Team
Date: 2026-10-18
"""

import logging
from typing import Any

from ruamel.yaml.comments import CommentedMap

from kubechart.core.models import Document
from kubechart.core.errors import SchemaError

logger = logging.getLogger("kubechart.validator")


class KindValidator:
    """Raises SchemaError for documents that cannot be routed."""

    def require_kind(self, doc: Document) -> str:
        """Returns the document's kind or raises SchemaError."""
        body: Any = doc.body
        if not isinstance(body, (dict, CommentedMap)):
            self._reject(doc, f"is unavailable: document is a {type(body).__name__}, not a mapping")

        if "kind" not in body:
            self._reject(doc, "is required but missing")

        kind = body["kind"]
        if not isinstance(kind, str) or not kind.strip():
            self._reject(doc, f"must be a non-empty string, got {kind!r}")

        return kind

    def _reject(self, doc: Document, detail: str):
        logger.error(f"Document #{doc.index} rejected: 'kind' {detail}")
        raise SchemaError(doc.index, "kind", detail)
