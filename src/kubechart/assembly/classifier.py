#!/usr/bin/env python3
"""
KUBECHART CLASSIFIER - Kind Router
----------------------------------
Maps each Document onto exactly one output Category.

Rules are an ordered list of (category, predicate) pairs and the first
match wins. Matching is deliberately loose ('rolebinding' anywhere in the
kind, any case) so operator-defined and aggregated kinds route without
touching the other rules.

Author: KubeChart Team
Date: 2026-10-18
"""

import logging
from typing import Callable, List, Tuple

from kubechart.core.models import Category, Document
from kubechart.validator.validator import KindValidator

logger = logging.getLogger("kubechart.classifier")

KindRule = Tuple[Category, Callable[[str], bool]]


class ResourceClassifier:

    def __init__(self):
        self.validator = KindValidator()
        # Priority order matters
        self.rules: List[KindRule] = [
            (Category.CRD, lambda kind: kind == "CustomResourceDefinition"),
            (Category.ROLE_BINDING, lambda kind: "rolebinding" in kind.lower()),
            (Category.NAMESPACE, lambda kind: kind == "Namespace"),
        ]

    def classify(self, doc: Document) -> Category:
        kind = self.validator.require_kind(doc)
        for category, matches in self.rules:
            if matches(kind):
                logger.debug(f"Document #{doc.index} ({kind}) -> {category.name}")
                return category
        logger.debug(f"Document #{doc.index} ({kind}) -> GENERIC")
        return Category.GENERIC


def classify(doc: Document) -> Category:
    return ResourceClassifier().classify(doc)
