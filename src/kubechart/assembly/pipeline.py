#!/usr/bin/env python3
"""
KUBECHART ASSEMBLY PIPELINE
---------------------------
Central coordinator for the in-memory part of a run:

    Reader -> Classifier -> Rewriter -> placement

The whole stream is read before anything is classified, and nothing is
written here; the resulting AssemblyContext carries the output plan to the
materializer.

Author: KubeChart Team
Date: 2026-10-18
"""

import logging
from typing import Optional

from kubechart.assembly.reader import StreamReader
from kubechart.assembly.classifier import ResourceClassifier
from kubechart.assembly.materializer import place
from kubechart.assembly.context import AssemblyContext
from kubechart.core.config import DEFAULT_PLACEHOLDER
from kubechart.core.models import PlannedFile
from kubechart.rules.rewriter import RewriteEngine

logger = logging.getLogger("kubechart.pipeline")


class AssemblyPipeline:

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER, chart_label: Optional[str] = None):
        self.reader = StreamReader()
        self.classifier = ResourceClassifier()
        self.rewriter = RewriteEngine(placeholder=placeholder, chart_label=chart_label)

    def run(self, input_text: str) -> AssemblyContext:
        # --- PHASE 1: READ THE WHOLE STREAM ---
        context = AssemblyContext(raw_text=input_text)
        context.documents = self.reader.read(input_text)
        logger.info(f"Read {len(context.documents)} document(s) from stream")

        # --- PHASE 2: CLASSIFY, REWRITE, PLACE ---
        for doc in context.documents:
            category = self.classifier.classify(doc)
            rewritten, changes = self.rewriter.rewrite(doc, category)
            destination = place(rewritten, category, doc.index)

            entry = PlannedFile(document=rewritten, category=category, changes=changes)
            if destination is not None:
                entry.directory, entry.filename = destination
            context.plan.append(entry)

            for change in changes:
                logger.debug(f"Document #{doc.index}: {change}")

        return context
