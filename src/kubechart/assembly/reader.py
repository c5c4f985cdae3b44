#!/usr/bin/env python3
"""
KUBECHART READER - Document Stream Slicer
-----------------------------------------
Splits a rendered multi-document YAML stream into independent Documents,
keeping source order. Each segment is parsed on its own so that a broken
document can be reported by its position in the stream.

Author: KubeChart Team
Date: 2026-10-18
"""

import re
import logging
from typing import List, Tuple

from ruamel.yaml import YAML, YAMLError

from kubechart.core.models import Document
from kubechart.core.errors import ParseError

logger = logging.getLogger("kubechart.reader")


class StreamReader:
    """
    Turns raw text into an ordered list of round-trip Documents.
    Empty segments (nothing but whitespace or comments) are skipped and do
    not consume an index.
    """

    # '---' start markers and '...' end markers; a start marker may carry
    # content on the same line ('--- !!map', '--- kind: B')
    BOUNDARY = re.compile(r'^(?:---|\.\.\.)(?=\s|$)')

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True

    def _clean_artifacts(self, text: str) -> str:
        """Removes the UTF-8 BOM and normalises line endings."""
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n').replace('\r', '\n')

    def _segments(self, text: str) -> List[Tuple[int, str]]:
        """Returns (first line number, segment text) pairs, 1-based lines."""
        segments = []
        current: List[str] = []
        start = 1
        for line_no, line in enumerate(text.split('\n'), 1):
            if self.BOUNDARY.match(line):
                segments.append((start, "\n".join(current)))
                current = []
                start = line_no + 1
                # ruamel accepts a leading '---', so inline content stays with its document
                trailing = line[3:].strip()
                if line.startswith('---') and trailing and not trailing.startswith('#'):
                    current.append(line)
                    start = line_no
                continue
            current.append(line)
        segments.append((start, "\n".join(current)))
        return segments

    def _is_blank(self, segment: str) -> bool:
        for line in segment.splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith('#'):
                return False
        return True

    def read(self, raw_text: str) -> List[Document]:
        """
        Parses every non-empty segment. The first malformed segment aborts
        the whole read with a ParseError naming its ordinal index.
        """
        documents: List[Document] = []
        for start, segment in self._segments(self._clean_artifacts(raw_text)):
            if self._is_blank(segment):
                continue

            index = len(documents)
            try:
                body = self.yaml.load(segment)
            except YAMLError as e:
                mark = getattr(e, 'problem_mark', None) or getattr(e, 'context_mark', None)
                if mark is not None:
                    raise ParseError(index, str(e), line=start + mark.line, column=mark.column + 1) from e
                raise ParseError(index, str(e)) from e

            # Explicit nulls ('~' or 'null') carry no resource either
            if body is None:
                continue

            logger.debug(f"Parsed document #{index} starting at line {start}")
            documents.append(Document(index=index, body=body, source=segment))

        return documents


def read_documents(raw_text: str) -> List[Document]:
    """Convenience wrapper around StreamReader().read()."""
    return StreamReader().read(raw_text)
