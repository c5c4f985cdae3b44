#!/usr/bin/env python3
"""
KUBECHART ERRORS
----------------
Typed failures raised by the assembler. Every kind is fatal to a run; the
engine never retries and never leaves a partially written chart behind.

Author: KubeChart Team
Date: 2026-10-18
"""

from typing import Optional


class AssemblyError(Exception):
    """Base class for every failure the assembler reports."""


class ParseError(AssemblyError):
    """A document in the input stream is not well-formed YAML."""

    def __init__(self, index: int, detail: str,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.index = index
        self.detail = detail
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Document #{index} failed to parse{location}: {detail}")


class SchemaError(AssemblyError):
    """A required field is absent or empty."""

    def __init__(self, index: Optional[int], field: str, detail: str):
        self.index = index
        self.field = field
        self.detail = detail
        prefix = f"Document #{index}: " if index is not None else ""
        super().__init__(f"{prefix}'{field}' {detail}")


class MutationError(AssemblyError):
    """A field exists but has a shape the rewrite rule cannot work with."""

    def __init__(self, index: int, field: str, detail: str):
        self.index = index
        self.field = field
        self.detail = detail
        super().__init__(f"Document #{index}: cannot rewrite '{field}': {detail}")


class ChartIOError(AssemblyError, OSError):
    """Filesystem read/write failure, including unresolvable path collisions."""

    def __init__(self, path: str, detail: str):
        self.path = str(path)
        self.detail = detail
        AssemblyError.__init__(self, f"{path}: {detail}")

    def __str__(self) -> str:
        return f"{self.path}: {self.detail}"
