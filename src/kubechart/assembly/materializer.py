#!/usr/bin/env python3
"""
KUBECHART MATERIALIZER - Atomic Chart Layout
--------------------------------------------
Decides where each rewritten resource lives inside the chart and writes it
there. All writes go to a staging directory next to the chart root; the
finished tree replaces the chart root with a rename swap, so a failed run
leaves the previous chart exactly as it was.

Layout:
    crds/<kind>-<index>.yaml       CustomResourceDefinitions
    templates/<kind>-<index>.yaml  everything else
    (nothing)                      Namespaces, which the installer manages

Author: KubeChart Team
Date: 2026-10-18
"""

import os
import re
import shutil
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ruamel.yaml import YAMLError

from kubechart.assembly.exporter import ChartExporter
from kubechart.core.errors import ChartIOError
from kubechart.core.models import Category, Document, PlannedFile

logger = logging.getLogger("kubechart.materializer")

CRD_DIR = "crds"
TEMPLATES_DIR = "templates"
EXTENSION = ".yaml"

DIRECTORIES: Dict[Category, Optional[str]] = {
    Category.CRD: CRD_DIR,
    Category.ROLE_BINDING: TEMPLATES_DIR,
    Category.GENERIC: TEMPLATES_DIR,
    Category.NAMESPACE: None,
}


def _file_stem(kind: str) -> str:
    stem = re.sub(r'[^a-z0-9]+', '-', str(kind).lower()).strip('-')
    return stem or "resource"


def place(doc: Document, category: Category, index: int) -> Optional[Tuple[str, str]]:
    """Returns (directory, filename) for a document, or None when it is dropped."""
    directory = DIRECTORIES[category]
    if directory is None:
        return None
    return directory, f"{_file_stem(doc.kind)}-{index}{EXTENSION}"


class LayoutMaterializer:

    def __init__(self):
        self.exporter = ChartExporter()

    def write(self, plan: List[PlannedFile], root: Path) -> List[Path]:
        """
        Serializes every surviving entry of the plan under `root`.
        Meant to target a staging directory; see staging().
        """
        root = Path(root)
        written: List[Path] = []
        seen = set()

        for entry in plan:
            if entry.dropped:
                logger.debug(f"Dropping document #{entry.document.index} ({entry.document.kind})")
                continue

            if entry.relative_path in seen:
                raise ChartIOError(entry.relative_path,
                                   f"path collision for document #{entry.document.index}")
            seen.add(entry.relative_path)

            target = root / entry.directory / entry.filename
            try:
                content = self.exporter.export(entry.document.body)
            except YAMLError as e:
                raise ChartIOError(entry.relative_path, f"serialization failed: {e}") from e

            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding='utf-8')
            except OSError as e:
                raise ChartIOError(str(target), f"write failed: {e}") from e

            written.append(target)

        return written

    @contextmanager
    def staging(self, chart_root: Path) -> Iterator[Path]:
        """
        Yields an empty staging directory. When the block completes, the
        staging tree replaces `chart_root`; when it raises, the staging tree
        is discarded and `chart_root` is untouched.
        """
        chart_root = Path(chart_root).resolve()
        if chart_root.exists() and not chart_root.is_dir():
            raise ChartIOError(str(chart_root), "chart root exists and is not a directory")

        try:
            chart_root.parent.mkdir(parents=True, exist_ok=True)
            staging_dir = Path(tempfile.mkdtemp(prefix=f".{chart_root.name}.staging-",
                                                dir=chart_root.parent))
            os.chmod(staging_dir, 0o755)
        except OSError as e:
            raise ChartIOError(str(chart_root.parent), f"cannot create staging area: {e}") from e

        logger.info(f"Staging chart in {staging_dir}")
        try:
            yield staging_dir
            self._commit(staging_dir, chart_root)
        finally:
            if staging_dir.exists():
                shutil.rmtree(staging_dir, ignore_errors=True)

    def _commit(self, staging_dir: Path, chart_root: Path):
        backup: Optional[Path] = None
        try:
            if chart_root.exists():
                backup = Path(tempfile.mkdtemp(prefix=f".{chart_root.name}.previous-",
                                               dir=chart_root.parent))
                backup.rmdir()
                os.replace(chart_root, backup)
            os.replace(staging_dir, chart_root)
        except OSError as e:
            if backup is not None and backup.exists() and not chart_root.exists():
                os.replace(backup, chart_root)
            raise ChartIOError(str(chart_root), f"commit failed: {e}") from e

        if backup is not None:
            shutil.rmtree(backup, ignore_errors=True)
        logger.info(f"Committed chart to {chart_root}")

    def materialize(self, plan: List[PlannedFile], chart_root: Path) -> List[Path]:
        """Writes a plan as the complete content of `chart_root`, atomically."""
        with self.staging(chart_root) as staging_dir:
            staged = self.write(plan, staging_dir)
        return [Path(chart_root).resolve() / p.relative_to(staging_dir) for p in staged]
