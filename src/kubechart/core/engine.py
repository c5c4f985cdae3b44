#!/usr/bin/env python3
"""
KUBECHART ENGINE - The Release Assembler
----------------------------------------
ChartAssembler drives a full run: it plans the chart in memory, seeds a
staging area (starter or previous chart), writes resources, merges the
descriptor, renders NOTES.txt and swaps the result into place. Any failure
leaves the previous chart untouched.

Author: KubeChart Team
Date: 2026-10-18
"""

import shutil
import logging
from pathlib import Path
from typing import Any, Dict, List

from ruamel.yaml.comments import CommentedMap

from kubechart.assembly.pipeline import AssemblyPipeline
from kubechart.assembly.context import AssemblyContext
from kubechart.assembly.materializer import LayoutMaterializer, CRD_DIR, TEMPLATES_DIR
from kubechart.assembly.descriptor import DESCRIPTOR_FILE, merge, load_descriptor, dump_descriptor
from kubechart.core.config import AssemblyConfig
from kubechart.core.errors import AssemblyError, ChartIOError
from kubechart.core.models import Category

# Setup standardized logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("kubechart.engine")

CHARTNAME_TOKEN = "<CHARTNAME>"
NOTES_FILE = "NOTES.txt"


class ChartAssembler:
    """
    Principal orchestrator for turning a rendered manifest stream into a
    Helm chart on disk.
    """

    def __init__(self, config: AssemblyConfig):
        self.config = config
        self.pipeline = AssemblyPipeline(placeholder=config.placeholder,
                                         chart_label=config.label_value)
        self.materializer = LayoutMaterializer()

    def plan(self, input_text: str) -> Dict[str, Any]:
        """Runs the in-memory pipeline only. Nothing is written."""
        try:
            context = self.pipeline.run(input_text)
        except AssemblyError as e:
            logger.error(f"Planning failed: {e}")
            raise
        return self._build_report(context, written=False)

    def assemble(self, input_text: str) -> Dict[str, Any]:
        """Plans and writes the chart. Raises AssemblyError on any failure."""
        chart_root = self.config.chart_root.resolve()
        try:
            context = self.pipeline.run(input_text)

            with self.materializer.staging(chart_root) as staging_dir:
                self._seed(staging_dir, chart_root)
                self.materializer.write(context.plan, staging_dir)
                descriptor = self._write_descriptor(staging_dir)
                self._write_notes(staging_dir)

        except AssemblyError as e:
            logger.error(f"Assembly of {chart_root} failed: {e}")
            raise

        report = self._build_report(context, written=True)
        report["descriptor"] = dict(descriptor)
        return report

    def _seed(self, staging_dir: Path, chart_root: Path):
        """
        Starter directories are copied whole; otherwise the previous chart
        is carried over minus the generated crds/ and templates/ trees.
        """
        try:
            if self.config.starter is not None:
                starter = self.config.starter.resolve()
                if not starter.is_dir():
                    raise ChartIOError(str(starter), "starter is not a directory")
                logger.info(f"Seeding chart from starter {starter}")
                shutil.copytree(starter, staging_dir, dirs_exist_ok=True)
                self._substitute_chart_name(staging_dir)
            elif chart_root.is_dir():
                for item in sorted(chart_root.iterdir()):
                    if item.name in (CRD_DIR, TEMPLATES_DIR):
                        continue
                    if item.is_dir():
                        shutil.copytree(item, staging_dir / item.name)
                    else:
                        shutil.copy2(item, staging_dir / item.name)
        except OSError as e:
            if isinstance(e, ChartIOError):
                raise
            raise ChartIOError(str(staging_dir), f"seeding failed: {e}") from e

    def _substitute_chart_name(self, root: Path):
        for path in sorted(root.rglob("*")):
            if not path.is_file():
                continue
            try:
                text = path.read_text(encoding='utf-8')
            except UnicodeDecodeError:
                continue
            if CHARTNAME_TOKEN in text:
                path.write_text(text.replace(CHARTNAME_TOKEN, self.config.resolved_name), encoding='utf-8')

    def _write_descriptor(self, staging_dir: Path) -> CommentedMap:
        path = staging_dir / DESCRIPTOR_FILE
        if path.exists():
            base = load_descriptor(path)
        else:
            base = CommentedMap()
            base["apiVersion"] = "v2"
            base["name"] = self.config.resolved_name
            base["type"] = "application"

        merged = merge(base, self.config.version, self.config.resolved_app_version,
                       self.config.description)
        dump_descriptor(merged, path)
        logger.info(f"Merged descriptor: version={merged['version']} appVersion={merged['appVersion']}")
        return merged

    def _write_notes(self, staging_dir: Path):
        if not self.config.notes_template:
            return
        notes = self.config.notes_template.format(name=self.config.resolved_name,
                                                  version=self.config.version)
        target = staging_dir / TEMPLATES_DIR / NOTES_FILE
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(notes + "\n", encoding='utf-8')
        except OSError as e:
            raise ChartIOError(str(target), f"cannot write notes: {e}") from e

    def _build_report(self, context: AssemblyContext, written: bool) -> Dict[str, Any]:
        files: List[Dict[str, Any]] = []
        for entry in context.plan:
            files.append({
                "index": entry.document.index,
                "kind": entry.document.kind,
                "name": entry.document.name,
                "category": entry.category.value,
                "path": entry.relative_path,
                "changes": list(entry.changes),
            })

        return {
            "chart_root": str(self.config.chart_root),
            "chart_name": self.config.resolved_name,
            "version": self.config.version,
            "app_version": self.config.resolved_app_version,
            "written": written,
            "files": files,
            "summary": {
                "documents": len(context.plan),
                "crds": context.count(Category.CRD),
                "templates": len(context.written) - context.count(Category.CRD),
                "dropped": len(context.dropped),
            },
        }
