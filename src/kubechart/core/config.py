#!/usr/bin/env python3
"""
KUBECHART CONFIG
----------------
Run configuration handed to the engine by its caller (the CLI or a release
script). The core never reads environment variables or flags itself.

Author: KubeChart Team
Date: 2026-10-18
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_PLACEHOLDER = "{{ .Release.Namespace }}"
DEFAULT_NOTES_TEMPLATE = "{name} installed with Helm Chart version {version}"


@dataclass
class AssemblyConfig:
    chart_root: Path
    version: str
    app_version: Optional[str] = None
    description: Optional[str] = None        # None keeps the existing Chart.yaml description
    chart_name: Optional[str] = None
    placeholder: str = DEFAULT_PLACEHOLDER
    chart_label: bool = False                # Stamp helm.sh/chart on every resource
    starter: Optional[Path] = None           # helm-create style starter directory
    notes_template: Optional[str] = DEFAULT_NOTES_TEMPLATE

    def __post_init__(self):
        self.chart_root = Path(self.chart_root)
        if self.starter is not None:
            self.starter = Path(self.starter)

    @property
    def resolved_app_version(self) -> str:
        return self.app_version or self.version

    @property
    def resolved_name(self) -> str:
        return self.chart_name or self.chart_root.resolve().name

    @property
    def label_value(self) -> Optional[str]:
        return self.resolved_name if self.chart_label else None
