"""
Monorepo model — what the upward directory walk found.

A descriptor is built fresh by every detection call and never mutated
afterwards. Callers that need it again must detect again.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class MonorepoKind(str, Enum):
    """Workspace-management convention that produced the signal."""

    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"
    LERNA = "lerna"
    NX = "nx"
    TURBOREPO = "turborepo"


class MonorepoDescriptor(BaseModel):
    """Result of monorepo detection.

    ``workspace_patterns`` is only populated for pnpm, yarn and npm;
    marker-file tools (lerna, nx, turborepo) carry no patterns.
    """

    model_config = {"frozen": True}

    is_monorepo: bool = False
    kind: MonorepoKind | None = None
    root_path: Path | None = None
    workspace_patterns: list[str] | None = None

    @property
    def patterns(self) -> list[str]:
        """Workspace patterns, empty when none were declared."""
        return list(self.workspace_patterns or [])

    def to_dict(self) -> dict:
        return {
            "is_monorepo": self.is_monorepo,
            "kind": self.kind.value if self.kind else None,
            "root_path": str(self.root_path) if self.root_path else None,
            "workspace_patterns": self.workspace_patterns,
        }
