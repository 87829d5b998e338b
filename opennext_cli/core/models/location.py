"""
Project location model — where the Next.js project actually lives.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from opennext_cli.core.models.monorepo import MonorepoDescriptor


class ProjectLocation(BaseModel):
    """Outcome of resolving a Next.js project from a starting directory.

    ``resolved_root`` is always an existing directory: the project itself
    when found, otherwise the monorepo root, otherwise the start directory.
    """

    resolved_root: Path
    original_dir: Path
    is_monorepo: bool = False
    monorepo: MonorepoDescriptor | None = None
    target_found: bool = False
    searched_candidates: list[Path] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "resolved_root": str(self.resolved_root),
            "original_dir": str(self.original_dir),
            "is_monorepo": self.is_monorepo,
            "monorepo": self.monorepo.to_dict() if self.monorepo else None,
            "target_found": self.target_found,
            "searched_candidates": [str(p) for p in self.searched_candidates],
        }
