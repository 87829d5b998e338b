"""
Domain models — Pydantic types for the OpenNext CLI.

All models are re-exported here for convenient access:

    from opennext_cli.core.models import MonorepoDescriptor, ProjectLocation
"""

from opennext_cli.core.models.location import ProjectLocation
from opennext_cli.core.models.monorepo import MonorepoDescriptor, MonorepoKind
from opennext_cli.core.models.snapshot import ConfigSnapshot
from opennext_cli.core.models.validation import (
    CheckResult,
    CheckStatus,
    ValidationReport,
)

__all__ = [
    # validation.py
    "CheckResult",
    "CheckStatus",
    # snapshot.py
    "ConfigSnapshot",
    # monorepo.py
    "MonorepoDescriptor",
    "MonorepoKind",
    # location.py
    "ProjectLocation",
    "ValidationReport",
]
