"""
Config snapshot model — fields pulled out of raw config text.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConfigSnapshot(BaseModel):
    """Typed view over wrangler.toml and open-next.config.ts.

    Recomputed from the files on every call. ``environment_names`` always
    starts with ``"production"``; an explicit ``[env.production]`` section
    adds a second entry.
    """

    identifier_name: str | None = None   # worker name
    account_ref: str | None = None       # Cloudflare account id
    strategy_name: str | None = None     # caching strategy
    environment_names: list[str] = Field(default_factory=lambda: ["production"])

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
