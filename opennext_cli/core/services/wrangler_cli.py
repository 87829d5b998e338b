"""
Wrangler CLI probe — is the Cloudflare CLI installed and logged in?

Only read-only invocations (``--version``, ``whoami``) are made. Any
failure to run the binary is reported as "not available", never raised.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)


class WranglerProbe:
    """Query the ``wrangler`` binary on PATH.

    Tests substitute a stub with the same three methods.
    """

    def __init__(self, binary: str = "wrangler", timeout: int = 15) -> None:
        self.binary = binary
        self.timeout = timeout

    def _run(self, *args: str) -> subprocess.CompletedProcess[str] | None:
        if shutil.which(self.binary) is None:
            return None
        try:
            return subprocess.run(
                [self.binary, *args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.debug("%s %s failed: %s", self.binary, " ".join(args), e)
            return None

    def version(self) -> str | None:
        """Wrangler version string, or None if it cannot be invoked."""
        result = self._run("--version")
        if result is None or result.returncode != 0:
            return None
        # "⛅️ wrangler 3.78.2" → "3.78.2"
        out = result.stdout.strip().split()
        return out[-1] if out else ""

    def is_installed(self) -> bool:
        return self.version() is not None

    def is_authenticated(self) -> bool:
        """True when ``wrangler whoami`` exits cleanly."""
        result = self._run("whoami")
        return result is not None and result.returncode == 0
