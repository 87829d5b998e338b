"""OpenNext CLI — inspect Next.js projects deployed to Cloudflare Workers."""

__version__ = "0.1.0"
