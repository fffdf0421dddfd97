"""HTTP layer: auth placement and the async transport."""

from .auth import build_auth, redact_url
from .transport import HttpTransport

__all__ = ["build_auth", "redact_url", "HttpTransport"]
