"""Policy helpers applied to anything written to the run log."""

from .redaction import redact_secrets

__all__ = ["redact_secrets"]
