"""Security helpers for BlazeViews."""

from .redaction import REDACTED_VALUE, redact_params, redact_query_params

__all__ = ["REDACTED_VALUE", "redact_params", "redact_query_params"]
