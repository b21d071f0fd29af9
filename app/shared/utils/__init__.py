# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# A small toolbox the rest of the service shares: logging setup, input checks and
# helpers for ids and times.

# 🧪 Purpose (Technical Summary):
# Initializes the utilities package: structured logging (python-json-logger), field
# validators returning ValidationResult, and id/time helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities
# - validators: Data validation functions
# - helpers: Id generation and UTC time helpers

# 🔄 Connected Modules / Calls From:
# Used by: domain models (validators), handlers and infrastructure (logging, helpers)

from .helpers import IdGenerator, UuidGenerator, ensure_utc, utc_now
from .logging import get_logger, log_context, setup_logging
from .validators import ValidationResult

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
    "ValidationResult",
    "IdGenerator",
    "UuidGenerator",
    "ensure_utc",
    "utc_now",
]
