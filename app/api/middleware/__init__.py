# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# The helpers that sit in front of every endpoint: one tags and records each request,
# the other turns errors into clear messages.
# 🧪 Purpose (Technical Summary):
# Package initialization for HTTP middleware and exception handler registration.
# 🔗 Dependencies:
# error_handling, logging
# 🔄 Connected Modules / Calls From:
# app.main

from .error_handling import create_error_response, register_exception_handlers
from .logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware", "create_error_response", "register_exception_handlers"]
