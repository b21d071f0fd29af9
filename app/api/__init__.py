# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a package: the web-facing part of the membership service.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer (versioned routers and HTTP middleware).
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# app.main

CURRENT_VERSION = "v1"

DEFAULT_HEADERS = {
    "X-API-Version": CURRENT_VERSION,
}

__all__ = ["CURRENT_VERSION", "DEFAULT_HEADERS"]
