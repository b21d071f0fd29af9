# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the membership API, kept apart so later versions can change without
# breaking the apps already using this one.
# 🧪 Purpose (Technical Summary):
# Package initialization for API version 1: metadata and OpenAPI tag descriptions.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main

from typing import Any, Dict

__version__ = "1.0.0"
__api_version__ = "v1"

API_TAGS = [
    {"name": "Users", "description": "Family holder registration and dependants"},
    {"name": "Club Requests", "description": "Requests to open a club"},
    {"name": "Administration", "description": "Club request decisions and role management"},
    {"name": "Clubs", "description": "Club search"},
    {"name": "Enrollments", "description": "Enrollment of dependants into clubs"},
    {"name": "Club Management", "description": "Club owner tools: enrollments and members"},
    {"name": "Tournaments", "description": "Tournament catalog, administration and registrations"},
    {"name": "Trainings", "description": "Training video catalog"},
    {"name": "Webhooks", "description": "Payment gateway notifications"},
    {"name": "Health Check", "description": "Liveness and readiness checks"},
]


def get_api_info() -> Dict[str, Any]:
    """API v1 metadata for the index endpoint."""
    return {
        "version": __version__,
        "api_version": __api_version__,
        "tags": [tag["name"] for tag in API_TAGS],
    }


__all__ = ["API_TAGS", "get_api_info"]
