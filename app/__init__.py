# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'app' folder as the NCFCA membership service and records its name and version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata for the
# NCFCA membership FastAPI backend.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - app.main (application entry point)
# - pyproject.toml (package discovery)

"""
NCFCA Membership API

Backend for the NCFCA debate association: family holders and their dependants,
club requests and clubs, enrollments, tournaments and training videos.
"""

__version__ = "1.0.0"
__title__ = "NCFCA Membership API"
__description__ = "Membership backend for the NCFCA debate association"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
