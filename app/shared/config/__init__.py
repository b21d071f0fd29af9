# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell the membership service where its database and message
# broker live and how it should behave in each environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization exporting the environment-driven Settings and the
# kombu messaging configuration (queues, dead-letter routing).
#
# 🔗 Dependencies:
# - settings.py (pydantic-settings)
# - messaging.py (kombu)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - app.modules.membership.container
# - migrations/env.py

from .messaging import MessagingConfig
from .settings import Settings, get_settings

__all__ = [
    "get_settings",
    "Settings",
    "MessagingConfig",
]
