# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package with the common tools every part of the
# membership service uses, like settings, errors, security and messaging.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package initialization for configuration, core exceptions and security,
# the event relay, database connection management and utilities.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership (all layers)
# - app.api (middleware, health checks)
