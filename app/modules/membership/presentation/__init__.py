# 📄 File: app/modules/membership/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The membership system's front door: web endpoints and the checks that guard them.
# 🧪 Purpose (Technical Summary):
# Presentation layer package (FastAPI routers, schemas, dependencies).
# 🔗 Dependencies:
# api, dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router
