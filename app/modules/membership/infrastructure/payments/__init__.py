# 📄 File: app/modules/membership/infrastructure/payments/__init__.py
# 🧭 Purpose (Layman Explanation):
# The payment providers the membership system can charge affiliation fees through.
# 🧪 Purpose (Technical Summary):
# Re-exports PaymentGateway implementations.
# 🔗 Dependencies:
# offline_gateway.py
# 🔄 Connected Modules / Calls From:
# app.modules.membership.container, tests

from .offline_gateway import OfflinePaymentGateway

__all__ = ["OfflinePaymentGateway"]
