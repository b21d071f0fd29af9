from .payment_gateway import ChargePayer, GatewayCharge, PaymentGateway
from .unit_of_work import UnitOfWork

__all__ = ["ChargePayer", "GatewayCharge", "PaymentGateway", "UnitOfWork"]
