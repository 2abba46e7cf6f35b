"""Payment domain exports"""

from .models import PAYMENT_METHODS, PAYMENT_TYPES, PaymentInput, PaymentSnapshot
from .service import PaymentService

__all__ = ["PAYMENT_METHODS", "PAYMENT_TYPES", "PaymentInput", "PaymentSnapshot", "PaymentService"]
