"""Transfer domain exports"""

from .models import TransferInput, TransferSnapshot
from .service import TransferService

__all__ = ["TransferInput", "TransferSnapshot", "TransferService"]
