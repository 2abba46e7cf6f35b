"""Income domain exports"""

from .models import IncomeInput, IncomeSnapshot
from .service import IncomeService

__all__ = ["IncomeInput", "IncomeSnapshot", "IncomeService"]
