"""People domain exports"""

from .models import PERSON_TYPES, PersonBalance, PersonInput, PersonSnapshot
from .service import PersonService

__all__ = ["PERSON_TYPES", "PersonBalance", "PersonInput", "PersonSnapshot", "PersonService"]
