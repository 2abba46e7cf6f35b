"""Category domain exports"""

from .models import CATEGORY_TYPES, CategoryInput, CategorySnapshot
from .repository import CategoryRepository
from .service import CategoryService, require_category

__all__ = [
    "CATEGORY_TYPES",
    "CategoryInput",
    "CategoryRepository",
    "CategorySnapshot",
    "CategoryService",
    "require_category",
]
