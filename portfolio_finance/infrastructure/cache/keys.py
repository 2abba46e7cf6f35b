"""Cache key namespace for finance list views."""

from __future__ import annotations

EXPENSES = "finance:expenses"
INCOME = "finance:income"
WALLETS = "finance:wallets"
PEOPLE = "finance:people"
CATEGORIES = "finance:categories"
PAYMENTS = "finance:payments"

ALL_FINANCE_KEYS: tuple[str, ...] = (EXPENSES, INCOME, WALLETS, PEOPLE, CATEGORIES, PAYMENTS)

# Keys whose cached lists go stale when a given entity type is written.
INVALIDATES: dict[str, tuple[str, ...]] = {
    "expense": (EXPENSES, WALLETS, CATEGORIES),
    "income": (INCOME, WALLETS),
    "payment": (PAYMENTS, WALLETS, PEOPLE),
    "transfer": (WALLETS,),
    "wallet": (WALLETS,),
    "person": (PEOPLE,),
    "category": (CATEGORIES,),
}
