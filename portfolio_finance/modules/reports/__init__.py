"""Reporting exports"""

from .models import (
    ActivityItem,
    Dashboard,
    ExpenseReport,
    FinancialSummary,
    GroupTotal,
    MonthlyTotal,
    OverdueItem,
    UpcomingItem,
    WalletHistoryItem,
)
from .service import ReportService, financial_health_score, monthly_totals, months_ago

__all__ = [
    "ActivityItem",
    "Dashboard",
    "ExpenseReport",
    "FinancialSummary",
    "GroupTotal",
    "MonthlyTotal",
    "OverdueItem",
    "UpcomingItem",
    "WalletHistoryItem",
    "ReportService",
    "financial_health_score",
    "monthly_totals",
    "months_ago",
]
