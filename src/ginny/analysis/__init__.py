"""
Spending Analysis Package

Aggregated views over stored transactions: monthly income and expenses,
expense category breakdowns and per-bank summaries.
"""

from .summary import (
    OTHER_BANK_LABEL,
    BankStats,
    BankSummary,
    CategoryTotal,
    MonthlyTotals,
    SpendingAnalyzer,
    banks_summary,
    category_breakdown,
    monthly_totals,
)

__all__ = [
    "OTHER_BANK_LABEL",
    "BankStats",
    "BankSummary",
    "CategoryTotal",
    "MonthlyTotals",
    "SpendingAnalyzer",
    "banks_summary",
    "category_breakdown",
    "monthly_totals",
]
