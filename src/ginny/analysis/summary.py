#!/usr/bin/env python3
"""
Spending Summary Module

Monthly totals, expense category breakdowns and per-bank summaries over
stored transactions, computed with pandas.
"""

from dataclasses import dataclass, field

import pandas as pd

from ..bank_emails.banks import UNKNOWN_BANK
from ..core.datastore import TransactionStore
from ..core.dates import month_range
from ..core.models import Category, StoredTransaction, TransactionType
from ..core.money import Money

OTHER_BANK_LABEL = "Otro"

_COLUMNS = ["transaction_date", "amount", "type", "category", "bank_name"]
_INCOME = TransactionType.INCOME.value
_EXPENSE = TransactionType.EXPENSE.value


@dataclass(frozen=True)
class MonthlyTotals:
    income: Money
    expenses: Money

    @property
    def balance(self) -> Money:
        return self.income - self.expenses


@dataclass(frozen=True)
class CategoryTotal:
    category: Category
    total: Money


@dataclass(frozen=True)
class BankSummary:
    bank_name: str
    transaction_count: int
    total_income: Money
    total_expenses: Money

    @property
    def balance(self) -> Money:
        return self.total_income - self.total_expenses


@dataclass(frozen=True)
class BankStats:
    income: Money
    expenses: Money
    categories: list[CategoryTotal] = field(default_factory=list)


def display_bank_name(bank_name: str | None) -> str:
    if not bank_name or bank_name == UNKNOWN_BANK:
        return OTHER_BANK_LABEL
    return bank_name


def transactions_frame(transactions: list[StoredTransaction]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per transaction.

    Amounts are integer cents; a missing or unrecognized bank becomes
    OTHER_BANK_LABEL.
    """
    rows = [
        {
            "transaction_date": txn.transaction_date,
            "amount": txn.amount.to_cents(),
            "type": txn.type.value,
            "category": txn.category.value,
            "bank_name": display_bank_name(txn.bank_name),
        }
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=_COLUMNS)


def _sum_cents(series: pd.Series) -> Money:
    return Money.from_cents(int(series.sum()))


def monthly_totals(transactions: list[StoredTransaction]) -> MonthlyTotals:
    """Income and expense totals."""
    df = transactions_frame(transactions)
    return MonthlyTotals(
        income=_sum_cents(df.loc[df["type"] == _INCOME, "amount"]),
        expenses=_sum_cents(df.loc[df["type"] == _EXPENSE, "amount"]),
    )


def category_breakdown(transactions: list[StoredTransaction]) -> list[CategoryTotal]:
    """
    Expense totals per category, largest first.

    Income transactions are ignored; ties keep category name order.
    """
    df = transactions_frame(transactions)
    expenses = df[df["type"] == _EXPENSE]
    if expenses.empty:
        return []

    totals = expenses.groupby("category")["amount"].sum().sort_values(ascending=False, kind="stable")
    return [CategoryTotal(Category(category), Money.from_cents(int(total))) for category, total in totals.items()]


def banks_summary(transactions: list[StoredTransaction]) -> list[BankSummary]:
    """Per-bank counts and totals, most active bank first."""
    df = transactions_frame(transactions)
    if df.empty:
        return []

    totals = df.pivot_table(
        index="bank_name", columns="type", values="amount", aggfunc="sum", fill_value=0
    ).reindex(columns=[_INCOME, _EXPENSE], fill_value=0)
    totals["count"] = df.groupby("bank_name").size()
    totals = totals.sort_values("count", ascending=False, kind="stable")

    return [
        BankSummary(
            bank_name=str(bank_name),
            transaction_count=int(row["count"]),
            total_income=Money.from_cents(int(row[_INCOME])),
            total_expenses=Money.from_cents(int(row[_EXPENSE])),
        )
        for bank_name, row in totals.iterrows()
    ]


class SpendingAnalyzer:
    """
    Summaries over a user's stored transactions.

    Month-scoped queries use UTC calendar months.
    """

    def __init__(self, store: TransactionStore):
        self.store = store

    def _month(self, user_id: str, year: int, month: int) -> list[StoredTransaction]:
        start, end = month_range(year, month)
        return self.store.transactions_between(user_id, start, end)

    def monthly_stats(self, user_id: str, year: int, month: int) -> MonthlyTotals:
        return monthly_totals(self._month(user_id, year, month))

    def category_breakdown(self, user_id: str, year: int, month: int) -> list[CategoryTotal]:
        return category_breakdown(self._month(user_id, year, month))

    def banks_summary(self, user_id: str) -> list[BankSummary]:
        return banks_summary(self.store.transactions(user_id))

    def bank_stats(self, user_id: str, bank_name: str, year: int, month: int) -> BankStats:
        """Monthly totals and expense categories for a single bank."""
        bank_txns = [
            txn for txn in self._month(user_id, year, month) if display_bank_name(txn.bank_name) == bank_name
        ]
        totals = monthly_totals(bank_txns)
        return BankStats(
            income=totals.income,
            expenses=totals.expenses,
            categories=category_breakdown(bank_txns),
        )
