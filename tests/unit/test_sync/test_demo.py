#!/usr/bin/env python3
"""Tests for demo transaction seeding."""

from datetime import datetime, timedelta, timezone

import pytest

from ginny.core.models import TransactionType
from ginny.sync.demo import DEMO_TRANSACTIONS, seed_demo_transactions

NOW = datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)


class TestSeedDemoTransactions:
    """Test seed_demo_transactions()."""

    @pytest.mark.sync
    def test_seeds_every_demo_transaction(self, store):
        """Test one stored transaction per demo entry."""
        created = seed_demo_transactions(store, "demo@ginny.app", now=NOW)

        txns = store.transactions("demo@ginny.app")
        assert created == len(DEMO_TRANSACTIONS) == len(txns)
        assert all(txn.email_id.startswith("demo-") for txn in txns)

    @pytest.mark.sync
    def test_dates_relative_to_now(self, store):
        """Test demo dates fall within the previous days."""
        seed_demo_transactions(store, "demo@ginny.app", now=NOW)

        txns = store.transactions("demo@ginny.app")
        assert max(txn.transaction_date for txn in txns) == NOW - timedelta(days=1)
        assert min(txn.transaction_date for txn in txns) == NOW - timedelta(days=8)

    @pytest.mark.sync
    def test_reseeding_adds_fresh_batch(self, store):
        """Test each call creates new email ids instead of colliding."""
        seed_demo_transactions(store, "demo@ginny.app", now=NOW)
        seed_demo_transactions(store, "demo@ginny.app", now=NOW)

        assert len(store.transactions("demo@ginny.app")) == 2 * len(DEMO_TRANSACTIONS)

    def test_demo_data_mix(self):
        """Test the sample data has both income and expenses."""
        types = {demo.type for demo in DEMO_TRANSACTIONS}
        assert types == {TransactionType.INCOME, TransactionType.EXPENSE}
