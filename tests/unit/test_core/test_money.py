#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from ginny.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        """Test creating Money from cents."""
        assert Money.from_cents(1234).to_cents() == 1234

    @pytest.mark.currency
    def test_from_pesos_string(self):
        """Test parsing from peso strings."""
        assert Money.from_pesos("RD$1,234.50").to_cents() == 123450
        assert Money.from_pesos("12.34").to_cents() == 1234

    @pytest.mark.currency
    def test_from_pesos_int(self):
        """Test creating from integer pesos."""
        assert Money.from_pesos(25000).to_cents() == 2500000

    @pytest.mark.currency
    def test_from_decimal_rounds_half_up(self):
        """Test decimal amounts round to the nearest cent, halves up."""
        assert Money.from_decimal(Decimal("12.345")).to_cents() == 1235
        assert Money.from_decimal(Decimal("12.344")).to_cents() == 1234

    @pytest.mark.currency
    def test_zero(self):
        """Test the zero constructor."""
        assert Money.zero().to_cents() == 0


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition(self):
        """Test adding Money objects."""
        assert (Money.from_cents(100) + Money.from_cents(50)).to_cents() == 150

    @pytest.mark.currency
    def test_subtraction_can_go_negative(self):
        """Test subtracting Money objects."""
        assert (Money.from_cents(100) - Money.from_cents(130)).to_cents() == -30

    @pytest.mark.currency
    def test_abs(self):
        """Test absolute value."""
        assert Money.from_cents(-500).abs() == Money.from_cents(500)


class TestMoneyComparison:
    """Test Money comparison operations."""

    @pytest.mark.currency
    def test_equality(self):
        """Test equal amounts compare equal."""
        assert Money.from_pesos("RD$10.00") == Money.from_cents(1000)

    @pytest.mark.currency
    def test_ordering(self):
        """Test ordering operators."""
        small = Money.from_cents(100)
        large = Money.from_cents(200)
        assert small < large
        assert small <= large
        assert large > small
        assert large >= small

    @pytest.mark.currency
    def test_hashable(self):
        """Test Money can be used in sets."""
        assert len({Money.from_cents(1), Money.from_cents(1)}) == 1


class TestMoneyDisplay:
    """Test Money string conversions."""

    @pytest.mark.currency
    def test_str(self):
        """Test peso formatting."""
        assert str(Money.from_cents(150000)) == "RD$1,500.00"

    @pytest.mark.currency
    def test_negative_str(self):
        """Test negative amounts put the sign before the symbol."""
        assert str(Money.from_cents(-8950)) == "-RD$89.50"

    @pytest.mark.currency
    def test_to_decimal(self):
        """Test decimal conversion keeps two places."""
        assert Money.from_cents(150000).to_decimal() == Decimal("1500.00")
        assert str(Money.from_cents(5).to_decimal()) == "0.05"

    @pytest.mark.currency
    def test_to_plain_str(self):
        """Test grouped number without the symbol."""
        assert Money.from_cents(123456789).to_plain_str() == "1,234,567.89"

    def test_repr(self):
        """Test repr shows cents."""
        assert repr(Money.from_cents(42)) == "Money(cents=42)"
