#!/usr/bin/env python3
"""
Direction and Category Classification Rules

Keyword rules over the combined lower-cased email text. Category rules are
an explicit ordered list: terms overlap across groups ("pago", "mercado"),
so the first matching rule decides.
"""

import re
from dataclasses import dataclass

from ..core.models import Category, TransactionType


def _keywords(*terms: str) -> re.Pattern:
    return re.compile("|".join(terms))


INCOME_PATTERN = _keywords(
    "deposito",
    "depósito",
    "abono",
    "abonado",
    "salario",
    "nómina",
    "nomina",
    "ingreso",
    "transferencia recibida",
)


@dataclass(frozen=True)
class CategoryRule:
    """Assigns `category` when `pattern` occurs in the text."""

    category: Category
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        Category.FOOD,
        _keywords(
            "supermercado",
            "mercado",
            "alimento",
            "comida",
            "restaurante",
            "delivery",
            "uber eats",
            "pedidos ya",
        ),
    ),
    CategoryRule(
        Category.TRANSPORT,
        _keywords("gasolina", "combustible", "peaje", "uber", "taxi", "indriver", "transporte"),
    ),
    CategoryRule(
        Category.UTILITIES,
        _keywords(
            "edenorte",
            "edesur",
            "edeeste",
            "claro",
            "altice",
            "viva",
            "tricom",
            "agua",
            "luz",
            "electricidad",
        ),
    ),
    CategoryRule(
        Category.ENTERTAINMENT,
        _keywords("cine", "netflix", "spotify", "entretenimiento", "juego"),
    ),
    CategoryRule(
        Category.SHOPPING,
        _keywords("tienda", "compra", "amazon", "jumbo", "sirena", "plaza", "mall"),
    ),
    CategoryRule(
        Category.HEALTH,
        _keywords(
            "farmacia",
            "hospital",
            "clínica",
            "clinica",
            "médico",
            "medico",
            "salud",
            "laboratorio",
        ),
    ),
    CategoryRule(
        Category.EDUCATION,
        _keywords("universidad", "colegio", "escuela", "curso", "educación", "educacion"),
    ),
    CategoryRule(
        Category.SALARY,
        _keywords("salario", "nómina", "nomina", r"pago.*empresa"),
    ),
    CategoryRule(Category.TRANSFER, _keywords("transferencia")),
)

DEFAULT_CATEGORY = Category.OTHER


def classify_direction(text: str) -> TransactionType:
    """Income if any income cue appears in the text, otherwise expense."""
    if INCOME_PATTERN.search(text):
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def classify_category(text: str, rules: tuple[CategoryRule, ...] = CATEGORY_RULES) -> Category:
    """
    Classify text into the category of the first matching rule.

    Args:
        text: Lower-cased combined email text
        rules: Ordered rules; defaults to CATEGORY_RULES

    Returns:
        Matching category, or Category.OTHER
    """
    for rule in rules:
        if rule.matches(text):
            return rule.category
    return DEFAULT_CATEGORY
