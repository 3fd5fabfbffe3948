#!/usr/bin/env python3
"""
Demo transaction seeding.

Realistic sample transactions from the main Dominican banks, for trying the
summaries without a connected mailbox.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ..core.datastore import TransactionStore
from ..core.models import Category, ParsedTransaction, TransactionType
from ..core.money import Money

logger = logging.getLogger(__name__)

DEMO_EMAIL_PREFIX = "demo-"


@dataclass(frozen=True)
class DemoTransaction:
    pesos: int
    type: TransactionType
    category: Category
    description: str
    bank_name: str
    days_ago: int


_IN = TransactionType.INCOME
_OUT = TransactionType.EXPENSE

DEMO_TRANSACTIONS: tuple[DemoTransaction, ...] = (
    # Banreservas
    DemoTransaction(65000, _IN, Category.SALARY, "Nómina Quincenal - Empresa XYZ", "Banreservas", 1),
    DemoTransaction(3500, _OUT, Category.UTILITIES, "Pago EDENORTE Luz", "Banreservas", 2),
    DemoTransaction(1800, _OUT, Category.UTILITIES, "Pago CAASD Agua", "Banreservas", 3),
    DemoTransaction(2200, _OUT, Category.FOOD, "Supermercado Bravo", "Banreservas", 5),
    # Banco Popular
    DemoTransaction(4500, _OUT, Category.SHOPPING, "Compra Blue Mall", "Banco Popular", 1),
    DemoTransaction(1200, _OUT, Category.FOOD, "Jumbo Supermercados", "Banco Popular", 2),
    DemoTransaction(15000, _IN, Category.TRANSFER, "Transferencia recibida", "Banco Popular", 4),
    DemoTransaction(890, _OUT, Category.TRANSPORT, "Parqueo Ágora Mall", "Banco Popular", 6),
    # BHD León
    DemoTransaction(2800, _OUT, Category.ENTERTAINMENT, "Caribbean Cinemas", "BHD León", 1),
    DemoTransaction(1500, _OUT, Category.FOOD, "Restaurante Mesón D'Bari", "BHD León", 3),
    DemoTransaction(950, _OUT, Category.TRANSPORT, "Uber RD", "BHD León", 4),
    DemoTransaction(5200, _OUT, Category.SHOPPING, "La Sirena Megacentro", "BHD León", 7),
    # Scotiabank
    DemoTransaction(1100, _OUT, Category.ENTERTAINMENT, "Netflix + HBO Max", "Scotiabank", 2),
    DemoTransaction(2500, _OUT, Category.UTILITIES, "Claro Internet + Cable", "Scotiabank", 5),
    DemoTransaction(8000, _IN, Category.TRANSFER, "Pago freelance", "Scotiabank", 8),
    # Banco Santa Cruz
    DemoTransaction(750, _OUT, Category.HEALTH, "Farmacia Carol", "Banco Santa Cruz", 1),
    DemoTransaction(3200, _OUT, Category.HEALTH, "Consulta médica HOMS", "Banco Santa Cruz", 6),
    # Asociación Popular
    DemoTransaction(25000, _IN, Category.SALARY, "Bono navideño", "Asociación Popular", 3),
    DemoTransaction(1800, _OUT, Category.FOOD, "Nacional Supermercados", "Asociación Popular", 4),
)


def seed_demo_transactions(store: TransactionStore, user_id: str, now: datetime | None = None) -> int:
    """
    Store the demo transactions for a user, dated relative to now.

    Each call adds a fresh set with new `demo-` email ids.

    Returns:
        Number of transactions created
    """
    now = now or datetime.now(timezone.utc)
    batch = uuid.uuid4().hex[:12]

    created = 0
    for index, demo in enumerate(DEMO_TRANSACTIONS):
        parsed = ParsedTransaction(
            amount=Money.from_pesos(demo.pesos),
            type=demo.type,
            category=demo.category,
            description=demo.description,
            bank_name=demo.bank_name,
            email_id=f"{DEMO_EMAIL_PREFIX}{batch}-{index}",
            transaction_date=now - timedelta(days=demo.days_ago),
        )
        store.add(user_id, parsed)
        created += 1

    logger.info(f"Seeded {created} demo transactions for {user_id}")
    return created
