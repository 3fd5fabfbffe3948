"""
Email Sync Package

Wires an email source, the transaction parser and a transaction store
together.

Key Components:
- orchestrator: SyncOrchestrator and the EmailSource protocol
- datastore: JSON file transaction store with unique email ids
- demo: sample transactions for trying the app without a mailbox

Sync contract: `{synced, total}` with synced <= total, plus a per-user
`last_sync_at` and a cumulative `synced_email_count`. Re-running a sync
over the same emails stores nothing new.
"""

from .datastore import JsonTransactionStore
from .demo import DEMO_TRANSACTIONS, seed_demo_transactions
from .orchestrator import EmailSource, SyncOrchestrator, SyncResult

__all__ = [
    "DEMO_TRANSACTIONS",
    "EmailSource",
    "JsonTransactionStore",
    "SyncOrchestrator",
    "SyncResult",
    "seed_demo_transactions",
]
