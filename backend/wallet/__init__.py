"""
Dinero Wallet Module
Per-user virtual currency wallets with role-based access control

This module provides:
- Identity resolution from session claims, user ids and usernames
- Lazy, concurrency-safe wallet creation (seeded with 1000 dinero)
- Centralized access policy for cross-user wallet reads
- Administrative role clearing

Collections used:
- users: User profiles (id, username, roles)
- wallets: One wallet per user (id, userId, currencies)
"""

__version__ = "1.0.0"
