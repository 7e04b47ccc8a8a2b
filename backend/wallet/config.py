"""
Wallet Configuration and Constants

Seed balances, collection names and response messages are defined here.
"""

import os

# ==================== CURRENCIES ====================
DEFAULT_CURRENCY = "dinero"

# Balance granted once, when a user's wallet is first created
STARTING_BALANCE = 1000

SEED_CURRENCIES = {
    DEFAULT_CURRENCY: STARTING_BALANCE
}

# ==================== COLLECTIONS ====================
USERS_COLLECTION = "users"
WALLETS_COLLECTION = "wallets"

# ==================== SESSION ====================
COOKIE_NAME = os.environ.get("COOKIE_NAME", "rds-session")
JWT_SECRET = os.environ.get("JWT_SECRET", "dinero-wallet-secret-key-change-in-production")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
TOKEN_TTL_DAYS = 30

# ==================== RESPONSE MESSAGES ====================
WALLET_RETURNED_MESSAGE = "Wallet returned successfully for user"

ERROR_MESSAGES = {
    "UNAUTHORIZED": "You are not authorized for this action.",
    "UNAUTHENTICATED": "Unauthenticated User",
    "USER_NOT_FOUND": "User doesn't exist",
    "STORE_UNAVAILABLE": "Wallet store is temporarily unavailable. Please try again.",
    "INTERNAL": "An internal server error occurred"
}
