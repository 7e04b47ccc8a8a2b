"""
Wallet API Routes

Endpoints:
- GET /wallet - Get the caller's own wallet
- GET /wallet/{username} - Get another user's wallet (self or super_user only)
- DELETE /wallet/admin/users/{user_id}/roles - Clear a user's roles (super_user only)
"""

import logging

from fastapi import APIRouter, Depends

from database import get_db
from utils.auth import get_current_user, get_super_user
from wallet.models import Identity, WalletResponse, ErrorResponse
from wallet.roles import remove_all_roles
from wallet.wallet_service import WalletService

logger = logging.getLogger(__name__)

wallet_router = APIRouter(prefix="/wallet", tags=["Wallet"])

_ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    503: {"model": ErrorResponse}
}


# ==================== WALLET ENDPOINTS ====================

@wallet_router.get("", response_model=WalletResponse, responses=_ERROR_RESPONSES)
@wallet_router.get("/", response_model=WalletResponse, responses=_ERROR_RESPONSES, include_in_schema=False)
async def get_own_wallet(user: Identity = Depends(get_current_user), db=Depends(get_db)):
    """
    Get the current user's wallet.

    The wallet is created with the starting dinero balance on first access.
    """
    wallet_service = WalletService(db)
    return await wallet_service.get_wallet(user)


@wallet_router.get("/{username}", response_model=WalletResponse, responses=_ERROR_RESPONSES)
async def get_user_wallet(
    username: str,
    user: Identity = Depends(get_current_user),
    db=Depends(get_db)
):
    """
    Get the wallet of `username`.

    Allowed for the user themselves and for super users. Unknown usernames
    return 404; everyone else gets 401.
    """
    wallet_service = WalletService(db)
    return await wallet_service.get_wallet(user, username)


# ==================== ADMIN ENDPOINTS ====================

@wallet_router.delete("/admin/users/{user_id}/roles")
async def admin_remove_roles(
    user_id: str,
    admin: Identity = Depends(get_super_user),
    db=Depends(get_db)
):
    """Remove every role from a user's profile (super_user only)."""
    success = await remove_all_roles(db, user_id)
    logger.info(f"Admin {admin.username} cleared roles of {user_id}: {success}")

    return {
        "success": success,
        "userId": user_id
    }
