"""
Wallet Data Models

Pydantic models for identities and wallets.
Wallet documents are stored in MongoDB with camelCase keys (userId),
exposed here through aliases.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==================== IDENTITY MODELS ====================

class Role(str, Enum):
    """Role tags a user profile may carry."""
    SUPER_USER = "super_user"
    APP_OWNER = "app_owner"
    MEMBER = "member"
    ARCHIVED = "archived"


def parse_roles(raw: Any) -> FrozenSet[Role]:
    """
    Normalise a stored roles value into a set of known roles.

    Profiles store roles either as a list of tags or as a mapping of
    tag -> bool. Unknown tags and falsy mapping entries are dropped.
    """
    if not raw:
        return frozenset()

    if isinstance(raw, dict):
        tags = [tag for tag, enabled in raw.items() if enabled is True]
    elif isinstance(raw, (list, tuple, set, frozenset)):
        tags = list(raw)
    else:
        return frozenset()

    roles = set()
    for tag in tags:
        if isinstance(tag, Role):
            roles.add(tag)
        elif isinstance(tag, str) and tag in Role._value2member_map_:
            roles.add(Role(tag))
    return frozenset(roles)


class Identity(BaseModel):
    """Canonical user identity used for every access decision."""
    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    roles: FrozenSet[Role] = frozenset()

    @field_validator("roles", mode="before")
    @classmethod
    def _normalise_roles(cls, value):
        return parse_roles(value)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Identity":
        """Build an identity from a users collection document."""
        return cls(
            id=doc["id"],
            username=doc["username"],
            roles=doc.get("roles")
        )

    def has_role(self, role: Role) -> bool:
        return role in self.roles


# ==================== WALLET MODELS ====================

class Wallet(BaseModel):
    """A user's wallet document."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    currencies: Dict[str, int] = Field(default_factory=dict)
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    @field_validator("currencies")
    @classmethod
    def _non_negative(cls, value: Dict[str, int]) -> Dict[str, int]:
        for code, amount in value.items():
            if amount < 0:
                raise ValueError(f"Balance for {code} cannot be negative")
        return value


# ==================== RESPONSE MODELS ====================

class WalletData(BaseModel):
    """Public wallet fields"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    currencies: Dict[str, int]


class WalletEnvelope(BaseModel):
    id: str
    data: WalletData


class WalletResponse(BaseModel):
    """Response model for wallet endpoints"""
    message: str
    wallet: WalletEnvelope

    @classmethod
    def from_wallet(cls, wallet: Wallet, message: str) -> "WalletResponse":
        return cls(
            message=message,
            wallet=WalletEnvelope(
                id=wallet.id,
                data=WalletData(user_id=wallet.user_id, currencies=dict(wallet.currencies))
            )
        )


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint"""
    error: str
    message: str
