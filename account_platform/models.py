from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Account:
    """A stored account. `password_hash` stays inside the auth layer."""

    user_id: int
    username: str
    email: str
    password_hash: str
    full_name: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Any) -> "Account":
        d = dict(row)
        return cls(
            user_id=int(d["user_id"]),
            username=str(d["username"]),
            email=str(d["email"]),
            password_hash=str(d["password_hash"]),
            full_name=d.get("full_name"),
            created_at=str(d["created_at"]),
            updated_at=str(d["updated_at"]),
        )

    def public(self) -> Dict[str, Any]:
        """Client-facing view (wire keys match the SPA)."""
        return {
            "id": self.user_id,
            "username": self.username,
            "email": self.email,
            "fullName": self.full_name,
        }


# Patchable field -> column
PATCH_COLUMNS: Dict[str, str] = {
    "username": "username",
    "email": "email",
    "password_hash": "password_hash",
    "full_name": "full_name",
}


@dataclass(frozen=True)
class AccountPatch:
    """Partial update. None means "leave unchanged"."""

    username: Optional[str] = None
    email: Optional[str] = None
    password_hash: Optional[str] = None
    full_name: Optional[str] = None

    def present(self) -> List[Tuple[str, Any]]:
        """(column, value) pairs for the supplied fields only."""
        out: List[Tuple[str, Any]] = []
        for field, column in PATCH_COLUMNS.items():
            value = getattr(self, field)
            if value is not None:
                out.append((column, value))
        return out

    def is_empty(self) -> bool:
        return not self.present()
