from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class User:
    email: str
    password_hash: str
    created_at: Optional[datetime] = None
    id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            email=doc["email"],
            password_hash=doc["password_hash"],
            created_at=doc.get("createdAt"),
            id=str(doc["_id"]),
        )

    def to_transfer(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email}
