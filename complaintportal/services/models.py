from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from bson import ObjectId


@dataclass
class User:
    id: ObjectId
    secret_code: str
    name: str
    email: str
    complaints: List[ObjectId] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        return cls(
            id=doc["_id"],
            secret_code=doc.get("secretcode", ""),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            complaints=list(doc.get("complaints") or []),
        )

    def to_document(self) -> dict:
        # field names match the documents already stored by the portal
        return {
            "_id": self.id,
            "secretcode": self.secret_code,
            "name": self.name,
            "email": self.email,
            "complaints": list(self.complaints),
        }

    def dictify(self) -> dict:
        return {
            "id": str(self.id),
            "secretCode": self.secret_code,
            "name": self.name,
            "email": self.email,
            "complaints": [str(c) for c in self.complaints],
        }


@dataclass
class Complaint:
    id: ObjectId
    title: str
    summary: str
    rating: int
    user_id: ObjectId
    resolved: bool = False

    @classmethod
    def from_document(cls, doc: dict) -> "Complaint":
        return cls(
            id=doc["_id"],
            title=doc.get("title", ""),
            summary=doc.get("summary", ""),
            rating=doc.get("rating", 0),
            user_id=doc.get("userid"),
            resolved=bool(doc.get("resolved", False)),
        )

    def to_document(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "summary": self.summary,
            "rating": self.rating,
            "resolved": self.resolved,
            "userid": self.user_id,
        }

    def dictify(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "summary": self.summary,
            "rating": self.rating,
            "resolved": self.resolved,
            "userId": str(self.user_id) if self.user_id is not None else None,
        }
