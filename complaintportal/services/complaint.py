from __future__ import annotations
from typing import List

from bson import ObjectId

from complaintportal.utils.logger import ServiceLogger
from .db import NotFoundError, PortalDatabase
from .models import Complaint
from .users import UserService


class InvalidIdError(ValueError):
    pass


def parse_object_id(value: str) -> ObjectId:
    # ObjectId(None) would mint a fresh id, so only 24-char hex strings pass
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdError(f"Invalid complaint ID: {value!r}")
    return ObjectId(value)


class ComplaintService:
    """Complaint submission, listing and resolution.

    Submitting also records the complaint on its owner's document, but only
    as a best-effort second step: the complaint is returned even when that
    update is skipped.
    """

    def __init__(self, db: PortalDatabase, users: UserService, logger: ServiceLogger) -> None:
        self.db = db
        self.users = users
        self.logger = logger

    def submit(self, title: str, summary: str, rating: int, user_id: ObjectId) -> Complaint:
        c = Complaint(id=ObjectId(), title=title, summary=summary, rating=rating, user_id=user_id, resolved=False)
        self.db.insert_complaint(c)
        self.logger.info(f"Complaint {c.id} submitted", complaint_id=str(c.id), user_id=str(user_id))
        self.users.append_complaint(user_id, c.id)
        return c

    def list_for_user(self, secret_code: str) -> List[Complaint]:
        user = self.users.login(secret_code)
        return list(self.db.find_complaints_by_user_id(user.id))

    def list_all(self) -> List[Complaint]:
        return list(self.db.find_all_complaints())

    def view(self, complaint_id: str) -> Complaint:
        oid = parse_object_id(complaint_id)
        try:
            return self.db.find_complaint_by_id(oid)
        except NotFoundError:
            raise NotFoundError("Complaint not found") from None

    def resolve(self, complaint_id: str) -> Complaint:
        c = self.view(complaint_id)
        c.resolved = True
        self.db.set_complaint_resolved(c.id)
        # the in-memory object is returned as-is, without re-reading the document
        self.logger.info(f"Complaint {c.id} resolved", complaint_id=str(c.id))
        return c
