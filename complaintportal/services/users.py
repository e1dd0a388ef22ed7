from __future__ import annotations
import secrets

from bson import ObjectId

from complaintportal.utils.logger import ServiceLogger
from .db import NotFoundError, PortalDatabase, StorageError
from .models import User


def generate_secret_code() -> str:
    """Uniformly random 6-digit code, zero padded (000000-999999)."""
    return f"{secrets.randbelow(1000000):06d}"


class UserService:
    """Registration, secret-code login and the user's complaint back-references."""

    def __init__(self, db: PortalDatabase, logger: ServiceLogger, atomic_append: bool = False) -> None:
        self.db = db
        self.logger = logger
        self.atomic_append = atomic_append

    def register(self, name: str, email: str) -> User:
        user = User(id=ObjectId(), secret_code=generate_secret_code(), name=name, email=email, complaints=[])
        self.db.insert_user(user)
        self.logger.info(f"Registered user {user.id}", user_id=str(user.id))
        return user

    def login(self, secret_code: str) -> User:
        # secret codes are not unique; the first match the store returns wins
        try:
            return self.db.find_user_by_secret_code(secret_code)
        except NotFoundError:
            raise NotFoundError("User not found") from None

    def append_complaint(self, user_id: ObjectId, complaint_id: ObjectId) -> bool:
        """Record complaint_id on the user's list. Failures are logged, never raised."""
        try:
            if self.atomic_append:
                if not self.db.push_user_complaint(user_id, complaint_id):
                    raise NotFoundError(f"User {user_id} not found")
                return True
            user = self.db.find_user_by_id(user_id)
            user.complaints.append(complaint_id)
            self.db.set_user_complaints(user.id, user.complaints)
        except (NotFoundError, StorageError) as e:
            self.logger.warning(
                f"Skipped back-reference for complaint {complaint_id}: {e}",
                user_id=str(user_id), complaint_id=str(complaint_id),
            )
            return False
        return True
