from __future__ import annotations
from typing import Iterator, List, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .models import Complaint, User

USERS = "users"
COMPLAINTS = "complaints"


class NotFoundError(Exception):
    pass


class StorageError(Exception):
    pass


class PortalDatabase:
    """Gateway over the `users` and `complaints` collections.

    Generic primitives take a collection name and a raw filter; the typed
    helpers below them build the filters so services never hand-write one.
    Any driver failure surfaces as StorageError, a lookup miss as NotFoundError.
    """

    def __init__(self, database: Database, client: Optional[MongoClient] = None) -> None:
        self.database = database
        self.client = client

    @classmethod
    def from_uri(cls, uri: str, db_name: str, timeout_ms: int = 10000) -> "PortalDatabase":
        client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        return cls(client[db_name], client=client)

    def ping(self) -> None:
        try:
            self.database.command("ping")
        except PyMongoError as e:
            raise StorageError(f"Database unreachable: {e}") from e

    def close(self) -> None:
        if self.client is not None:
            self.client.close()

    # generic primitives

    def find_one(self, collection: str, filter: dict) -> dict:
        try:
            doc = self.database[collection].find_one(filter)
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        if doc is None:
            raise NotFoundError(f"No document in '{collection}' matching {filter}")
        return doc

    def find_many(self, collection: str, filter: dict) -> Iterator[dict]:
        try:
            for doc in self.database[collection].find(filter):
                yield doc
        except PyMongoError as e:
            raise StorageError(str(e)) from e

    def insert_one(self, collection: str, document: dict) -> ObjectId:
        try:
            result = self.database[collection].insert_one(document)
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        return result.inserted_id

    def update_one(self, collection: str, filter: dict, fields: dict) -> None:
        try:
            self.database[collection].update_one(filter, {"$set": fields})
        except PyMongoError as e:
            raise StorageError(str(e)) from e

    # users

    def find_user_by_id(self, user_id: ObjectId) -> User:
        return User.from_document(self.find_one(USERS, {"_id": user_id}))

    def find_user_by_secret_code(self, secret_code: str) -> User:
        return User.from_document(self.find_one(USERS, {"secretcode": secret_code}))

    def insert_user(self, user: User) -> ObjectId:
        return self.insert_one(USERS, user.to_document())

    def set_user_complaints(self, user_id: ObjectId, complaints: List[ObjectId]) -> None:
        self.update_one(USERS, {"_id": user_id}, {"complaints": list(complaints)})

    def push_user_complaint(self, user_id: ObjectId, complaint_id: ObjectId) -> bool:
        """Atomically append to the user's list. Returns False if no user matched."""
        try:
            result = self.database[USERS].update_one({"_id": user_id}, {"$push": {"complaints": complaint_id}})
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        return result.matched_count > 0

    # complaints

    def find_complaint_by_id(self, complaint_id: ObjectId) -> Complaint:
        return Complaint.from_document(self.find_one(COMPLAINTS, {"_id": complaint_id}))

    def find_complaints_by_user_id(self, user_id: ObjectId) -> Iterator[Complaint]:
        return (Complaint.from_document(d) for d in self.find_many(COMPLAINTS, {"userid": user_id}))

    def find_all_complaints(self) -> Iterator[Complaint]:
        return (Complaint.from_document(d) for d in self.find_many(COMPLAINTS, {}))

    def insert_complaint(self, complaint: Complaint) -> ObjectId:
        return self.insert_one(COMPLAINTS, complaint.to_document())

    def set_complaint_resolved(self, complaint_id: ObjectId, resolved: bool = True) -> None:
        self.update_one(COMPLAINTS, {"_id": complaint_id}, {"resolved": resolved})
