"""Tests for the MongoDB gateway."""
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from complaintportal.services.db import COMPLAINTS, USERS, NotFoundError, PortalDatabase, StorageError
from complaintportal.services.models import Complaint, User


def make_user(code="123456"):
    return User(id=ObjectId(), secret_code=code, name="A", email="a@x.com", complaints=[])


def test_user_documents_use_stored_field_names(db):
    user = make_user()
    db.insert_user(user)
    doc = db.database[USERS].find_one({"_id": user.id})
    assert doc["secretcode"] == "123456"
    assert doc["complaints"] == []


def test_find_user_by_secret_code(db):
    user = make_user("004200")
    db.insert_user(user)
    assert db.find_user_by_secret_code("004200") == user
    with pytest.raises(NotFoundError):
        db.find_user_by_secret_code("4200")


def test_find_complaints_by_user_id_filters(db):
    owner, other = ObjectId(), ObjectId()
    mine = Complaint(id=ObjectId(), title="T", summary="s", rating=3, user_id=owner)
    db.insert_complaint(mine)
    db.insert_complaint(Complaint(id=ObjectId(), title="U", summary="s", rating=1, user_id=other))

    assert list(db.find_complaints_by_user_id(owner)) == [mine]
    assert len(list(db.find_all_complaints())) == 2


def test_find_many_is_restartable_by_calling_again(db):
    db.insert_complaint(Complaint(id=ObjectId(), title="T", summary="s", rating=3, user_id=ObjectId()))
    first = db.find_all_complaints()
    assert len(list(first)) == 1
    assert list(first) == []
    assert len(list(db.find_all_complaints())) == 1


def test_update_without_match_is_silent(db):
    db.set_complaint_resolved(ObjectId())
    assert db.database[COMPLAINTS].count_documents({}) == 0


def test_push_user_complaint(db):
    user = make_user()
    db.insert_user(user)
    cid = ObjectId()
    assert db.push_user_complaint(user.id, cid) is True
    assert db.find_user_by_id(user.id).complaints == [cid]
    assert db.push_user_complaint(ObjectId(), cid) is False


def test_driver_errors_become_storage_errors():
    database = MagicMock()
    collection = database.__getitem__.return_value
    collection.find_one.side_effect = PyMongoError("connection refused")
    collection.insert_one.side_effect = PyMongoError("connection refused")
    collection.find.side_effect = PyMongoError("connection refused")
    db = PortalDatabase(database)

    with pytest.raises(StorageError):
        db.find_user_by_id(ObjectId())
    with pytest.raises(StorageError):
        db.insert_user(make_user())
    with pytest.raises(StorageError):
        list(db.find_all_complaints())


def test_ping_reports_unreachable_server():
    database = MagicMock()
    database.command.side_effect = PyMongoError("timed out")
    with pytest.raises(StorageError):
        PortalDatabase(database).ping()
