"""Tests for the complaint service."""
from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from complaintportal.services.complaint import ComplaintService, InvalidIdError, parse_object_id
from complaintportal.services.db import NotFoundError, PortalDatabase
from complaintportal.services.users import UserService


@pytest.fixture
def users(db, logger):
    return UserService(db, logger)


@pytest.fixture
def complaints(db, users, logger):
    return ComplaintService(db, users, logger)


def test_submit_records_back_reference(db, users, complaints):
    user = users.register("A", "a@x.com")
    c = complaints.submit("T", "s", 3, user.id)
    assert c.resolved is False
    assert db.find_user_by_id(user.id).complaints == [c.id]


def test_submit_for_unknown_user_still_succeeds(db, complaints):
    c = complaints.submit("T", "s", 3, ObjectId())
    assert db.find_complaint_by_id(c.id) == c


def test_list_for_user(users, complaints):
    a = users.register("A", "a@x.com")
    b = users.register("B", "b@x.com")
    mine = complaints.submit("T", "s", 3, a.id)
    complaints.submit("U", "s", 5, b.id)
    assert complaints.list_for_user(a.secret_code) == [mine]


def test_list_for_unknown_user(complaints):
    with pytest.raises(NotFoundError):
        complaints.list_for_user("000000")


def test_list_all(users, complaints):
    assert complaints.list_all() == []
    user = users.register("A", "a@x.com")
    complaints.submit("T", "s", 3, user.id)
    complaints.submit("U", "s", -2, ObjectId())
    assert len(complaints.list_all()) == 2


@pytest.mark.parametrize("bad", ["", "xyz", "123", "g" * 24, None])
def test_parse_object_id_rejects(bad):
    with pytest.raises(InvalidIdError):
        parse_object_id(bad)


def test_view_invalid_id_does_not_reach_storage(logger):
    db = MagicMock(spec=PortalDatabase)
    svc = ComplaintService(db, MagicMock(), logger)
    with pytest.raises(InvalidIdError):
        svc.view("not-an-id")
    assert db.method_calls == []


def test_view_unassigned_id(complaints):
    with pytest.raises(NotFoundError):
        complaints.view(str(ObjectId()))


def test_resolve_is_idempotent(db, complaints):
    c = complaints.submit("T", "s", 3, ObjectId())
    assert complaints.resolve(str(c.id)).resolved is True
    assert complaints.resolve(str(c.id)).resolved is True
    assert db.find_complaint_by_id(c.id).resolved is True


def test_resolve_returns_in_memory_object(complaints, logger):
    db = MagicMock(spec=PortalDatabase)
    stored = complaints.submit("T", "s", 3, ObjectId())
    stored.resolved = False
    db.find_complaint_by_id.return_value = stored
    svc = ComplaintService(db, MagicMock(), logger)

    result = svc.resolve(str(stored.id))

    assert result.resolved is True
    db.set_complaint_resolved.assert_called_once_with(stored.id)


def test_view_miss_hides_lookup_error(complaints):
    with pytest.raises(NotFoundError) as excinfo:
        complaints.view(str(ObjectId()))
    assert str(excinfo.value) == "Complaint not found"
    assert excinfo.value.__suppress_context__
