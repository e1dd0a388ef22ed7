import mongomock
import pytest

from complaintportal.services.db import PortalDatabase
from complaintportal.utils.logger import ServiceLogger


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    yield PortalDatabase(client["complaintsPortal"], client=client)
    client.drop_database("complaintsPortal")


@pytest.fixture
def logger(tmp_path):
    return ServiceLogger("portal-tests", log_dir=tmp_path)
