"""Shared pytest fixtures for logibase tests."""

import itertools
import tempfile
import os
from types import SimpleNamespace
import pytest

from logibase.database.factories import create_sqlite_database
from logibase.domain.partner import PartnerService
from logibase.domain.regions import RegionService


@pytest.fixture
def db_path():
    """Path of a temporary SQLite file, removed after the test."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    yield path

    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def temp_db(db_path):
    """Create a temporary database for testing."""
    # Create database
    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()


@pytest.fixture
def partner_service(temp_db):
    """Create a PartnerService with a temporary database."""
    return PartnerService(temp_db)


@pytest.fixture
def region_service(temp_db):
    """Create a RegionService with a temporary database."""
    return RegionService(temp_db)


@pytest.fixture
def sample_regions(region_service):
    """Seed countries and one Jakarta province/regency/district chain."""
    region_service.import_rows(
        "countries",
        [{"code": "ID", "name": "Indonesia"}, {"code": "US", "name": "United States"}],
    )
    region_service.import_rows("provinces", [{"code": "31", "name": "DKI Jakarta"}])
    region_service.import_rows(
        "regencies", [{"code": "3171", "name": "Jakarta Selatan", "province_code": "31"}]
    )
    region_service.import_rows(
        "districts", [{"code": "317101", "name": "Tebet", "regency_code": "3171"}]
    )


@pytest.fixture
def jakarta_address():
    """Complete Indonesian head office address payload."""
    return {
        "address_type": "HEAD_OFFICE",
        "address_line1": "Jl. Tebet Raya 12",
        "address_line2": "Lantai 3",
        "zipcode": "12810",
        "is_primary_address": True,
        "country_code": "ID",
        "province_code": "31",
        "regency_code": "3171",
        "district_code": "317101",
    }


@pytest.fixture
def primary_contact():
    """Complete primary contact payload."""
    return {
        "contact_type": "PRIMARY",
        "name": "Budi Santoso",
        "phone_number": "0812345678",
        "email": "budi@example.co.id",
        "is_primary_contact": True,
    }


@pytest.fixture
def sample_customer(partner_service, sample_regions, jakarta_address, primary_contact):
    """Create a customer with one address and one contact."""
    return partner_service.create_aggregate(
        "customer",
        {
            "name": "PT Maju Jaya",
            "notes": "Key account",
            "addresses": [jakarta_address],
            "contacts": [primary_contact],
        },
        created_by="tester",
    )


@pytest.fixture
def sample_vendor(partner_service, jakarta_address, primary_contact):
    """Create a vendor with one address, contact and bank account."""
    return partner_service.create_aggregate(
        "vendor",
        {
            "name": "CV Angkut Cepat",
            "partner_type": "LOGISTIC",
            "payment_terms": 30,
            "addresses": [jakarta_address],
            "contacts": [{**primary_contact, "fax_number": "021555"}],
            "bankings": [
                {
                    "banking_number": "1234567890",
                    "banking_name": "CV Angkut Cepat",
                    "banking_bank": "BCA",
                    "is_primary_banking_number": True,
                }
            ],
        },
        created_by="tester",
    )


@pytest.fixture
def slow_clock(monkeypatch):
    """Make every transaction appear to take 100 seconds."""
    ticks = itertools.count(step=100.0)
    monkeypatch.setattr(
        "logibase.database.sqlalchemy_db.time",
        SimpleNamespace(monotonic=lambda: next(ticks)),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def write_json(tmp_path):
    """Write a payload to a JSON file and return its path."""
    import json

    def write(payload, name="payload.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload))
        return str(path)

    return write
