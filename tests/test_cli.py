"""Tests for customer, supplier, vendor and region commands."""

import json

from logibase.cli.main import cli


def invoke(cli_runner, db_path, *args, **kwargs):
    return cli_runner.invoke(
        cli, ["--db-path", db_path, "--user", "tester", *args], **kwargs
    )


def test_customer_create(cli_runner, db_path, write_json, jakarta_address, primary_contact):
    """Test creating a customer from a JSON file."""
    path = write_json({"name": "PT Maju Jaya", "addresses": [jakarta_address], "contacts": [primary_contact]})

    result = invoke(cli_runner, db_path, "customer", "create", path)

    assert result.exit_code == 0
    assert "Created customer CU-00001 (ID: 1)" in result.output


def test_create_from_stdin(cli_runner, db_path):
    """Test reading the payload from stdin."""
    result = invoke(cli_runner, db_path, "supplier", "create", "-", input=json.dumps({"name": "PT Kirim"}))

    assert result.exit_code == 0
    assert "Created supplier SU-00001" in result.output


def test_create_requires_user(cli_runner, db_path, write_json, monkeypatch):
    """Test that creating without a user fails."""
    monkeypatch.delenv("LOGIBASE_USER", raising=False)
    path = write_json({"name": "PT Maju Jaya"})

    result = cli_runner.invoke(cli, ["--db-path", db_path, "customer", "create", path])

    assert result.exit_code == 1
    assert "User not authenticated" in result.output


def test_create_user_from_env(cli_runner, db_path, write_json, partner_service, monkeypatch):
    """Test that LOGIBASE_USER supplies the creator."""
    monkeypatch.setenv("LOGIBASE_USER", "env-user")
    path = write_json({"name": "PT Maju Jaya"})

    result = cli_runner.invoke(cli, ["--db-path", db_path, "customer", "create", path])

    assert result.exit_code == 0
    assert partner_service.get_aggregate("customer", 1).partner.created_by == "env-user"


def test_create_invalid_json(cli_runner, db_path, tmp_path):
    """Test that malformed JSON is reported."""
    path = tmp_path / "bad.json"
    path.write_text("{name: ")

    result = invoke(cli_runner, db_path, "customer", "create", str(path))

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_create_validation_error(cli_runner, db_path, write_json):
    """Test that validation errors are printed."""
    path = write_json({"name": "PT Maju Jaya", "contacts": [{"name": "Budi"}]})

    result = invoke(cli_runner, db_path, "customer", "create", path)

    assert result.exit_code == 1
    assert "Error: Missing required field 'contact_type'" in result.output


def test_update_and_show(cli_runner, db_path, write_json, sample_customer):
    """Test updating an address and showing the result."""
    address_id = sample_customer.addresses[0].id
    path = write_json({"notes": "Pays on time", "addresses": [{"id": address_id, "address_line2": "Lantai 7"}]})

    result = invoke(cli_runner, db_path, "customer", "update", "1", path)
    assert result.exit_code == 0
    assert "Updated customer CU-00001" in result.output

    result = invoke(cli_runner, db_path, "customer", "show", "1")
    assert result.exit_code == 0
    assert "PT Maju Jaya" in result.output
    assert "Pays on time" in result.output
    assert "Tebet, Jakarta Selatan, DKI Jakarta, Indonesia" in result.output


def test_show_json(cli_runner, db_path, sample_customer):
    """Test printing an aggregate as JSON."""
    result = invoke(cli_runner, db_path, "customer", "show", "1", "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["partner"]["code"] == "CU-00001"
    assert data["addresses"][0]["province_code"] == "31"
    assert data["contacts"][0]["is_primary_contact"] is True


def test_show_missing(cli_runner, db_path):
    """Test showing a record that does not exist."""
    result = invoke(cli_runner, db_path, "vendor", "show", "5")

    assert result.exit_code == 1
    assert "Vendor 5 not found" in result.output


def test_internal_error_is_generic(cli_runner, db_path, write_json, monkeypatch):
    """Test that unexpected failures print only the generic message."""

    def broken(self, *args, **kwargs):
        raise RuntimeError("database is locked")

    monkeypatch.setattr("logibase.database.sqlalchemy_db.SQLAlchemyDatabase.create_partner", broken)
    path = write_json({"name": "PT Maju Jaya"})

    result = invoke(cli_runner, db_path, "customer", "create", path)

    assert result.exit_code == 1
    assert "Something went wrong, please try again" in result.output
    assert "locked" not in result.output


def test_list(cli_runner, db_path, partner_service):
    """Test listing with paging and search."""
    for name in ["Alpha", "Beta", "Gamma"]:
        partner_service.create_aggregate("customer", {"name": name}, created_by="u")

    result = invoke(cli_runner, db_path, "customer", "list", "--limit", "2")
    assert result.exit_code == 0
    assert "Gamma" in result.output
    assert "Alpha" not in result.output
    assert "Page 1 of 2 (3 total)" in result.output

    result = invoke(cli_runner, db_path, "customer", "list", "--search", "alp")
    assert "Alpha" in result.output
    assert "Beta" not in result.output


def test_list_empty(cli_runner, db_path):
    """Test listing when nothing exists."""
    result = invoke(cli_runner, db_path, "vendor", "list")

    assert result.exit_code == 0
    assert "No vendors found" in result.output


def test_delete_with_confirmation(cli_runner, db_path, sample_customer):
    """Test that deletion asks first and can be cancelled."""
    result = invoke(cli_runner, db_path, "customer", "delete", "1", input="n\n")
    assert "Deletion cancelled" in result.output

    result = invoke(cli_runner, db_path, "customer", "delete", "1", input="y\n")
    assert result.exit_code == 0
    assert "Deleted customer 'PT Maju Jaya'" in result.output

    result = invoke(cli_runner, db_path, "customer", "show", "1")
    assert result.exit_code == 1


def test_set_primary(cli_runner, db_path, partner_service, sample_vendor, primary_contact):
    """Test moving the primary flag to another contact."""
    vendor = partner_service.update_aggregate(
        "vendor", 1, {"contacts": [{**primary_contact, "name": "Sari", "is_primary_contact": False}]}
    )
    second = vendor.contacts[1].id

    result = invoke(cli_runner, db_path, "vendor", "set-primary", "1", "contacts", str(second))

    assert result.exit_code == 0
    contacts = partner_service.get_aggregate("vendor", 1).contacts
    assert [c.is_primary_contact for c in contacts] == [False, True]


def test_set_primary_rejects_unknown_collection(cli_runner, db_path, sample_customer):
    """Test that customers have no bankings collection."""
    result = invoke(cli_runner, db_path, "customer", "set-primary", "1", "bankings", "1")

    assert result.exit_code == 2


def test_remove_child_refuses_last_member(cli_runner, db_path, sample_customer):
    """Test that the only address cannot be removed."""
    address_id = sample_customer.addresses[0].id

    result = invoke(cli_runner, db_path, "customer", "remove-child", "1", "addresses", str(address_id), "--yes")

    assert result.exit_code == 1
    assert "Cannot remove the only address" in result.output


def test_remove_child_promotes_survivor(cli_runner, db_path, partner_service, sample_customer, primary_contact):
    """Test removing the primary contact."""
    partner_service.update_aggregate(
        "customer", 1, {"contacts": [{**primary_contact, "name": "Sari", "is_primary_contact": False}]}
    )
    first = sample_customer.contacts[0].id

    result = invoke(cli_runner, db_path, "customer", "remove-child", "1", "contacts", str(first), "--yes")

    assert result.exit_code == 0
    contacts = partner_service.get_aggregate("customer", 1).contacts
    assert [(c.name, c.is_primary_contact) for c in contacts] == [("Sari", True)]


def test_region_import_and_list(cli_runner, db_path, tmp_path):
    """Test importing and listing regions."""
    provinces = tmp_path / "provinces.csv"
    provinces.write_text("code,name\n31,DKI Jakarta\n32,Jawa Barat\n")
    regencies = tmp_path / "regencies.csv"
    regencies.write_text("code,name,province_code\n3171,Jakarta Selatan,31\n")

    result = invoke(cli_runner, db_path, "region", "import", "provinces", str(provinces))
    assert result.exit_code == 0
    assert "Imported 2 provinces" in result.output

    result = invoke(cli_runner, db_path, "region", "import", "regencies", str(regencies))
    assert result.exit_code == 0

    result = invoke(cli_runner, db_path, "region", "list")
    assert "Jawa Barat" in result.output

    result = invoke(cli_runner, db_path, "region", "list", "--province", "31")
    assert "Regencies of 31" in result.output
    assert "Jakarta Selatan" in result.output


def test_region_import_missing_column(cli_runner, db_path, tmp_path):
    """Test that a CSV without the parent code column fails."""
    regencies = tmp_path / "regencies.csv"
    regencies.write_text("code,name\n3171,Jakarta Selatan\n")

    result = invoke(cli_runner, db_path, "region", "import", "regencies", str(regencies))

    assert result.exit_code == 1
    assert "missing 'province_code'" in result.output


def test_region_list_empty(cli_runner, db_path):
    """Test listing districts of an unknown regency."""
    result = invoke(cli_runner, db_path, "region", "list", "--regency", "9999")

    assert result.exit_code == 0
    assert "No districts found" in result.output
