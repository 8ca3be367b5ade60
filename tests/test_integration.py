"""Integration tests for end-to-end workflows."""

import json

from logibase.cli.main import cli


def test_full_vendor_workflow(cli_runner, db_path, tmp_path, write_json):
    """Test complete workflow: regions → create → update → primary → remove → delete."""
    base = ["--db-path", db_path, "--user", "admin"]

    # Step 1: Load lookup tables
    files = {
        "countries": "code,name\nID,Indonesia\nSG,Singapore\n",
        "provinces": "code,name\n31,DKI Jakarta\n",
        "regencies": "code,name,province_code\n3171,Jakarta Selatan,31\n",
        "districts": "code,name,regency_code\n317101,Tebet,3171\n",
    }
    for level, content in files.items():
        path = tmp_path / f"{level}.csv"
        path.write_text(content)
        result = cli_runner.invoke(cli, [*base, "region", "import", level, str(path)])
        assert result.exit_code == 0, result.output

    # Step 2: Create vendor with one of each child
    payload = {
        "name": "PT Logistik Nusantara",
        "partner_type": "LOGISTIC",
        "payment_terms": 45,
        "tax_date": "01/02/2024",
        "addresses": [
            {
                "address_type": "HEAD_OFFICE",
                "address_line1": "Jl. Tebet Raya 1",
                "country_code": "ID",
                "province_code": "31",
                "regency_code": "3171",
                "district_code": "317101",
                "is_primary_address": True,
            }
        ],
        "contacts": [
            {
                "contact_type": "PRIMARY",
                "name": "Andi",
                "phone_number": "0811111",
                "fax_number": "0215551",
                "is_primary_contact": True,
            }
        ],
        "bankings": [
            {
                "banking_number": "111222333",
                "banking_name": "PT Logistik Nusantara",
                "banking_bank": "MANDIRI",
                "is_primary_banking_number": True,
            }
        ],
    }
    result = cli_runner.invoke(cli, [*base, "vendor", "create", write_json(payload, "create.json")])
    assert result.exit_code == 0, result.output
    assert "Created vendor VN-00001 (ID: 1)" in result.output

    # Step 3: Patch the address, add a Singapore branch and a second bank account
    update = {
        "code": "VN-12345",
        "pic_name": "Rina",
        "addresses": [
            {"id": 1, "zipcode": "12810"},
            {
                "address_type": "BRANCH",
                "address_line1": "1 Harbourfront Ave",
                "country_code": "SG",
                "province_code": "31",
                "is_primary_address": False,
            },
        ],
        "bankings": [
            {
                "banking_number": "444555666",
                "banking_name": "PT Logistik Nusantara",
                "banking_bank": "BCA",
                "is_primary_banking_number": False,
            }
        ],
    }
    result = cli_runner.invoke(cli, [*base, "vendor", "update", "1", write_json(update, "update.json")])
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, [*base, "vendor", "show", "1", "--json"])
    data = json.loads(result.output)
    assert data["partner"]["code"] == "VN-00001"
    assert data["partner"]["pic_name"] == "Rina"
    assert data["partner"]["tax_date"] == "2024-02-01"
    head_office, branch = data["addresses"]
    assert head_office["zipcode"] == "12810"
    assert head_office["district_name"] == "Tebet"
    assert branch["country_name"] == "Singapore"
    assert branch["province_code"] is None
    assert [b["banking_bank"] for b in data["bankings"]] == ["MANDIRI", "BCA"]

    # Step 4: Make the BCA account primary
    bca_id = data["bankings"][1]["id"]
    result = cli_runner.invoke(cli, [*base, "vendor", "set-primary", "1", "bankings", str(bca_id)])
    assert result.exit_code == 0, result.output

    # Step 5: Remove the BCA account again; MANDIRI takes over
    result = cli_runner.invoke(
        cli, [*base, "vendor", "remove-child", "1", "bankings", str(bca_id), "--yes"]
    )
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, [*base, "vendor", "show", "1", "--json"])
    bankings = json.loads(result.output)["bankings"]
    assert [(b["banking_bank"], b["is_primary_banking_number"]) for b in bankings] == [("MANDIRI", True)]

    # Step 6: Listing and deletion
    result = cli_runner.invoke(cli, [*base, "vendor", "list", "--status", "ACTIVE"])
    assert "PT Logistik Nusantara" in result.output

    result = cli_runner.invoke(cli, [*base, "vendor", "delete", "1", "--yes"])
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, [*base, "vendor", "list"])
    assert "No vendors found" in result.output


def test_failed_update_changes_nothing(cli_runner, db_path, write_json, sample_customer):
    """Test that a rejected update leaves the stored customer as it was."""
    base = ["--db-path", db_path, "--user", "admin"]
    before = cli_runner.invoke(cli, [*base, "customer", "show", "1", "--json"]).output

    update = {
        "name": "Should Not Stick",
        "contacts": [{"contact_type": "BILLING", "name": "No Phone", "is_primary_contact": False}],
    }
    result = cli_runner.invoke(cli, [*base, "customer", "update", "1", write_json(update)])
    assert result.exit_code == 1
    assert "phone_number" in result.output

    after = cli_runner.invoke(cli, [*base, "customer", "show", "1", "--json"]).output
    assert after == before
