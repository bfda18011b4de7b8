"""Tests for the command-line interface."""

import json

from shopledger.cli.commands import insight as insight_command
from shopledger.cli.main import cli
from shopledger.domain.errors import ServiceUnavailableError


def _invoke(cli_runner, temp_storage, args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_storage.database_path, *args], **kwargs)


def test_help_does_not_touch_storage(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "customer" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_customer_add_and_list(cli_runner, temp_storage):
    result = _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim Uddin", "--phone", "01712345678"])
    assert result.exit_code == 0
    assert "Created customer 'Rahim Uddin'" in result.output

    result = _invoke(cli_runner, temp_storage, ["customer", "list"])
    assert result.exit_code == 0
    assert "Rahim Uddin" in result.output
    assert "৳0.00" in result.output


def test_customer_add_empty_name(cli_runner, temp_storage):
    result = _invoke(cli_runner, temp_storage, ["customer", "add", "   "])
    assert result.exit_code == 1
    assert "cannot be empty" in result.output


def test_customer_list_empty(cli_runner, temp_storage):
    result = _invoke(cli_runner, temp_storage, ["customer", "list"])
    assert result.exit_code == 0
    assert "No customers found" in result.output


def test_sale_payment_and_balance(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim Uddin"])

    result = _invoke(
        cli_runner,
        temp_storage,
        ["transaction", "add", "--customer", "Rahim Uddin", "--amount", "500", "--product", "Gas 12 kg", "--date", "2024-01-15"],
    )
    assert result.exit_code == 0
    assert "Balance due: ৳500.00" in result.output

    result = _invoke(
        cli_runner,
        temp_storage,
        ["transaction", "add", "--customer", "rahim uddin", "--type", "payment", "--amount", "200"],
    )
    assert result.exit_code == 0
    assert "Balance due: ৳300.00" in result.output

    result = _invoke(
        cli_runner,
        temp_storage,
        ["transaction", "add", "--customer", "Rahim Uddin", "--type", "cash", "--amount", "1000"],
    )
    assert result.exit_code == 0
    assert "Balance due: ৳300.00" in result.output

    result = _invoke(cli_runner, temp_storage, ["customer", "show", "Rahim Uddin"])
    assert result.exit_code == 0
    assert "Balance due: ৳300.00" in result.output
    assert "Transactions (3)" in result.output

    result = _invoke(cli_runner, temp_storage, ["transaction", "list"])
    assert result.exit_code == 0
    assert "Sales: ৳1,500.00" in result.output
    assert "Count: 3" in result.output


def test_transaction_add_validation(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])

    result = _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--amount", "0"])
    assert result.exit_code == 1
    assert "Invalid amount" in result.output

    result = _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Nobody", "--amount", "10"])
    assert result.exit_code == 1
    assert "not found" in result.output

    result = _invoke(
        cli_runner,
        temp_storage,
        ["transaction", "add", "--customer", "Rahim", "--type", "payment", "--amount", "10", "--product", "Gas 12 kg"],
    )
    assert result.exit_code == 1
    assert "do not reference a product" in result.output

    assert temp_storage.load_state().transactions == ()


def test_customer_delete_cascades(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])
    _invoke(cli_runner, temp_storage, ["customer", "add", "Karim"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--amount", "500"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--type", "payment", "--amount", "200"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Karim", "--amount", "700"])

    result = _invoke(cli_runner, temp_storage, ["customer", "delete", "Rahim"], input="y\n")
    assert result.exit_code == 0
    assert "Deleted customer 'Rahim' and 2 transaction(s)" in result.output

    state = temp_storage.load_state()
    assert [c.name for c in state.customers] == ["Karim"]
    assert len(state.transactions) == 1


def test_customer_delete_cancelled(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])

    result = _invoke(cli_runner, temp_storage, ["customer", "delete", "Rahim"], input="n\n")
    assert result.exit_code == 0
    assert "Deletion cancelled" in result.output
    assert len(temp_storage.load_state().customers) == 1


def test_customer_update(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim", "--phone", "017"])

    result = _invoke(cli_runner, temp_storage, ["customer", "update", "Rahim", "--address", "Dhaka"])
    assert result.exit_code == 0

    customer = temp_storage.load_state().customers[0]
    assert customer.address == "Dhaka"
    assert customer.phone == "017"


def test_product_delete_shows_unknown(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])
    _invoke(cli_runner, temp_storage, ["product", "add", "Gas 20 kg", "--price", "1850"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--amount", "1850", "--product", "Gas 20 kg"])

    result = _invoke(cli_runner, temp_storage, ["product", "delete", "Gas 20 kg", "--yes"])
    assert result.exit_code == 0

    result = _invoke(cli_runner, temp_storage, ["transaction", "list"])
    assert result.exit_code == 0
    assert "Unknown" in result.output
    assert len(temp_storage.load_state().transactions) == 1


def test_expense_summary(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["expense", "add", "--amount", "150", "--category", "supplies"])
    _invoke(cli_runner, temp_storage, ["expense", "add", "--amount", "1000", "--category", "Rent"])

    result = _invoke(cli_runner, temp_storage, ["expense", "summary"])
    assert result.exit_code == 0
    assert "৳1,150.00" in result.output
    assert "Marketing" in result.output

    categories = [e.category for e in temp_storage.load_state().expenses]
    assert categories == ["Supplies", "Rent"]


def test_shop_name_and_login(cli_runner, temp_storage):
    result = _invoke(cli_runner, temp_storage, ["shop", "name", "Rahman Gas House"])
    assert result.exit_code == 0

    result = _invoke(cli_runner, temp_storage, ["shop", "name"])
    assert "Rahman Gas House" in result.output

    result = _invoke(cli_runner, temp_storage, ["shop", "name", "  "])
    assert result.exit_code == 1

    result = _invoke(cli_runner, temp_storage, ["shop", "login", "--name", "Owner", "--email", "owner@example.com"])
    assert result.exit_code == 0
    assert temp_storage.load_state().user.email == "owner@example.com"

    result = _invoke(cli_runner, temp_storage, ["shop", "logout"])
    assert result.exit_code == 0
    assert temp_storage.load_state().user is None


def test_dashboard(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--amount", "500", "--date", "2024-01-15"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--type", "cash", "--amount", "1000", "--date", "2024-01-15"])

    result = _invoke(cli_runner, temp_storage, ["dashboard", "--date", "2024-01-15"])
    assert result.exit_code == 0
    assert "৳1,500.00" in result.output
    assert "৳500.00" in result.output
    assert "Recent transactions" in result.output
    assert "Rahim" in result.output


def test_backup_round_trip(cli_runner, temp_storage, tmp_path):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--amount", "500"])
    original = temp_storage.load_state()

    result = _invoke(cli_runner, temp_storage, ["backup", "export", str(tmp_path)])
    assert result.exit_code == 0
    files = list(tmp_path.glob("ledger_backup_*.json"))
    assert len(files) == 1

    _invoke(cli_runner, temp_storage, ["customer", "delete", "Rahim", "--yes"])
    assert temp_storage.load_state().customers == ()

    result = _invoke(cli_runner, temp_storage, ["backup", "import", str(files[0]), "--yes"])
    assert result.exit_code == 0
    assert "1 customers" in result.output
    assert temp_storage.load_state() == original


def test_backup_import_rejects_incomplete_file(cli_runner, temp_storage, tmp_path):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])
    before = temp_storage.load_state()
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"shopName": "Other", "customers": []}))

    result = _invoke(cli_runner, temp_storage, ["backup", "import", str(bad), "--yes"])

    assert result.exit_code == 1
    assert "transactions" in result.output
    assert temp_storage.load_state() == before


class _FakeClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error

    def generate(self, prompt, system_instruction):
        if self.error is not None:
            raise self.error
        return self.reply


def test_insight_success(cli_runner, temp_storage, monkeypatch):
    monkeypatch.setattr(
        insight_command,
        "create_gemini_client",
        lambda model_name=None: _FakeClient(reply="- Collect dues weekly"),
    )

    result = _invoke(cli_runner, temp_storage, ["insight"])
    assert result.exit_code == 0
    assert "Collect dues weekly" in result.output


def test_insight_failure_is_not_fatal(cli_runner, temp_storage, monkeypatch):
    monkeypatch.setattr(
        insight_command,
        "create_gemini_client",
        lambda model_name=None: _FakeClient(error=ServiceUnavailableError("down")),
    )

    result = _invoke(cli_runner, temp_storage, ["insight"])
    assert result.exit_code == 0
    assert "Could not get advice" in result.output


def test_report_daily_and_remind(cli_runner, temp_storage):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim", "--phone", "01712345678"])
    _invoke(cli_runner, temp_storage, ["transaction", "add", "--customer", "Rahim", "--amount", "300"])

    result = _invoke(cli_runner, temp_storage, ["report", "daily", "--link"])
    assert result.exit_code == 0
    assert result.output.startswith("mailto:")

    result = _invoke(cli_runner, temp_storage, ["customer", "remind", "Rahim"])
    assert result.exit_code == 0
    assert "https://wa.me/8801712345678?text=" in result.output
    assert "৳300.00" in result.output


def test_insight_without_api_key_falls_back(cli_runner, temp_storage, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)

    result = _invoke(cli_runner, temp_storage, ["insight"])

    assert result.exit_code == 0
    assert "Could not get advice" in result.output


def test_backup_import_rejects_out_of_range_timestamp(cli_runner, temp_storage, tmp_path):
    _invoke(cli_runner, temp_storage, ["customer", "add", "Rahim"])
    before = temp_storage.load_state()
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"customers": [{"id": "c1", "createdAt": 10**20}], "transactions": []}))

    result = _invoke(cli_runner, temp_storage, ["backup", "import", str(bad), "--yes"])

    assert result.exit_code == 1
    assert "createdAt" in result.output
    assert temp_storage.load_state() == before


def test_commands_survive_corrupt_stored_timestamp(cli_runner, temp_storage):
    temp_storage.write_raw(
        json.dumps({"customers": [{"id": "c1", "createdAt": 10**20}], "transactions": []})
    )

    result = _invoke(cli_runner, temp_storage, ["customer", "list"])

    assert result.exit_code == 0
    assert "No customers found" in result.output
