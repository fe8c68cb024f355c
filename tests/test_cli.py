"""Tests for the budgeting command line."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from budgeting.cli import app
from budgeting.config import get_config_path, get_database_path, load_config, save_config
from budgeting.domain.models import Expense, RecordKind
from budgeting.store.sqlite import SqliteGateway

runner = CliRunner()


@pytest.fixture(autouse=True)
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config and database inside tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def initialized() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output


class TestInitAndHealth:
    """Tests for init and health."""

    def test_init_creates_database_and_config(self, xdg_dirs: Path) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Initialization complete" in result.output
        assert (xdg_dirs / "config" / "budgeting" / "config.toml").exists()
        assert (xdg_dirs / "data" / "budgeting" / "budgeting.db").exists()

    def test_init_refuses_to_overwrite(self, initialized: None) -> None:
        """Should require --force once initialized."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_migrate(self, initialized: None) -> None:
        """Should update the schema of an existing database."""
        result = runner.invoke(app, ["init", "--migrate"])

        assert result.exit_code == 0
        assert "Migrations complete" in result.output

    def test_migrate_without_database(self) -> None:
        """Should fail when there is nothing to migrate."""
        result = runner.invoke(app, ["init", "--migrate"])

        assert result.exit_code == 1

    def test_health_ok(self, initialized: None) -> None:
        """Should report OK on a working database."""
        result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "OK" in result.output

    def test_health_without_database(self) -> None:
        """Should report the database as unhealthy."""
        result = runner.invoke(app, ["health"])

        assert result.exit_code == 1
        assert "unhealthy" in result.output

    def test_commands_need_init(self) -> None:
        """Should point the user at init when no database exists."""
        result = runner.invoke(app, ["recent"])

        assert result.exit_code == 1
        assert "budgeting init" in result.output


class TestTransactions:
    """Tests for expense and income commands."""

    def test_add_expense_with_category(self, initialized: None) -> None:
        """Should store the expense under the named category."""
        runner.invoke(app, ["category", "add", "Food", "--color", "#FF5733"])

        result = runner.invoke(app, ["expense", "add", "Lunch", "$12.50", "-d", "2026-01-10", "-c", "food"])

        assert result.exit_code == 0, result.output
        assert "Expense 1 added" in result.output
        expense = SqliteGateway(get_database_path()).find_by_id(RecordKind.EXPENSE, 1)
        assert isinstance(expense, Expense)
        assert expense.amount == 1250
        assert expense.category_id == 1

    def test_add_expense_invalid_input(self, initialized: None) -> None:
        """Should list every validation error and store nothing."""
        result = runner.invoke(app, ["expense", "add", " ", "abc", "-d", "10/01/2026"])

        assert result.exit_code == 1
        assert "Name is required" in result.output
        assert "Amount must be a positive number" in result.output
        assert "expense_date" in result.output
        assert SqliteGateway(get_database_path()).find_all(RecordKind.EXPENSE) == []

    def test_add_expense_unknown_category(self, initialized: None) -> None:
        """Should refuse categories that do not exist."""
        result = runner.invoke(app, ["expense", "add", "Lunch", "5", "-c", "Nope"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit_and_delete_income(self, initialized: None) -> None:
        """Should replace and then remove an income."""
        runner.invoke(app, ["income", "add", "Salary", "5000", "-d", "2026-01-01"])

        edited = runner.invoke(app, ["income", "edit", "1", "Salary", "5200", "-d", "2026-01-01"])
        deleted = runner.invoke(app, ["income", "delete", "1"])
        missing = runner.invoke(app, ["income", "delete", "1"])

        assert edited.exit_code == 0
        assert "Income 1 updated" in edited.output
        assert deleted.exit_code == 0
        assert missing.exit_code == 1
        assert "income 1 not found" in missing.output


class TestReports:
    """Tests for recent, overview and dashboard."""

    @pytest.fixture
    def seeded(self, initialized: None) -> None:
        runner.invoke(app, ["income", "add", "Salary", "5000", "-d", "2026-01-01"])
        runner.invoke(app, ["expense", "add", "Rent", "1500", "-d", "2026-01-03"])
        runner.invoke(app, ["expense", "add", "Food", "245.67", "-d", "2026-01-20"])

    def test_overview(self, seeded: None) -> None:
        """Should print totals for the requested month."""
        result = runner.invoke(app, ["overview", "-m", "1", "-y", "2026"])

        assert result.exit_code == 0
        assert "January 2026" in result.output
        assert "$5,000.00" in result.output
        assert "$1,745.67" in result.output
        assert "$3,254.33" in result.output

    def test_overview_invalid_month(self, initialized: None) -> None:
        """Should reject months outside 1..12."""
        result = runner.invoke(app, ["overview", "-m", "13", "-y", "2026"])

        assert result.exit_code == 1
        assert "month must be between 1 and 12" in result.output.lower()

    def test_recent_limit(self, seeded: None) -> None:
        """Should show only as many transactions as asked for."""
        result = runner.invoke(app, ["recent", "-n", "2"])

        assert result.exit_code == 0
        assert "showing 2" in result.output
        assert "2026-01-20" in result.output
        assert "2026-01-01" not in result.output

    def test_recent_empty(self, initialized: None) -> None:
        """Should say so when there is nothing to show."""
        result = runner.invoke(app, ["recent"])

        assert result.exit_code == 0
        assert "No transactions found" in result.output

    def test_dashboard(self, seeded: None) -> None:
        """Should print the feed and an overview."""
        runner.invoke(app, ["category", "add", "Bills"])

        result = runner.invoke(app, ["dashboard"])

        assert result.exit_code == 0
        assert "Categories" in result.output
        assert "Recent Transactions" in result.output
        assert "Overview:" in result.output


class TestCategories:
    """Tests for category commands."""

    def test_duplicate_name_rejected(self, initialized: None) -> None:
        """Should refuse names differing only by case."""
        runner.invoke(app, ["category", "add", "Groceries"])

        result = runner.invoke(app, ["category", "add", "GROCERIES"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_invalid_color(self, initialized: None) -> None:
        """Should reject colors that are not #RRGGBB."""
        result = runner.invoke(app, ["category", "add", "Fun", "--color", "red"])

        assert result.exit_code == 1
        assert "color" in result.output

    def test_delete_keeps_expenses(self, initialized: None) -> None:
        """Should leave the category's expenses in place, uncategorized."""
        runner.invoke(app, ["category", "add", "Travel"])
        runner.invoke(app, ["expense", "add", "Train", "45", "-d", "2026-01-03", "-c", "Travel"])

        result = runner.invoke(app, ["category", "delete", "1"])

        assert result.exit_code == 0
        expense = SqliteGateway(get_database_path()).find_by_id(RecordKind.EXPENSE, 1)
        assert isinstance(expense, Expense)
        assert expense.category_id is None

    def test_list_empty(self, initialized: None) -> None:
        """Should say when there are no categories."""
        result = runner.invoke(app, ["category", "list"])

        assert result.exit_code == 0
        assert "No categories yet" in result.output


class TestEditExpense:
    """Tests for expense edit as a full replacement."""

    def test_omitted_options_are_cleared(self, initialized: None) -> None:
        """Should clear the category and notes and reset the date to today."""
        runner.invoke(app, ["category", "add", "Food"])
        runner.invoke(app, ["expense", "add", "Lunch", "12", "-d", "2026-01-10", "-c", "Food", "--notes", "tacos"])

        result = runner.invoke(app, ["expense", "edit", "1", "Dinner", "30"])

        assert result.exit_code == 0, result.output
        expense = SqliteGateway(get_database_path()).find_by_id(RecordKind.EXPENSE, 1)
        assert isinstance(expense, Expense)
        assert expense.name == "Dinner"
        assert expense.amount == 3000
        assert expense.category_id is None
        assert expense.notes == ""
        assert expense.expense_date == date.today()

    def test_edit_missing_expense(self, initialized: None) -> None:
        """Should report unknown ids."""
        result = runner.invoke(app, ["expense", "edit", "9", "Dinner", "30"])

        assert result.exit_code == 1
        assert "expense 9 not found" in result.output


class TestCategoryLookup:
    """Tests for choosing a category by id or name."""

    def test_numeric_name(self, initialized: None) -> None:
        """Should fall back to the name when no category has that id."""
        runner.invoke(app, ["category", "add", "2026"])

        result = runner.invoke(app, ["expense", "add", "Taxes", "100", "-c", "2026"])

        assert result.exit_code == 0, result.output
        expense = SqliteGateway(get_database_path()).find_by_id(RecordKind.EXPENSE, 1)
        assert isinstance(expense, Expense)
        assert expense.category_id == 1

    def test_id_takes_precedence(self, initialized: None) -> None:
        """Should pick the category with that id before one with that name."""
        runner.invoke(app, ["category", "add", "Food"])
        runner.invoke(app, ["category", "add", "1"])

        runner.invoke(app, ["expense", "add", "Lunch", "5", "-c", "1"])

        expense = SqliteGateway(get_database_path()).find_by_id(RecordKind.EXPENSE, 1)
        assert isinstance(expense, Expense)
        assert expense.category_id == 1


class TestBracketedText:
    """Tests for names and notes that look like console markup."""

    def test_bracketed_names_render(self, initialized: None) -> None:
        """Should print names, notes and categories containing brackets as typed."""
        runner.invoke(app, ["category", "add", "[b]Bills"])
        added = runner.invoke(
            app, ["expense", "add", "Lunch [/x]", "5", "-d", "2026-01-10", "-c", "[b]Bills", "--notes", "[red]"]
        )

        recent = runner.invoke(app, ["recent"])
        listed = runner.invoke(app, ["category", "list"])

        assert added.exit_code == 0, added.output
        assert recent.exit_code == 0, recent.output
        assert "Lunch [/x]" in recent.output
        assert "[b]Bills" in recent.output
        assert "[red]" in recent.output
        assert listed.exit_code == 0
        assert "[b]Bills" in listed.output

    def test_bracketed_unknown_category(self, initialized: None) -> None:
        """Should print the missing category name in the error."""
        result = runner.invoke(app, ["expense", "add", "Lunch", "5", "-c", "[/nope]"])

        assert result.exit_code == 1
        assert "category [/nope] not found" in result.output


class TestConfigErrors:
    """Tests for commands run with an invalid config."""

    @pytest.fixture
    def zero_limit(self, initialized: None) -> None:
        config = load_config()
        config["dashboard"]["recent_limit"] = 0
        save_config(config)

    def test_add_refused_before_writing(self, zero_limit: None) -> None:
        """Should report the config error and store nothing."""
        result = runner.invoke(app, ["expense", "add", "Lunch", "5"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert "recent_limit" in result.output
        assert SqliteGateway(get_database_path()).find_all(RecordKind.EXPENSE) == []

    def test_income_delete_refused(self, zero_limit: None) -> None:
        """Should exit cleanly for income commands too."""
        result = runner.invoke(app, ["income", "delete", "1"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_recent_reports_config_error(self, zero_limit: None) -> None:
        """Should print a message instead of a traceback."""
        result = runner.invoke(app, ["recent"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestOverviewYears:
    """Tests for overview year bounds."""

    @pytest.mark.parametrize("args", [["-m", "12", "-y", "9999"], ["-m", "1", "-y", "10000"], ["-y", "1899"]])
    def test_year_out_of_range(self, initialized: None, args: list[str]) -> None:
        """Should reject unsupported years with a message."""
        result = runner.invoke(app, ["overview", *args])

        assert result.exit_code == 1
        assert "Year must be between 1900 and 2100" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_last_supported_december(self, initialized: None) -> None:
        """Should show December of the last supported year."""
        result = runner.invoke(app, ["overview", "-m", "12", "-y", "2100"])

        assert result.exit_code == 0
        assert "December 2100" in result.output


class TestForcedInit:
    """Tests for init --force with a custom database location."""

    def test_keeps_custom_database_path(self, xdg_dirs: Path, initialized: None) -> None:
        """Should rewrite the config without dropping database.path."""
        custom = xdg_dirs / "custom" / "money.db"
        config = load_config()
        config["database"]["path"] = str(custom)
        save_config(config)
        runner.invoke(app, ["init", "--migrate"])

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0, result.output
        assert load_config(get_config_path())["database"]["path"] == str(custom)
        assert custom.exists()
