"""Integration tests for CLI commands."""

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tests.conftest import OEM_TIRES, R_COMPOUND, TURBO
from tt_class import __version__
from tt_class.cli import app
from tt_class.config import CATALOG_PATH_ENV, get_catalog
from tt_class.database.engine import DB_PATH_ENV, reset_engine


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def cli_env(
    tmp_path: Path, catalog_file: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point the CLI at the test catalog and a fresh database."""
    db_path = tmp_path / "test.db"
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv(DB_PATH_ENV, str(db_path))
    monkeypatch.setenv(CATALOG_PATH_ENV, str(catalog_file))
    reset_engine()
    get_catalog.cache_clear()

    yield db_path

    reset_engine()
    get_catalog.cache_clear()


def classify_and_save(runner: CliRunner, *args: str) -> int:
    result = runner.invoke(app, ["classify", *args, "--save", "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["saved_id"]


class TestCatalogCommands:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_makes_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["makes", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"makes": ["Honda", "Mazda"]}

    def test_makes_plain(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["makes"])

        assert result.exit_code == 0
        assert "Honda" in result.output
        assert "Mazda" in result.output

    def test_models_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["models", "Honda", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["models"] == [
            {"model": "Civic Type R", "base_class": "TTC*"},
            {"model": "Fit", "base_class": "TTS"},
        ]

    def test_models_unknown_make(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["models", "Lada"])

        assert result.exit_code == 1
        assert "No models found" in result.output

    def test_mods_single_category(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["mods", "--category", "tires", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "categories": {"tires": {OEM_TIRES: 0, R_COMPOUND: 10}}
        }

    def test_mods_unknown_category(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["mods", "-c", "paint"])

        assert result.exit_code == 1
        assert "Unknown category" in result.output


class TestClassifyCommand:
    def test_classify_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["classify", "Honda", "Civic Type R", "--tires", "OEM", "--mod", "engine=Turbo upgrade", "--json"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "success"
        assert data["result"]["total_points"] == 27
        assert data["result"]["final_class"] == "TTB"
        assert "warnings" not in data
        assert "saved_id" not in data

    def test_classify_plain(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["classify", "Mazda", "Miata NA", "-t", OEM_TIRES])

        assert result.exit_code == 0, result.output
        assert "Final Class" in result.output
        assert "TTS" in result.output

    def test_missing_tires(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["classify", "Honda", "Fit", "--json"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["status"] == "error"
        assert data["error_type"] == "MissingRequiredCategory"
        assert "tire" in data["error"]

    def test_unknown_vehicle(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["classify", "Honda", "Accord", "-t", OEM_TIRES, "--json"])

        assert result.exit_code == 1
        assert json.loads(result.output)["error_type"] == "UnknownMakeModel"

    def test_unknown_item_warns(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["classify", "Honda", "Fit", "-t", OEM_TIRES, "-m", "engine=Nitrous", "--json"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["result"]["modification_points"] == 0
        assert len(data["warnings"]) == 1
        assert "Nitrous" in data["warnings"][0]

    def test_bad_mod_format(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["classify", "Honda", "Fit", "-t", OEM_TIRES, "-m", "turbo"])

        assert result.exit_code != 0

    def test_tires_via_mod_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["classify", "Honda", "Fit", "-m", f"tires={OEM_TIRES}"])

        assert result.exit_code != 0

    def test_save(self, runner: CliRunner) -> None:
        saved_id = classify_and_save(runner, "Honda", "Fit", "-t", OEM_TIRES)
        assert saved_id == 1


class TestSavedCommands:
    @pytest.fixture
    def saved_ids(self, runner: CliRunner) -> list[int]:
        return [
            classify_and_save(runner, "Honda", "Fit", "-t", OEM_TIRES),
            classify_and_save(runner, "Honda", "Civic Type R", "-t", OEM_TIRES, "-m", f"engine={TURBO}"),
        ]

    def test_saved_empty(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["saved"])

        assert result.exit_code == 0
        assert "No saved configurations" in result.output

    def test_saved_json(self, runner: CliRunner, saved_ids: list[int]) -> None:
        result = runner.invoke(app, ["saved", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total"] == 2
        assert [c["id"] for c in data["configurations"]] == list(reversed(saved_ids))

    def test_saved_by_class(self, runner: CliRunner, saved_ids: list[int]) -> None:
        result = runner.invoke(app, ["saved", "--class", "TTB", "--json"])

        data = json.loads(result.output)
        assert data["count"] == 1
        assert data["configurations"][0]["model"] == "Civic Type R"

    def test_show(self, runner: CliRunner, saved_ids: list[int]) -> None:
        result = runner.invoke(app, ["show", str(saved_ids[1]), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["final_class"] == "TTB"
        assert data["mods"] == {"engine": [TURBO], "tires": [OEM_TIRES]}

    def test_show_missing(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["show", "99"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete(self, runner: CliRunner, saved_ids: list[int]) -> None:
        result = runner.invoke(app, ["delete", str(saved_ids[0])])

        assert result.exit_code == 0
        assert runner.invoke(app, ["show", str(saved_ids[0])]).exit_code == 1

    def test_delete_missing(self, runner: CliRunner) -> None:
        assert runner.invoke(app, ["delete", "99"]).exit_code == 1

    def test_export_json(self, runner: CliRunner, saved_ids: list[int], tmp_path: Path) -> None:
        output = tmp_path / "export.json"

        result = runner.invoke(app, ["export", "--format", "json", "--output", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["count"] == 2

    def test_export_csv(self, runner: CliRunner, saved_ids: list[int], tmp_path: Path) -> None:
        output = tmp_path / "export.csv"

        result = runner.invoke(app, ["export", "-f", "csv", "-o", str(output)])

        assert result.exit_code == 0
        assert "Civic Type R" in output.read_text(encoding="utf-8")

    def test_export_unknown_format(self, runner: CliRunner) -> None:
        assert runner.invoke(app, ["export", "-f", "xml"]).exit_code == 1

    def test_submit(self, runner: CliRunner, saved_ids: list[int]) -> None:
        result = runner.invoke(
            app,
            [
                "submit", str(saved_ids[1]),
                "--name", "Sam Driver",
                "--email", "sam@example.com",
                "--car-number", "42",
                "--date", "2024-06-01",
                "--json",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["vehicle"] == "Honda Civic Type R"
        assert data["final_class"] == "TTB"
        assert data["effective_date"] == "2024-06-01"
        assert "team" not in data

    def test_submit_bad_date(self, runner: CliRunner, saved_ids: list[int]) -> None:
        result = runner.invoke(
            app,
            ["submit", "1", "-n", "Sam", "-e", "sam@example.com", "--car-number", "42", "-d", "June"],
        )

        assert result.exit_code == 1

    def test_submit_missing_configuration(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["submit", "99", "-n", "Sam", "-e", "sam@example.com", "--car-number", "42", "-d", "2024-06-01"],
        )

        assert result.exit_code == 1
        assert "not found" in result.output
