import json
from pathlib import Path

from typer.testing import CliRunner

from treasury_core.cli import app

DATA = Path(__file__).parent / "data"

runner = CliRunner()


def test_cli_simulate_writes_json_and_csv(tmp_path: Path):
    out = tmp_path / "sim.json"
    csv = tmp_path / "sim.csv"
    result = runner.invoke(
        app,
        [
            "simulate",
            "--capital",
            "10000",
            "--contribution",
            "500",
            "--months",
            "12",
            "--rate",
            "0.08",
            "--out",
            str(out),
            "--csv",
            str(csv),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(out.read_text())
    assert payload["total_contributed"] == 16000
    assert len(payload["snapshots"]) == 13
    assert csv.exists()


def test_cli_project_mix(tmp_path: Path):
    out = tmp_path / "projection.json"
    result = runner.invoke(
        app,
        [
            "project",
            "--capital",
            "10000",
            "--mix",
            "fintual=100",
            "--milestone",
            "3",
            "--milestone",
            "6",
            "--milestone",
            "12",
            "--out",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(out.read_text())
    assert payload["milestones"] == [3, 6, 12]
    values = payload["series"][0]["values"]
    assert values[0] is None
    assert values[1] is not None and values[2] is not None


def test_cli_project_unknown_instrument_fails():
    result = runner.invoke(app, ["project", "--capital", "1000", "--mix", "bitcoin=100"])
    assert result.exit_code != 0


def test_cli_portfolio_suggest_and_compare():
    result = runner.invoke(app, ["portfolio", "--profile", str(DATA / "profile.json")])
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["total_contributed"] == 10000 + 500 * 24

    result = runner.invoke(app, ["suggest", "--months", "24"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"bonds": 0.6, "dividends": 0.25, "stocks": 0.15}

    result = runner.invoke(
        app,
        ["compare", "--profile", str(DATA / "profile.json"), "--allocation", str(DATA / "allocation.json")],
    )
    assert result.exit_code == 0, result.stdout
    assert len(json.loads(result.stdout)["delta"]) == 25


def test_cli_profile_store_flow(tmp_path: Path):
    store = tmp_path / "store"
    result = runner.invoke(app, ["profile-show", "--user", "ana", "--store", str(store)])
    assert result.exit_code == 1

    result = runner.invoke(
        app,
        [
            "profile-save",
            "--user",
            "ana",
            "--profile",
            str(DATA / "profile.json"),
            "--allocation",
            str(DATA / "allocation.json"),
            "--record",
            "--store",
            str(store),
        ],
    )
    assert result.exit_code == 0, result.stdout

    result = runner.invoke(app, ["profile-show", "--user", "ana", "--store", str(store)])
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["profile"]["horizon_months"] == 24
    assert payload["allocation"]["stocks"] == 0.5

    result = runner.invoke(app, ["history", "--user", "ana", "--store", str(store)])
    assert result.exit_code == 0


def test_cli_project_unsupported_step_is_usage_error():
    result = runner.invoke(app, ["project", "--capital", "1000", "--mix", "vti=100", "--step", "4"])
    assert result.exit_code == 2
