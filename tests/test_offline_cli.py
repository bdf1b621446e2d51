import json
import shutil
import subprocess
import sys
from pathlib import Path

from pacifico_portal import cli, fallback, models


def write_snapshot(name, body):
    with (Path("out/json") / name).open("w", encoding="utf-8") as f:
        json.dump(body, f)


def setup_snapshots():
    base = Path("out")
    if base.exists():
        shutil.rmtree(base)
    (base / "json").mkdir(parents=True)
    write_snapshot(
        "calendar_events_month-12_year-2024.json",
        {"events": models.to_record(fallback.sample_events()[:2])},
    )
    write_snapshot("downloads_files.json", {"files": models.to_record(fallback.sample_files())})
    write_snapshot("downloads_categories.json", {"categories": []})


def test_offline_cli_execution():
    setup_snapshots()
    result = subprocess.run(
        [sys.executable, "-m", "pacifico_portal.cli", "--offline", "calendar", "--month", "2024-12"],
        check=True,
        capture_output=True,
        text=True,
    )
    assert "December 2024" in result.stdout
    assert "20*" in result.stdout
    assert "sample data" not in result.stdout


def test_offline_downloads_filter(capsys):
    setup_snapshots()
    cli.main(["--offline", "downloads", "--search", "newsletter"])
    out = capsys.readouterr().out
    assert "1 Files" in out
    assert "October Newsletter" in out


def test_missing_snapshot_falls_back_to_sample(capsys):
    setup_snapshots()
    cli.main(["--offline", "gallery"])
    out = capsys.readouterr().out
    assert "[sample data] Unable to load photo albums." in out
    assert "3 Albums" in out
