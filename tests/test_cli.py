"""CLI tests against a temporary versions file."""

import json

import pytest

from versionresolver.interface.cli import main

UNITS = [
    {
        "slug": "home",
        "versions": [
            {"version": 1, "status": "published", "isDefault": True},
            {"version": 2, "status": "published", "priority": 5, "tags": {"campaign": "summer"}},
            {"version": 3, "status": "draft"},
        ],
    }
]


@pytest.fixture
def versions_file(tmp_path):
    path = tmp_path / "versions.json"
    path.write_text(json.dumps(UNITS), encoding="utf-8")
    return str(path)


def test_resolve_prints_json(versions_file, capsys):
    code = main(["resolve", "home", "--file", versions_file, "--campaign", "summer", "--now", "2026-07-01T00:00:00Z"])
    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["data"]["version"] == 2
    assert out["data"]["matched_by"] == "campaign"


def test_resolve_with_attribute_pairs(versions_file, capsys):
    code = main(["resolve", "home", "--file", versions_file, "--attribute", "region=eu"])
    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["data"]["matched_by"] == "default"


def test_resolve_unknown_unit(versions_file, capsys):
    assert main(["resolve", "missing", "--file", versions_file]) == 1
    assert json.loads(capsys.readouterr().out)["success"] is False


def test_bad_attribute_pair_exits(versions_file):
    with pytest.raises(SystemExit) as exc:
        main(["resolve", "home", "--file", versions_file, "--attribute", "novalue"])
    assert exc.value.code == 2


def test_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["resolve", "home", "--file", str(tmp_path / "nope.json")])
    assert exc.value.code == 1


def test_explain(versions_file, capsys):
    assert main(["explain", "home", "--file", versions_file, "--preview"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [a["version"] for a in out["audits"]] == [3, 2, 1]


def test_list(versions_file, capsys):
    assert main(["list", "home", "--file", versions_file, "--status", "published"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("v2\tpublished\tpriority=5")
    assert lines[1].endswith("default")


@pytest.mark.parametrize("command", ["resolve", "explain"])
def test_unparseable_now_exits(versions_file, capsys, command):
    with pytest.raises(SystemExit) as exc:
        main([command, "home", "--file", versions_file, "--now", "yesterday-ish"])
    assert exc.value.code == 2
    captured = capsys.readouterr()
    assert "invalid request (now)" in captured.err
    assert captured.out == ""


def test_explain_ignore_window_reports_winner_allowed(tmp_path, capsys):
    path = tmp_path / "windowed.json"
    units = [
        {
            "slug": "home",
            "versions": [
                {"version": 1, "status": "published", "isDefault": True},
                {
                    "version": 2,
                    "status": "published",
                    "activeFrom": "2026-07-06T00:00:00Z",
                    "tags": {"campaign": "summer"},
                },
            ],
        }
    ]
    path.write_text(json.dumps(units), encoding="utf-8")
    args = ["explain", "home", "--file", str(path), "--campaign", "summer", "--now", "2026-07-01T00:00:00Z"]
    assert main(args + ["--ignore-window"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["resolved"]["version"] == 2
    assert {a["version"]: a["eligibility"] for a in out["audits"]} == {2: "allowed", 1: "allowed"}
