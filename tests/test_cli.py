import json

import pytest

from ruler_cli import _config
from ruler_cli.cli import build_parser, main


@pytest.fixture
def ruleset(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        "name: order-checks\n"
        "combinator: AND\n"
        "rules:\n"
        "  - path: order.status\n"
        "    type: EQ\n"
        "    value: paid\n"
        "  - path: order.total\n"
        "    type: GT\n"
        "    value: 100\n",
        encoding="utf-8",
    )
    return path


def _run(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    return info.value.code


def _record(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_check_pass(tmp_path, ruleset, capsys):
    record = _record(tmp_path, "order.json", {"order": {"status": "paid", "total": 150}})

    assert _run(["check", str(ruleset), str(record)]) == 0
    out = capsys.readouterr().out
    assert "PASS" in out
    assert "order.status" in out


def test_check_fail_json_output(tmp_path, ruleset, capsys):
    record = _record(tmp_path, "order.json", {"order": {"status": "paid", "total": "150"}})

    assert _run(["check", str(ruleset), str(record), "--json-output"]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["passed"] is False
    assert payload["combinator"] == "AND"
    assert payload["results"]["order.status"]["matched"] is True
    assert payload["results"]["order.total"]["error"]["kind"] == "E_TYPE_MISMATCH"


def test_check_quiet(tmp_path, ruleset, capsys):
    record = _record(tmp_path, "order.json", {"order": {"status": "new", "total": 150}})

    assert _run(["check", str(ruleset), str(record), "--quiet", "--json-output"]) == 1
    assert json.loads(capsys.readouterr().out) == {"passed": False}


def test_check_record_format_flag(tmp_path, ruleset):
    record = tmp_path / "order.txt"
    record.write_text("<order><status>paid</status><total>150</total></order>", encoding="utf-8")

    # XML leaves are strings, so GT against a number is a type mismatch
    assert _run(["check", str(ruleset), str(record), "--format", "xml", "-q"]) == 1


def test_check_record_format_from_environment(tmp_path, ruleset, monkeypatch):
    record = tmp_path / "order.txt"
    record.write_text("order:\n  status: paid\n  total: 150\n", encoding="utf-8")
    monkeypatch.setenv("RULER_RECORD_FORMAT", "yaml")

    assert _run(["check", str(ruleset), str(record), "-q"]) == 0


def test_check_invalid_ruleset(tmp_path, capsys):
    bad = tmp_path / "rules.json"
    bad.write_text(json.dumps({"combinator": "XOR", "rules": []}), encoding="utf-8")
    record = _record(tmp_path, "order.json", {})

    assert _run(["check", str(bad), str(record)]) == 2
    assert "/combinator" in capsys.readouterr().out


def test_check_missing_or_broken_record(tmp_path, ruleset):
    assert _run(["check", str(ruleset), str(tmp_path / "nope.json")]) == 2

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert _run(["check", str(ruleset), str(broken)]) == 2


def test_types_command(capsys):
    main(["types", "--sort"])
    out = capsys.readouterr().out
    assert "NCONTAINS" in out
    assert "jsonpath_pluck" in out


def test_log_level_option():
    args = build_parser().parse_args(["--log-level", "debug", "types"])
    assert args.log_level == "DEBUG"


def test_log_level_environment(monkeypatch):
    monkeypatch.setenv("RULER_LOG_LEVEL", "info")
    assert _config.log_level() == "INFO"
    monkeypatch.setenv("RULER_LOG_LEVEL", "loud")
    assert _config.log_level() == "WARNING"
