import logging

import pytest

from calc import config
from calc.cli import MAP_USAGE, _log_level, main


def test_evaluate_with_mapping(capsys):
    assert main(["-m", '{"a": 1}', "sum($a,2,3)+2*3"]) == 0
    out, err = capsys.readouterr()
    assert out == "12.0\n"
    assert err == ""


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["1", "+", "2"], "3.0"),
        (["1,2"], "[1.0, 2.0]"),
        (["'ab'*2"], "abab"),
        (["-m", '{"s": "x"}', "$s+'y'"], "xy"),
    ]
)
def test_output_format(capsys, argv, expected):
    assert main(argv) == 0
    assert capsys.readouterr().out == expected + "\n"


def test_error_exit_code(capsys):
    assert main(["1/0"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "division by zero" in err


def test_unknown_variable(capsys):
    assert main(["$a+1"]) == 1
    assert "unknown variable: a" in capsys.readouterr().err


@pytest.mark.parametrize("mapping", ["{bad", "[1, 2]", '"a"'])
def test_bad_mapping(capsys, mapping):
    assert main(["-m", mapping, "1+1"]) == 1
    assert MAP_USAGE in capsys.readouterr().err


def test_compile_listing(capsys):
    assert main(["--compile", "$x*2"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "0000: VAR   $x",
        "0001: OP    *",
        "0002: CONST 2.0",
        "-- variables --",
        "[0] x",
    ]


def test_verbosity_levels(monkeypatch):
    monkeypatch.delenv("CALC_LOG_LEVEL", raising=False)
    assert _log_level(0) == logging.WARNING
    assert _log_level(1) == logging.INFO
    assert _log_level(2) == logging.DEBUG


@pytest.mark.parametrize(
    "raw,level",
    [
        ("debug", logging.DEBUG),
        ("ERROR", logging.ERROR),
        ("15", 15),
        ("nonsense", logging.WARNING),
    ]
)
def test_log_level_from_env(monkeypatch, raw, level):
    monkeypatch.setenv("CALC_LOG_LEVEL", raw)
    assert config.get_log_level() == level


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1", True),
        ("yes", True),
        ("TRUE", True),
        ("0", False),
        ("", False),
    ]
)
def test_flag_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("CALC_DISASM", raw)
    assert config.disasm_enabled() is expected
