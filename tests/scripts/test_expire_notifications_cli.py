"""Tests for the expiry sweep command line."""

import pytest

from scripts.expire_notifications import parse_args


def test_defaults_run_a_single_sweep():
    args = parse_args([])

    assert args.interval is None
    assert args.verbose is False


def test_interval_and_verbose_flags():
    args = parse_args(["--interval", "30", "--verbose"])

    assert args.interval == 30.0
    assert args.verbose is True


def test_verbose_help_describes_the_log_level(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--help"])

    help_text = " ".join(capsys.readouterr().out.split())
    assert "Lower the log level to DEBUG." in help_text
