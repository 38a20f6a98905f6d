"""Tests for the LOG helper."""

from unittest.mock import patch
from reqparam.config.settings import appsettings
from reqparam.lib.log import LOG, record_isOwn


def test_log_suppressed_when_quiet(monkeypatch):
    monkeypatch.setattr(appsettings, "beQuiet", True)
    with patch("reqparam.lib.log.app_logger") as mock_logger:
        LOG("hidden")
        mock_logger.opt.assert_not_called()


def test_log_emitted_when_not_quiet(monkeypatch):
    monkeypatch.setattr(appsettings, "beQuiet", False)
    with patch("reqparam.lib.log.app_logger") as mock_logger:
        LOG("shown")
        mock_logger.opt.return_value.debug.assert_called_once_with("shown")


def test_log_never_raises(monkeypatch, capsys):
    monkeypatch.setattr(appsettings, "beQuiet", False)
    with patch("reqparam.lib.log.app_logger") as mock_logger:
        mock_logger.opt.side_effect = RuntimeError("sink closed")
        LOG("message")
    assert "Logging error: sink closed" in capsys.readouterr().out


def test_log_binds_parameter_name(monkeypatch):
    monkeypatch.setattr(appsettings, "beQuiet", False)
    with patch("reqparam.lib.log.app_logger") as mock_logger:
        LOG("resolved", parameter="page")
        mock_logger.bind.assert_called_once_with(parameter="page")
        bound = mock_logger.bind.return_value
        bound.opt.return_value.debug.assert_called_once_with("resolved")
        mock_logger.opt.assert_not_called()


def test_record_filter_keeps_own_records_only():
    assert record_isOwn({"extra": {"app": "REQPARAM", "parameter": "page"}})
    assert not record_isOwn({"extra": {}})
    assert not record_isOwn({"extra": {"app": "HOST"}})
