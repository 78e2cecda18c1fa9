import logging

import myjob.logging_config as lc


def test_setup_logging_string_level():
    lc.setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_unknown_string_falls_back_to_info():
    lc.setup_logging("chatty")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_uses_settings_level(monkeypatch):
    monkeypatch.setattr("myjob.config.settings.log_level", "WARNING")
    lc.setup_logging(None)
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_single_handler_and_quiet_libraries():
    lc.setup_logging(logging.INFO)
    lc.setup_logging(logging.INFO)
    assert len(logging.getLogger().handlers) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_import_failure_falls_back(monkeypatch):
    import builtins

    orig_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "myjob.config":
            raise RuntimeError("boom")
        return orig_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    lc.setup_logging(None)
    assert logging.getLogger().level == logging.INFO
