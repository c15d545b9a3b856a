from __future__ import annotations


def test_configure_structlog_warns_on_invalid_log_level(monkeypatch, capfd) -> None:
    from stockfolio.logging import configure_structlog

    monkeypatch.setenv("STOCKFOLIO_LOG_LEVEL", "not-a-level")
    configure_structlog()

    captured = capfd.readouterr()
    assert "Invalid STOCKFOLIO_LOG_LEVEL" in captured.err


def test_configure_structlog_accepts_valid_level(monkeypatch, capfd) -> None:
    from stockfolio.logging import configure_structlog

    monkeypatch.setenv("STOCKFOLIO_LOG_LEVEL", "debug")
    configure_structlog()

    assert "Invalid" not in capfd.readouterr().err
