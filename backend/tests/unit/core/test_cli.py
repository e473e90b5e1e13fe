"""
Unit Tests for the server command line
"""
from stats_api import cli
from stats_api.core.config import settings


def test_parser_defaults_come_from_settings():
    args = cli.create_parser().parse_args([])

    assert args.host == settings.SERVER_HOST
    assert args.port == settings.SERVER_PORT
    assert args.reload is False
    assert args.init_db is False


def test_main_runs_uvicorn(monkeypatch):
    calls = {}
    monkeypatch.setattr(cli.uvicorn, 'run', lambda app, **kwargs: calls.update(app=app, **kwargs))

    assert cli.main(['--port', '9100', '--reload']) == 0
    assert calls['app'] == 'stats_api.main:app'
    assert calls['port'] == 9100
    assert calls['reload'] is True
