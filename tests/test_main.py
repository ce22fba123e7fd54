from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from agents.errors import ConfigurationError
from config.settings import Settings


def test_create_app_refuses_without_credential():
    from main import create_app

    with pytest.raises(ConfigurationError):
        create_app(Settings(_env_file=None, openai_api_key=None))


def test_run_exits_non_zero_before_binding(monkeypatch):
    import main

    served = []
    monkeypatch.setattr(main, "get_settings", lambda: Settings(_env_file=None, openai_api_key=None))
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: served.append((args, kwargs)))

    with pytest.raises(SystemExit) as excinfo:
        main.run()

    assert excinfo.value.code == 1
    assert served == []


def test_run_serves_on_configured_port(monkeypatch):
    import main

    served = []
    monkeypatch.setattr(
        main,
        "get_settings",
        lambda: Settings(_env_file=None, openai_api_key="sk-test", host="127.0.0.1", port=9001),
    )
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: served.append((app, kwargs)))

    main.run()

    app, kwargs = served[0]
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001
    assert app.state.settings.port == 9001


def test_app_wires_components(settings):
    from agents.turns import TurnProcessor
    from main import create_app

    app = create_app(settings)

    assert app.state.settings is settings
    assert isinstance(app.state.turn_processor, TurnProcessor)
    with TestClient(app) as client:
        assert client.get("/").status_code == 200
