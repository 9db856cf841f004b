from __future__ import annotations

import pytest

from storytram.api.serve import APP_PATH, build_command
from storytram.config import AppConfig


def test_web_runs_gunicorn_with_uvicorn_workers():
    settings = AppConfig(_env_file=None, API_HOST="127.0.0.1", API_PORT=9000)
    cmd = build_command("web", settings, env={})
    assert cmd[:2] == ["gunicorn", APP_PATH]
    assert "uvicorn.workers.UvicornWorker" in cmd
    assert cmd[cmd.index("--bind") + 1] == "127.0.0.1:9000"


def test_platform_port_wins():
    settings = AppConfig(_env_file=None, API_PORT=9000)
    cmd = build_command("dev", settings, env={"PORT": "8080"})
    assert cmd[:3] == ["uvicorn", APP_PATH, "--reload"]
    assert cmd[cmd.index("--port") + 1] == "8080"


def test_unknown_service_type():
    with pytest.raises(ValueError):
        build_command("worker", AppConfig(_env_file=None), env={})
