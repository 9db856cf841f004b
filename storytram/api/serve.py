"""
Launch the story frame API.

SERVICE_TYPE picks the server:
  - web (default): gunicorn with uvicorn workers
  - dev: uvicorn with auto-reload

Host and port come from API_HOST / API_PORT; a PORT variable set by the
hosting platform wins over API_PORT.
"""

import os
import sys
from typing import List, Mapping, Optional

from storytram.config import AppConfig, config

APP_PATH = "storytram.api.main:app"
SERVICE_TYPES = ("web", "dev")


def build_command(
    service_type: str,
    settings: AppConfig = config,
    env: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Server argv for a service type; raises ValueError for unknown types."""
    env = os.environ if env is None else env
    port = str(env.get("PORT") or settings.API_PORT)

    if service_type == "web":
        return [
            "gunicorn", APP_PATH,
            "--workers", "2",
            "--worker-class", "uvicorn.workers.UvicornWorker",
            "--bind", f"{settings.API_HOST}:{port}",
            "--timeout", "60",
        ]
    if service_type == "dev":
        return ["uvicorn", APP_PATH, "--reload", "--host", settings.API_HOST, "--port", port]
    raise ValueError(f"Unknown SERVICE_TYPE {service_type!r}; expected one of {', '.join(SERVICE_TYPES)}")


def main():
    try:
        cmd = build_command(os.environ.get("SERVICE_TYPE", "web"))
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Running: {' '.join(cmd)}")
    os.execvp(cmd[0], cmd)


if __name__ == "__main__":
    main()
