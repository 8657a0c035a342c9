import os

import uvicorn

from finance_tracker.app import app
from finance_tracker.core import settings
from finance_tracker.logger import get_logging_config

__all__ = ["app", "run"]


def run() -> None:
    host = os.getenv("APP_HOST", settings.DEFAULT_HOST)
    port = settings.get_env_int("APP_PORT", settings.DEFAULT_PORT, min_value=1)
    uvicorn.run(app, host=host, port=port, log_config=get_logging_config())


if __name__ == "__main__":
    run()
