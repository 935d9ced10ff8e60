# __main__.py
from __future__ import annotations

import uvicorn

from . import config
from .logs import setup_logging


def main() -> None:
    setup_logging(config.LOG_LEVEL)
    uvicorn.run(
        "gifascii.app:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
