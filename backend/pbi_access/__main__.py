"""
Run the access tool with uvicorn

Usage:
    python -m pbi_access
    HOST=127.0.0.1 PORT=8080 python -m pbi_access
"""

import logging
import os

import uvicorn

from pbi_access.core.config import get_config
from pbi_access.main import create_app


def main() -> None:
    config = get_config()
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(config)
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        # 0 picks a free port
        port=int(os.getenv("PORT", "0")),
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
