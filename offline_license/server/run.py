"""Run the issuing service with uvicorn."""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from ..config import IssuerConfig
from .app import create_app


def main() -> None:
    load_dotenv()
    config = IssuerConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
