"""
API Service - Main entry point.
Serves the CV analysis endpoint with uvicorn.
"""

from typing import Optional

import click
import uvicorn
from loguru import logger

from shared.config import get_settings
from shared.log import setup_logging


@click.command()
@click.option("--host", "-h", type=str, default=None, help="Bind address")
@click.option("--port", "-p", type=int, default=None, help="Bind port")
@click.option("--reload", "-r", is_flag=True, help="Reload on code changes (development)")
def main(host: Optional[str], port: Optional[int], reload: bool):
    """CV Analysis API - Scores CVs against job descriptions using LLM."""
    setup_logging()
    settings = get_settings()

    host = host or settings.api_host
    port = port or settings.api_port

    if not settings.openai_api_key.get_secret_value():
        logger.warning("OPENAI_API_KEY is not set; analysis requests will fail")

    logger.info(f"Starting API on {host}:{port} (model: {settings.openai_model})")
    uvicorn.run("api.app:create_app", factory=True, host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
