"""Run the API with ``python -m server``."""

import os

import uvicorn

from trilium_explorer.config import TRILIUM_EXPLORER_DB_PATH
from trilium_explorer.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    configure_logging()
    host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info(
        "Starting trilium-explorer server",
        extra={"host": host, "port": port, "db_path": str(TRILIUM_EXPLORER_DB_PATH)},
    )
    # uvicorn keeps our handlers instead of installing its own config
    uvicorn.run("server.main:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    main()
