"""Entry point for `python -m hydrant_ledger`.

Usage:
    python -m hydrant_ledger
    HYDRANT_API__PORT=8080 HYDRANT_DATABASE__HOST=db python -m hydrant_ledger
"""

import uvicorn

from hydrant_ledger.api.app import create_app
from hydrant_ledger.config import get_settings
from hydrant_ledger.observability.logging import get_logger, setup_logging


def main() -> None:
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_secrets=log_config.redact_secrets,
    )

    get_logger(__name__).info(
        "server_starting",
        host=settings.api.host,
        port=settings.api.port,
        backend=settings.database.backend,
    )

    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,  # structlog handles all logging
        access_log=False,
    )


if __name__ == "__main__":
    main()
