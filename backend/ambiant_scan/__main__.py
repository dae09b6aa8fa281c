"""Run the proxy with uvicorn: ``python -m ambiant_scan``."""

import uvicorn

from ambiant_scan.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "ambiant_scan.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
