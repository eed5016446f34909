"""Run the API with uvicorn: `python -m campspot`."""

import uvicorn

from campspot.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "campspot.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
