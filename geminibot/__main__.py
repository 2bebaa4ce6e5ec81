"""Run the interactions endpoint with uvicorn."""

import uvicorn

from geminibot.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "geminibot.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
