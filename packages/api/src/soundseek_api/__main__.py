"""Run the soundseek API server: python -m soundseek_api."""

import sys

import uvicorn
from pydantic import ValidationError

from soundseek_api.settings import Settings, get_settings


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            print(f"Invalid SOUNDSEEK_{field.upper()}: {error['msg']}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    """Start uvicorn with the app factory and the configured server settings."""
    settings = _load_settings()
    uvicorn.run(
        "soundseek_api.api.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
