from __future__ import annotations
import argparse
import logging
import uvicorn
from git_web_links.infrastructure.config import get_settings
from git_web_links.interface.app import create_app

def main(argv: list[str] | None = None) -> None:
    """Start the editor bridge; command-line options override the settings."""
    parser = argparse.ArgumentParser(
        prog="git-web-links", description="Local bridge that creates web links to files"
    )
    parser.add_argument("--host", help="Interface to listen on")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    args = parser.parse_args(argv)

    overrides = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    settings = get_settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
