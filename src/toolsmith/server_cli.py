"""CLI entry point for the Toolsmith API server."""

import argparse
import os

from toolsmith.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="toolsmith-server",
        description="Toolsmith API server",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database, console logs",
    )
    args = parser.parse_args(argv)

    if args.local:
        os.environ["TOOLSMITH_LOCAL_MODE"] = "1"
        settings.local_mode = True

    import uvicorn

    uvicorn.run("toolsmith.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
