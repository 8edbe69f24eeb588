"""
Run the career gateway API locally.

`python run_server_local.py` serves the endpoints and the Swagger UI at
`http://0.0.0.0:8001/docs`. Use `--port`/`--host` (or `GATEWAY_PORT`/`GATEWAY_HOST`)
to move it and `--no-reload` to disable auto-reload.
"""
import argparse
import os
import signal
import sys

import uvicorn

from career_gateway.logging import LoggerFactory

logger = LoggerFactory().get_logger(name="run_server_local", logger_type="default")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the career gateway API locally.")
    parser.add_argument("--host", default=os.getenv("GATEWAY_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("GATEWAY_PORT", "8001")))
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload on code changes.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Uvicorn is driven programmatically so Ctrl+C shuts it down cleanly
    config = uvicorn.Config(
        "api.server:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
    )
    server = uvicorn.Server(config)

    def handle_exit(sig, frame):
        logger.info("Shutting down gracefully...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)

    logger.info(f"Serving career gateway API on http://{args.host}:{args.port}/docs")
    server.run()
    logger.info("Server stopped cleanly.")

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Exiting...")
        sys.exit(0)
