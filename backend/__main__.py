"""CLI entry point: python -m backend [--host HOST] [--port PORT] [--reload]"""

import argparse

import uvicorn
from loguru import logger

from realty.config import HOST, PORT


def main():
    parser = argparse.ArgumentParser(prog="backend", description="Realty listing/booking API server")
    parser.add_argument("--host", default=HOST, help=f"Interface to bind (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    logger.info(f"Server is running on port {args.port}")
    uvicorn.run("backend.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
