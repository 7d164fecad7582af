"""
IDV Backend — Uvicorn Launcher
Starts the API with uvicorn; flags override the matching settings.

Usage:
    python run.py
    python run.py --port 8080 --reload
    python run.py --no-seed --no-latency
"""
import argparse
import os

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="IDV Client Registration Backend Server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--no-seed", action="store_true", help="Skip demo data seeding on startup")
    parser.add_argument("--no-latency", action="store_true", help="Disable simulated source latency")
    return parser


def main():
    args = build_parser().parse_args()

    # Settings are read from the environment when idv.config is first imported.
    os.environ["LOG_LEVEL"] = args.log_level.upper()
    if args.no_seed:
        os.environ["SEED_ON_STARTUP"] = "false"
    if args.no_latency:
        os.environ["SIMULATE_LATENCY"] = "false"

    print(f"""
    ========================================================
      IDV Client Registration -- Backend Server
      API:      http://{args.host}:{args.port}/api
      Docs:     http://localhost:{args.port}/docs
      Health:   http://localhost:{args.port}/health
    ========================================================
    """)

    uvicorn.run(
        "idv.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
