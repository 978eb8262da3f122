"""Entry point for the signsheet server."""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Attendance sheet signing server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        default=None,
        help="Log level. Overrides SIGNSHEET_LOG_LEVEL env var.",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Canvas render scale. Overrides SIGNSHEET_RENDER_SCALE env var.",
    )
    args = parser.parse_args()

    if args.log_level:
        os.environ["SIGNSHEET_LOG_LEVEL"] = args.log_level
    if args.scale:
        os.environ["SIGNSHEET_RENDER_SCALE"] = str(args.scale)

    from signsheet.server import app

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
