from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

from murmurations_kumu.services.http_client import close_client, get_default_index
from murmurations_kumu.services.kumu_service import build_kumu_map


def write_map(kumu_map: dict, out_path: str) -> str:
    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(kumu_map, f, ensure_ascii=False, indent=2)
    return out_path


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Build Kumu maps from Murmurations profiles")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="cmd", required=True)

    mp = sub.add_parser("map", help="Build the Kumu map for a profile URL")
    mp.add_argument("url", help="URL of the Murmurations profile")
    mp.add_argument("--index", default=None, help="'test' (default) or another value for production")
    mp.add_argument("--out", default=None, help="Write the JSON map to this file instead of stdout")
    mp.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Log debug output")

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Log debug output")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "serve":
        import uvicorn

        uvicorn.run("murmurations_kumu.main:app", host=args.host, port=args.port)
        return 0

    try:
        kumu_map = build_kumu_map(args.url, args.index or get_default_index())
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        close_client()

    if args.out:
        print(write_map(kumu_map, args.out))
    else:
        print(json.dumps(kumu_map, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
