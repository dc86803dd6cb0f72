#!/usr/bin/env python
"""Print the API-Sign value for a Kraken private request.

The secret is read from PRIVATE_KEY and never echoed. Useful for pinning
known vectors and for comparing against another client's output.

Example:
    PRIVATE_KEY=ZXhhbXBsZV9zZWNyZXQ= python scripts/kraken_signature.py \
        --path /0/private/OpenOrders --nonce 1700000000000
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cex.kraken.api.auth import encode_payload, generate_signature
from cex.kraken.api.config import PRIVATE_KEY_ENV
from cex.kraken.api.errors import SigningError


def _field(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, value


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sign a Kraken private request with PRIVATE_KEY.")
    p.add_argument("--path", required=True, help="URI path like /0/private/OpenOrders")
    p.add_argument("--nonce", type=int, required=True, help="Nonce (millisecond timestamp)")
    p.add_argument(
        "--field",
        type=_field,
        action="append",
        default=[],
        help="Extra form field key=value, in wire order (repeatable)",
    )
    p.add_argument("--show-body", action="store_true", help="Also print the form-encoded body")
    return p.parse_args()


def main() -> int:
    args = _parse_args()

    secret = os.environ.get(PRIVATE_KEY_ENV)
    if not secret:
        print(f"{PRIVATE_KEY_ENV} is not set", file=sys.stderr)
        return 2

    payload = [("nonce", args.nonce), *args.field]
    try:
        signature = generate_signature(args.path, payload, secret)
    except SigningError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.show_body:
        print(f"body={encode_payload(payload)}")
    print(signature)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
