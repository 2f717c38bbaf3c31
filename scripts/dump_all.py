#!/usr/bin/env python3
"""Dump all data the pyeomini library can fetch.

This script logs in, lists the chargers on the account, and calls every
read-only endpoint, printing both the parsed model fields **and** the raw
API JSON so you can spot fields that aren't parsed yet.

Usage
-----
Set environment variables and run::

    export EOMINI_USERNAME="you@example.com"
    export EOMINI_PASSWORD="your-password"
    python scripts/dump_all.py

Options::

    --json               Output as machine-readable JSON
    --skip-status        Skip the charger connectivity check
    --skip-account       Skip the user and vehicle endpoints
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pydantic import BaseModel  # noqa: E402

from pyeomini import EoMiniClient, EoMiniConfig, EoMiniError  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


def _print_model(label: str, model: BaseModel | None, out: list[str]) -> dict[str, Any]:
    out.append(f"\n--- {label} ---")
    if model is None:
        out.append("  <none>")
        return {}
    data = model.model_dump(exclude={"raw"})
    for key, value in data.items():
        out.append(f"  {key:<20}: {value!r}")
    return data


def _print_raw(label: str, raw: dict[str, Any], out: list[str]) -> None:
    out.append(f"\n  raw {label}:")
    out.append("  " + json.dumps(raw, indent=2, default=str).replace("\n", "\n  "))


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump all data pyeomini can fetch for debugging / development.",
    )
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--skip-status", action="store_true", help="Skip charger connectivity check")
    parser.add_argument("--skip-account", action="store_true", help="Skip user and vehicle endpoints")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = EoMiniConfig.from_env().validate()
    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "chargers": []}

    out: list[str] = [_section("pyeomini dump_all"), f"  time      : {result['timestamp']}"]

    async with EoMiniClient(config) as client:
        session = await client.login()
        out.append(f"  expires   : {session.expires_at.isoformat()}")

        for mini in await client.list_chargers():
            entry: dict[str, Any] = {"charger": _print_model(f"Charger {mini.address}", mini, out)}
            _print_raw(f"Charger {mini.address}", mini.raw, out)
            if not args.skip_status:
                try:
                    status = await client.charger_status(mini.address)
                    entry["status"] = _print_model("Status", status, out)
                except EoMiniError as exc:
                    out.append(f"  status error: {exc}")
                    entry["status_error"] = str(exc)
            result["chargers"].append(entry)

        charge_session = await client.get_session()
        result["session"] = _print_model("Session", charge_session, out)
        if charge_session is not None:
            _print_raw("Session", charge_session.raw, out)
        result["alive"] = await client.is_session_alive()
        out.append(f"\n  session alive: {result['alive']}")

        if not args.skip_account:
            result["user"] = _print_model("User", await client.get_user(), out)
            result["vehicle"] = _print_model("Vehicle", await client.get_vehicle(), out)

    if args.json_mode:
        print(json.dumps(result, indent=2, default=str))
    else:
        print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
