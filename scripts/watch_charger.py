#!/usr/bin/env python3
"""Run the charger platform against the live API and print every change.

Usage
-----
::

    export EOMINI_USERNAME="you@example.com"
    export EOMINI_PASSWORD="your-password"
    python scripts/watch_charger.py --refresh-rate 30

Type ``lock``, ``unlock``, ``on`` or ``off`` followed by Enter to send a
command to the first charger; ``quit`` stops the script.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyeomini import (  # noqa: E402
    Characteristic,
    ChargerPlatform,
    EoMiniClient,
    EoMiniConfig,
    LockState,
    Poller,
)
from pyeomini.state import CharacteristicValue  # noqa: E402


def _print_change(address: str, characteristic: Characteristic, value: CharacteristicValue) -> None:
    label = getattr(value, "name", value)
    print(f"{address} {characteristic}: {label}", flush=True)


async def _read_commands(platform: ChargerPlatform) -> None:
    loop = asyncio.get_running_loop()
    while True:
        line = (await loop.run_in_executor(None, sys.stdin.readline)).strip().lower()
        if not line or line == "quit":
            return
        accessories = list(platform.accessories.values())
        if not accessories:
            print("no charger discovered yet", flush=True)
            continue
        accessory = accessories[0]
        if line == "lock":
            accessory.set_lock_target(LockState.SECURED)
        elif line == "unlock":
            accessory.set_lock_target(LockState.UNSECURED)
        elif line in ("on", "off"):
            accessory.set_power_on(line == "on")
        else:
            print(f"unknown command {line!r}", flush=True)


async def main() -> None:
    parser = argparse.ArgumentParser(description="Watch EO Mini chargers and send commands.")
    parser.add_argument("--refresh-rate", type=float, help="Seconds between charger list refreshes")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {"refresh_rate": args.refresh_rate} if args.refresh_rate else {}
    config = EoMiniConfig.from_env(**overrides).validate()

    async with EoMiniClient(config) as client:
        platform = ChargerPlatform(config, client, on_characteristic=_print_change)
        await platform.discover_devices()
        poller = Poller(platform)
        poller.start()
        try:
            await _read_commands(platform)
        finally:
            await poller.stop()
            await platform.close()


if __name__ == "__main__":
    asyncio.run(main())
