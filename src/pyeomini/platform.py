"""Charger discovery and device refresh for one account."""

from __future__ import annotations

import logging

from pyeomini._queue import CommandQueue
from pyeomini.accessory import ChargerAccessory
from pyeomini.client import EoMiniClient
from pyeomini.config import EoMiniConfig
from pyeomini.models.mini import Mini
from pyeomini.state.store import CharacteristicCallback

_logger = logging.getLogger(__name__)


class ChargerPlatform:
    """Owns the command queue and one :class:`ChargerAccessory` per charger.

    Usage::

        async with EoMiniClient(config) as client:
            platform = ChargerPlatform(config, client, on_characteristic=print)
            await platform.discover_devices()
            poller = Poller(platform)
            poller.start()
    """

    def __init__(
        self,
        config: EoMiniConfig,
        client: EoMiniClient,
        *,
        on_characteristic: CharacteristicCallback | None = None,
        queue: CommandQueue | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._on_characteristic = on_characteristic
        self._queue = queue or CommandQueue()
        self._accessories: dict[str, ChargerAccessory] = {}

    @property
    def config(self) -> EoMiniConfig:
        return self._config

    @property
    def queue(self) -> CommandQueue:
        return self._queue

    @property
    def accessories(self) -> dict[str, ChargerAccessory]:
        return dict(self._accessories)

    def get(self, address: str) -> ChargerAccessory | None:
        return self._accessories.get(address)

    async def discover_devices(self) -> list[ChargerAccessory]:
        """List chargers and reconcile the accessory map with them.

        New chargers get an accessory and an initial session check;
        known ones receive the fresh snapshot; chargers no longer listed
        are dropped.
        """
        devices: list[Mini] = await self._queue.enqueue(self._client.list_chargers, name="discover_devices")

        seen: set[str] = set()
        for device in devices:
            seen.add(device.address)
            existing = self._accessories.get(device.address)
            if existing is not None:
                _logger.info("Restoring existing accessory: %s", device.address)
                existing.notify_snapshot(device)
                continue

            _logger.info("Adding new accessory: %s", device.address)
            accessory = ChargerAccessory(
                device,
                self._client,
                self._queue,
                on_characteristic=self._on_characteristic,
                revert_debounce=self._config.revert_debounce,
            )
            self._accessories[device.address] = accessory
            accessory.check_session()

        for address in list(self._accessories):
            if address not in seen:
                _logger.info("Removing accessory no longer listed: %s", address)
                self._accessories.pop(address).close()

        return list(self._accessories.values())

    async def refresh_devices(self) -> None:
        """Fetch the charger list and hand each snapshot to its accessory."""
        _logger.debug("Updating devices")
        devices: list[Mini] = await self._queue.enqueue(self._client.list_chargers, name="refresh_devices")

        for device in devices:
            accessory = self._accessories.get(device.address)
            if accessory is None:
                _logger.error("Device not found: %s", device.address)
                continue
            accessory.notify_snapshot(device)

    def poll(self) -> None:
        for accessory in list(self._accessories.values()):
            accessory.poll()

    async def close(self) -> None:
        for accessory in self._accessories.values():
            accessory.close()
        await self._queue.close()
