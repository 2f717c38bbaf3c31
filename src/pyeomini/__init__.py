"""pyeomini - Async Python client and state sync for EO Mini chargers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyeomini")
except PackageNotFoundError:
    __version__ = "0+local"
from pyeomini._queue import CommandQueue
from pyeomini.accessory import ChargerAccessory
from pyeomini.client import EoMiniClient
from pyeomini.config import EoMiniConfig
from pyeomini.exceptions import (
    EoMiniAuthError,
    EoMiniConfigError,
    EoMiniConnectivityError,
    EoMiniError,
    EoMiniRequestError,
    EoMiniResponseFormatError,
)
from pyeomini.models import (
    AuthToken,
    ChargerCommand,
    ChargeSession,
    Mini,
    MiniStatus,
    SessionCommand,
    User,
    Vehicle,
)
from pyeomini.platform import ChargerPlatform
from pyeomini.polling import Poller
from pyeomini.session import AuthManager, AuthSession
from pyeomini.state import (
    AccessoryState,
    Characteristic,
    ContactState,
    LockState,
    PowerRevertGuard,
    RevertState,
)

__all__ = [
    "__version__",
    "AccessoryState",
    "AuthManager",
    "AuthSession",
    "AuthToken",
    "Characteristic",
    "ChargeSession",
    "ChargerAccessory",
    "ChargerCommand",
    "ChargerPlatform",
    "CommandQueue",
    "ContactState",
    "EoMiniAuthError",
    "EoMiniClient",
    "EoMiniConfig",
    "EoMiniConfigError",
    "EoMiniConnectivityError",
    "EoMiniError",
    "EoMiniRequestError",
    "EoMiniResponseFormatError",
    "LockState",
    "Mini",
    "MiniStatus",
    "Poller",
    "PowerRevertGuard",
    "RevertState",
    "SessionCommand",
    "User",
    "Vehicle",
]
