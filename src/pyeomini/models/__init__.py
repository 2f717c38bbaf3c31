"""Data models for EO API responses."""

from pyeomini.models._base import EoBaseModel
from pyeomini.models.account import User, Vehicle
from pyeomini.models.charge_session import ChargeSession
from pyeomini.models.control import ChargerCommand, SessionCommand
from pyeomini.models.mini import Mini, MiniStatus
from pyeomini.models.token import AuthToken

__all__ = [
    "AuthToken",
    "ChargeSession",
    "ChargerCommand",
    "EoBaseModel",
    "Mini",
    "MiniStatus",
    "SessionCommand",
    "User",
    "Vehicle",
]
