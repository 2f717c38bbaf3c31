"""Account endpoints.

Endpoints:
  - /api/user
  - /api/vehicle
"""

from __future__ import annotations

from pyeomini._api._common import Authorizer, request
from pyeomini._constants import USER_ENDPOINT, VEHICLE_ENDPOINT
from pyeomini._transport import Transport
from pyeomini.models.account import User, Vehicle


async def fetch_user(transport: Transport, auth: Authorizer) -> User:
    response = await request(transport, auth, "GET", USER_ENDPOINT)
    return User.model_validate(response.body if isinstance(response.body, dict) else {})


async def fetch_vehicle(transport: Transport, auth: Authorizer) -> Vehicle:
    response = await request(transport, auth, "GET", VEHICLE_ENDPOINT)
    return Vehicle.model_validate(response.body if isinstance(response.body, dict) else {})
