from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.factory import get_auth_adapter
from ...auth.passwords import verify_password
from ...logging import get_logger
from ..access_control import get_repository, get_settings
from ..errors import UnauthorizedError
from ..types.user import AuthPayload, user_from_record

if TYPE_CHECKING:
    from ...auth.adapters.base import AuthAdapter

logger = get_logger(__name__)


def _get_auth_adapter(info: strawberry.Info) -> AuthAdapter:
    adapter = info.context.get("auth_adapter")
    if adapter is None:
        adapter = get_auth_adapter(get_settings(info))
    return adapter


async def login(info: strawberry.Info, email: str, password: str) -> AuthPayload:
    """Exchange email and password for a bearer token."""
    record = await get_repository(info).get_user_by_email(email.strip().lower())
    if record is None or not verify_password(password, record.password):
        logger.info("Login rejected", email=email)
        raise UnauthorizedError("Invalid email or password")

    token = await _get_auth_adapter(info).issue_token(
        user_id=record.id, claims={"email": record.email, "name": record.name}
    )
    logger.info("Login succeeded", user_id=record.id)
    return AuthPayload(token=token, user=user_from_record(record))
