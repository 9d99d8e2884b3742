from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.passwords import hash_password
from ...logging import get_logger
from ...storage.base import IntegrityViolation
from ..access_control import get_auth_context, get_loaders, get_repository, parse_id
from ..errors import ConflictError, ValidationError
from ..types.post import post_from_record
from ..types.user import user_from_record

if TYPE_CHECKING:
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)


async def resolve_users(info: strawberry.Info) -> list[User]:
    records = await get_repository(info).list_users()
    return [user_from_record(record) for record in records]


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    user_id = parse_id(id)
    record = await get_loaders(info).user_loader.load(user_id)
    if record is None:
        logger.info("User not found", user_id=user_id)
        return None
    return user_from_record(record)


async def resolve_current_user(info: strawberry.Info) -> User | None:
    auth_context = get_auth_context(info)
    if auth_context.user_id is None:
        return None
    record = await get_loaders(info).user_loader.load(auth_context.user_id)
    return user_from_record(record) if record else None


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    records = await get_loaders(info).posts_by_author_loader.load(int(user.id))
    return [post_from_record(record) for record in records]


async def create_user(info: strawberry.Info, name: str, email: str, password: str) -> User:
    name = name.strip()
    email = email.strip().lower()
    if not name:
        raise ValidationError("Name is required")
    if "@" not in email:
        raise ValidationError(f"Invalid email address: {email!r}")
    if not password:
        raise ValidationError("Password is required")

    repository = get_repository(info)
    if await repository.get_user_by_email(email) is not None:
        raise ConflictError(f"Email already registered: {email}")

    try:
        record = await repository.create_user(name, email, hash_password(password))
    except IntegrityViolation as e:
        raise ConflictError(str(e)) from e

    get_loaders(info).user_loader.prime(record.id, record)
    logger.info("User registered", user_id=record.id)
    return user_from_record(record)
