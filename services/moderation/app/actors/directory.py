"""
Actor directory lookups.

``find_actor`` backs the "reported user must exist" check on submission;
``find_actors`` backs the batch enrichment join on every read path.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.actors.models import User


async def find_actor(session: AsyncSession, actor_id: uuid.UUID) -> User | None:
    return await session.get(User, actor_id)


async def find_actors(
    session: AsyncSession, actor_ids: Iterable[uuid.UUID | None]
) -> dict[uuid.UUID, User]:
    """Fetch every distinct non-null id in one query; absent ids are simply missing."""
    ids = {i for i in actor_ids if i is not None}
    if not ids:
        return {}
    result = await session.execute(sa.select(User).where(User.id.in_(ids)))
    return {u.id: u for u in result.scalars().all()}
