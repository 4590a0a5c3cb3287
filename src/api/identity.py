"""Caller identity

The upstream auth gateway forwards the authenticated user as X-Actor-Id.
"""

from typing import Optional
from fastapi import Header
from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError


async def get_actor_id(x_actor_id: Optional[str] = Header(default=None)) -> str:
    if x_actor_id:
        return x_actor_id
    if ApplicationConfig.AUTH_DISABLED:
        return ApplicationConfig.SYSTEM_ACTOR_ID
    raise ClientError(
        Error(code="UNAUTHORIZED", message="Missing X-Actor-Id header"),
    )
