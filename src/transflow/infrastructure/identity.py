# src/transflow/infrastructure/identity.py
"""
基于数据库的身份提供者：凭据是不透明的 API 令牌，按其 SHA-256 摘要查找用户。
"""

from __future__ import annotations

import hashlib
import secrets

import structlog

from transflow.core.exceptions import AuthenticationError
from transflow.core.interfaces import IdentityProvider
from transflow.core.types import Principal

from .uow import UowFactory

logger = structlog.get_logger(__name__)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_token(nbytes: int = 32) -> str:
    return secrets.token_urlsafe(nbytes)


class DatabaseIdentityProvider(IdentityProvider):
    def __init__(self, uow_factory: UowFactory):
        self._uow_factory = uow_factory

    async def authenticate(self, credential: str | None) -> Principal:
        if not credential:
            raise AuthenticationError("缺少认证凭据。")
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_token_hash(hash_token(credential))
        if user is None:
            logger.info("认证失败：未知令牌")
            raise AuthenticationError("认证凭据无效。")
        return Principal(id=user.id, level=user.permission_level)
