# src/transflow/application/services/_user_directory.py
"""用户目录：注册用户（签发 API 令牌）与角色变更。"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from transflow.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from transflow.core.types import PermissionLevel, Principal, User
from transflow.domain.workflow import ensure_admin
from transflow.infrastructure.identity import generate_token, hash_token

if TYPE_CHECKING:
    from transflow.config import TransflowConfig
    from transflow.infrastructure.uow import UowFactory

logger = structlog.get_logger(__name__)


class UserDirectoryService:
    def __init__(self, uow_factory: UowFactory, config: TransflowConfig):
        self._uow_factory = uow_factory
        self._config = config

    async def register_user(
        self,
        email: str,
        name: str,
        level: PermissionLevel = PermissionLevel.CONTRIBUTOR,
    ) -> tuple[User, str]:
        """
        注册用户并签发 API 令牌。

        Returns:
            (用户, 明文令牌)。数据库只保存令牌的 SHA-256 摘要，明文只在此处出现一次。
        """
        token = generate_token(self._config.auth.token_bytes)
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise ConflictError(f"邮箱已被注册: {email}")
            user = await uow.users.add(
                email=email,
                name=name,
                permission_level=level,
                api_token_sha256=hash_token(token),
            )
        logger.info("用户已注册", user_id=user.id, level=level.value)
        return user, token

    async def change_role(
        self,
        actor: Principal,
        level: PermissionLevel,
        *,
        user_id: str | None = None,
        email: str | None = None,
    ) -> User:
        """按用户 ID 或邮箱（二选一）修改权限级别。"""
        ensure_admin(actor, "修改用户角色")
        if (user_id is None) == (email is None):
            raise InvalidStateError("必须且只能指定 user_id 或 email 之一。")

        async with self._uow_factory() as uow:
            user = (
                await uow.users.get(user_id)
                if user_id is not None
                else await uow.users.get_by_email(email)
            )
            if user is None:
                raise NotFoundError(f"用户不存在: {user_id or email}")
            user = await uow.users.set_permission_level(user.id, level)
        logger.info(
            "用户角色已变更", user_id=user.id, level=level.value, actor=actor.id
        )
        return user

    async def get_user(self, user_id: str) -> User:
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
        if user is None:
            raise NotFoundError(f"用户不存在: {user_id}")
        return user
