# src/transflow/presentation/api/routes/admin.py
"""管理路由：按用户 ID 或邮箱修改角色。"""

from __future__ import annotations

from fastapi import APIRouter

from transflow.core.types import User

from ..deps import CoordinatorDep, PrincipalDep
from ..schemas import RoleChange

router = APIRouter(prefix="/api/admin/users", tags=["admin"])


@router.put("/{user_id}/role", response_model=User)
async def change_role_by_id(
    user_id: str, body: RoleChange, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.change_role(principal, body.level, user_id=user_id)


@router.put("/email/{email}/role", response_model=User)
async def change_role_by_email(
    email: str, body: RoleChange, coordinator: CoordinatorDep, principal: PrincipalDep
):
    return await coordinator.change_role(principal, body.level, email=email)
