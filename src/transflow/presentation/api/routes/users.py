# src/transflow/presentation/api/routes/users.py
"""用户查询路由：当前调用者与按 ID 查询。"""

from __future__ import annotations

from fastapi import APIRouter

from transflow.core.types import User

from ..deps import CoordinatorDep, PrincipalDep

router = APIRouter(prefix="/api/users", tags=["users"])


# 必须先于 /{user_id} 声明
@router.get("/me", response_model=User)
async def get_me(coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.get_user(principal.id)


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.get_user(user_id)
