# src/transflow/presentation/api/deps.py
"""FastAPI 依赖：从 app.state 取协调器，并通过 IdentityProvider 认证调用者。"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from transflow.application.coordinator import WorkflowCoordinator
from transflow.core.types import Principal


def get_coordinator(request: Request) -> WorkflowCoordinator:
    return request.app.state.coordinator


def _extract_credential(authorization: str | None, scheme: str) -> str | None:
    if not authorization:
        return None
    prefix, _, token = authorization.partition(" ")
    if prefix.lower() != scheme.lower():
        return None
    return token.strip() or None


async def get_principal(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """认证失败时 IdentityProvider 抛出 AuthenticationError，由异常处理器转换为 401。"""
    credential = _extract_credential(authorization, request.app.state.auth_scheme)
    return await request.app.state.identity_provider.authenticate(credential)


CoordinatorDep = Annotated[WorkflowCoordinator, Depends(get_coordinator)]
PrincipalDep = Annotated[Principal, Depends(get_principal)]
