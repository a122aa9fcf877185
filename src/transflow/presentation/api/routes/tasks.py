# src/transflow/presentation/api/routes/tasks.py
"""翻译任务路由。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from transflow.core.types import TaskStatus, TranslationTask

from ..deps import CoordinatorDep, PrincipalDep
from ..schemas import TaskCreate

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=TranslationTask, status_code=status.HTTP_201_CREATED)
async def create_task(body: TaskCreate, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.create_task(
        body.document_id, body.translator_id, actor=principal, assign=body.assign
    )


@router.get("", response_model=list[TranslationTask])
async def list_tasks(
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
    translator_id: Optional[str] = None,
    document_id: Optional[str] = None,
    status: Optional[TaskStatus] = None,
):
    return await coordinator.list_tasks(
        translator_id=translator_id, document_id=document_id, status=status
    )


@router.get("/mine", response_model=list[TranslationTask])
async def my_tasks(
    coordinator: CoordinatorDep,
    principal: PrincipalDep,
    status: Optional[TaskStatus] = None,
):
    return await coordinator.my_tasks(principal.id, status)


@router.get("/{task_id}", response_model=TranslationTask)
async def get_task(task_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.get_task(task_id)


@router.post("/{task_id}/start", response_model=TranslationTask)
async def start_task(task_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.start_task(task_id, principal.id)


@router.post("/{task_id}/submit", response_model=TranslationTask)
async def submit_task(task_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.submit_task(task_id, principal.id)


@router.post("/{task_id}/abandon", response_model=TranslationTask)
async def abandon_task(task_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.abandon_task(task_id, principal.id)


@router.put("/{task_id}/activity", response_model=TranslationTask)
async def touch_activity(task_id: str, coordinator: CoordinatorDep, principal: PrincipalDep):
    return await coordinator.touch_activity(task_id, principal.id)
