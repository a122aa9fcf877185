# src/transflow/presentation/api/schemas.py
"""HTTP 请求体模型。响应直接使用 core.types 中的 DTO。"""

from __future__ import annotations

from typing import Any, Optional

import langcodes
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from transflow.core.types import PermissionLevel


def _validate_lang_tag(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    if not langcodes.tag_is_valid(v):
        raise ValueError(f"非法语言代码: {v}")
    return langcodes.standardize_tag(v)


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class DocumentCreate(_Body):
    title: str = Field(min_length=1, max_length=255)
    original_url: str = Field(min_length=1, max_length=500)
    source_lang: Optional[str] = None
    target_lang: Optional[str] = None
    category_id: Optional[str] = None
    estimated_length: Optional[int] = Field(default=None, ge=0)

    @field_validator("source_lang", "target_lang")
    @classmethod
    def _check_langs(cls, v: Optional[str]) -> Optional[str]:
        return _validate_lang_tag(v)


class DocumentUpdate(_Body):
    """部分更新；status 不是可更新字段，出现即被拒绝。"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    original_url: Optional[str] = Field(default=None, min_length=1, max_length=500)
    source_lang: Optional[str] = None
    target_lang: Optional[str] = None
    category_id: Optional[str] = None
    estimated_length: Optional[int] = Field(default=None, ge=0)

    @field_validator("source_lang", "target_lang")
    @classmethod
    def _check_langs(cls, v: Optional[str]) -> Optional[str]:
        return _validate_lang_tag(v)


class VersionCreate(_Body):
    # 保持为字符串，未知类型由领域层报告为 invalid_state
    version_type: str
    content: str
    is_final: bool = False


class TaskCreate(_Body):
    document_id: str
    translator_id: Optional[str] = None
    assign: bool = False


class ReviewCreate(_Body):
    document_id: str
    version_id: str
    comment: Optional[str] = None
    checklist: dict[str, bool] = Field(default_factory=dict)
    is_complete: bool = False


class ReviewUpdate(_Body):
    comment: Optional[str] = None
    checklist: Optional[dict[str, bool]] = None
    is_complete: Optional[bool] = None


class TermCreate(_Body):
    source_term: str = Field(min_length=1, max_length=255)
    target_term: str = Field(min_length=1, max_length=255)
    source_lang: str
    target_lang: str
    description: Optional[str] = None

    @field_validator("source_lang", "target_lang")
    @classmethod
    def _check_langs(cls, v: Optional[str]) -> Optional[str]:
        return _validate_lang_tag(v)


class TermUpdate(_Body):
    source_term: Optional[str] = Field(default=None, min_length=1, max_length=255)
    target_term: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class RoleChange(_Body):
    """新的权限级别；也接受旧系统的数字角色级别 (1/2/3)。"""

    level: Optional[PermissionLevel] = None
    role_level: Optional[int] = None

    @model_validator(mode="after")
    def _one_of(self) -> "RoleChange":
        if (self.level is None) == (self.role_level is None):
            raise ValueError("必须且只能提供 level 或 role_level 之一。")
        if self.role_level is not None:
            self.level = PermissionLevel.from_role_level(self.role_level)
        return self


def changes_of(body: BaseModel) -> dict[str, Any]:
    """只取请求中显式给出的字段。"""
    return body.model_dump(exclude_unset=True)
