# src/transflow/domain/versioning.py
"""
包含与文档版本编号相关的核心领域逻辑。

版本号同时承担排序和粗粒度语义标签两种职责：
0 = 原文，1 = 机器初稿，2+ = 人工修订。FINAL 不分配新号，而是沿用当前最高号。
"""

from __future__ import annotations

from transflow.core.exceptions import InvalidStateError
from transflow.core.types import VersionType

ORIGINAL_VERSION_NUMBER = 0
AI_DRAFT_VERSION_NUMBER = 1
FIRST_MANUAL_VERSION_NUMBER = 2


def coerce_version_type(value: VersionType | str) -> VersionType:
    """将外部传入的版本类型转换为枚举；无法识别时抛出 InvalidStateError。"""
    if isinstance(value, VersionType):
        return value
    try:
        return VersionType(str(value).upper())
    except ValueError:
        raise InvalidStateError(f"不支持的版本类型: {value}") from None


def next_version_number(version_type: VersionType, highest: int | None) -> int:
    """
    根据版本类型和文档当前的最高版本号计算新版本号。

    Args:
        version_type: 新版本的类型。
        highest: 文档现有版本中最大的版本号；没有任何版本时为 None。

    Returns:
        新版本应使用的版本号。

    Raises:
        InvalidStateError: FINAL 版本在文档尚无任何版本时被创建。
    """
    if version_type is VersionType.ORIGINAL:
        return ORIGINAL_VERSION_NUMBER
    if version_type is VersionType.AI_DRAFT:
        return AI_DRAFT_VERSION_NUMBER
    if version_type is VersionType.MANUAL_TRANSLATION:
        return FIRST_MANUAL_VERSION_NUMBER if highest is None else highest + 1
    if version_type is VersionType.FINAL:
        if highest is None:
            raise InvalidStateError("创建 FINAL 版本之前，文档必须已有其他版本。")
        return highest
    raise InvalidStateError(f"不支持的版本类型: {version_type}")
