# tests/integration/application/test_version_ledger.py
"""
版本账本的集成测试：编号规则、最终版本唯一性、当前版本指针与写权限。
"""

from datetime import timedelta

import pytest

from transflow.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from transflow.core.types import VersionType
from tests.helpers.factories import create_document, seed_drafts, start_translation

pytestmark = [pytest.mark.db, pytest.mark.integration]


@pytest.mark.asyncio
async def test_numbering_follows_version_type(coordinator, admin):
    doc = await create_document(coordinator, admin)
    numbers = []
    for vtype in (
        VersionType.ORIGINAL,
        VersionType.AI_DRAFT,
        VersionType.MANUAL_TRANSLATION,
        VersionType.MANUAL_TRANSLATION,
    ):
        version = await coordinator.create_version(doc.id, vtype, "text", actor=admin)
        numbers.append(version.version_number)
    assert numbers == [0, 1, 2, 3]

    listed = await coordinator.list_versions(doc.id)
    assert [v.version_number for v in listed] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_first_manual_translation_is_two(coordinator, admin):
    doc = await create_document(coordinator, admin)
    version = await coordinator.create_version(
        doc.id, VersionType.MANUAL_TRANSLATION, "text", actor=admin
    )
    assert version.version_number == 2


@pytest.mark.asyncio
async def test_final_reuses_highest_number(coordinator, admin):
    doc = await create_document(coordinator, admin)
    await seed_drafts(coordinator, doc.id, admin)
    manual = await coordinator.create_version(
        doc.id, "MANUAL_TRANSLATION", "draft", actor=admin
    )
    final = await coordinator.create_version(doc.id, "FINAL", "final text", actor=admin)
    assert final.version_number == manual.version_number == 2

    # 同号版本按最近创建解析
    by_number = await coordinator.get_version_by_number(doc.id, 2)
    assert by_number.id == final.id


@pytest.mark.asyncio
async def test_final_without_prior_versions_fails(coordinator, admin):
    doc = await create_document(coordinator, admin)
    with pytest.raises(InvalidStateError):
        await coordinator.create_version(doc.id, VersionType.FINAL, "x", actor=admin)
    assert await coordinator.list_versions(doc.id) == []


@pytest.mark.asyncio
async def test_unknown_type_and_missing_document(coordinator, admin):
    doc = await create_document(coordinator, admin)
    with pytest.raises(InvalidStateError):
        await coordinator.create_version(doc.id, "SUMMARY", "x", actor=admin)
    with pytest.raises(NotFoundError):
        await coordinator.create_version("missing", VersionType.ORIGINAL, "x", actor=admin)


@pytest.mark.asyncio
async def test_requested_final_moves_the_flag(coordinator, admin):
    doc = await create_document(coordinator, admin)
    first = await coordinator.create_version(
        doc.id, VersionType.ORIGINAL, "a", True, actor=admin
    )
    second = await coordinator.create_version(
        doc.id, VersionType.MANUAL_TRANSLATION, "b", True, actor=admin
    )
    versions = {v.id: v for v in await coordinator.list_versions(doc.id)}
    assert versions[first.id].is_final is False
    assert versions[second.id].is_final is True
    assert (await coordinator.get_final_version(doc.id)).id == second.id


@pytest.mark.asyncio
async def test_current_pointer_tracks_creation_and_can_be_moved(coordinator, admin):
    doc = await create_document(coordinator, admin)
    original, draft = await seed_drafts(coordinator, doc.id, admin)
    assert (await coordinator.get_document(doc.id)).current_version_id == draft.id
    assert (await coordinator.get_current_version(doc.id)).id == draft.id

    moved = await coordinator.set_current_version(doc.id, original.id, actor=admin)
    assert moved.id == original.id
    assert (await coordinator.get_current_version(doc.id)).id == original.id
    # 最新版本仍然是号码最大的那个
    assert (await coordinator.get_latest_version(doc.id)).id == draft.id
    # 指针移动不改变最终标记
    with pytest.raises(NotFoundError):
        await coordinator.get_final_version(doc.id)


@pytest.mark.asyncio
async def test_set_current_rejects_foreign_version(coordinator, admin):
    doc_a = await create_document(coordinator, admin, title="A")
    doc_b = await create_document(coordinator, admin, title="B")
    foreign = await coordinator.create_version(
        doc_b.id, VersionType.ORIGINAL, "b", actor=admin
    )
    with pytest.raises(InvalidStateError, match="不属于"):
        await coordinator.set_current_version(doc_a.id, foreign.id, actor=admin)
    with pytest.raises(NotFoundError):
        await coordinator.get_version(foreign.id, doc_a.id)


@pytest.mark.asyncio
async def test_reads_on_empty_document(coordinator, admin):
    doc = await create_document(coordinator, admin)
    with pytest.raises(NotFoundError):
        await coordinator.get_current_version(doc.id)
    with pytest.raises(NotFoundError):
        await coordinator.get_latest_version(doc.id)
    with pytest.raises(NotFoundError):
        await coordinator.get_version_by_number(doc.id, 0)
    with pytest.raises(NotFoundError):
        await coordinator.list_versions("missing")


@pytest.mark.asyncio
async def test_only_admin_or_active_translator_may_write(
    coordinator, admin, translator, translator_b
):
    doc = await create_document(coordinator, admin)
    await seed_drafts(coordinator, doc.id, admin)

    with pytest.raises(ForbiddenError):
        await coordinator.create_version(
            doc.id, VersionType.MANUAL_TRANSLATION, "x", actor=translator
        )

    # 任务尚未开始时同样不允许
    task = await coordinator.create_task(doc.id, actor=translator)
    with pytest.raises(ForbiddenError):
        await coordinator.create_version(
            doc.id, VersionType.MANUAL_TRANSLATION, "x", actor=translator
        )

    await coordinator.start_task(task.id, translator.id)
    version = await coordinator.create_version(
        doc.id, VersionType.MANUAL_TRANSLATION, "x", actor=translator
    )
    assert version.created_by == translator.id

    await start_translation(coordinator, doc.id, translator_b)
    other = await create_document(coordinator, admin, title="Other")
    with pytest.raises(ForbiddenError):
        await coordinator.create_version(
            other.id, VersionType.ORIGINAL, "x", actor=translator_b
        )


@pytest.mark.asyncio
async def test_timestamps_stay_utc_aware_after_reload(coordinator, admin):
    doc = await create_document(coordinator, admin)
    created = await coordinator.create_version(
        doc.id, VersionType.ORIGINAL, "source", actor=admin
    )
    reloaded = await coordinator.get_version(created.id)

    assert created.created_at.tzinfo is not None
    assert reloaded.created_at.utcoffset() == timedelta(0)
    assert reloaded.created_at == created.created_at

    document = await coordinator.get_document(doc.id)
    assert document.updated_at.utcoffset() == timedelta(0)
    assert document.updated_at >= document.created_at
