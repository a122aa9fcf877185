# tests/integration/persistence/test_repositories.py
"""
直接通过工作单元测试仓库与数据库约束：提交/回滚语义、唯一性约束与单一最终版本索引。
"""

import pytest

from transflow.core.exceptions import ConflictError, NotFoundError
from transflow.core.types import DocumentStatus, PermissionLevel, VersionType

pytestmark = [pytest.mark.db, pytest.mark.integration]


async def _seed_user(uow_factory, email="owner@example.com") -> str:
    async with uow_factory() as uow:
        user = await uow.users.add(
            email=email, name="owner", permission_level=PermissionLevel.ADMIN
        )
    return user.id


async def _seed_document(uow_factory, user_id: str) -> str:
    async with uow_factory() as uow:
        doc = await uow.documents.add(
            title="Doc",
            original_url="https://example.com/doc",
            source_lang="en",
            target_lang="de",
            created_by=user_id,
        )
    return doc.id


@pytest.mark.asyncio
async def test_new_document_starts_in_draft(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)
    async with uow_factory() as uow:
        doc = await uow.documents.get(doc_id)
    assert doc.status is DocumentStatus.DRAFT
    assert doc.current_version_id is None
    assert doc.created_at is not None


@pytest.mark.asyncio
async def test_exception_rolls_back_the_whole_unit(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)

    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await uow.documents.set_status(doc_id, DocumentStatus.PUBLISHED)
            await uow.documents.update(doc_id, title="changed")
            raise RuntimeError("中途失败")

    async with uow_factory() as uow:
        doc = await uow.documents.get(doc_id)
    assert doc.status is DocumentStatus.DRAFT
    assert doc.title == "Doc"


@pytest.mark.asyncio
async def test_document_update_refuses_status(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)
    with pytest.raises(ValueError):
        async with uow_factory() as uow:
            await uow.documents.update(doc_id, status=DocumentStatus.PUBLISHED)


@pytest.mark.asyncio
async def test_missing_row_update_is_not_found(uow_factory):
    with pytest.raises(NotFoundError):
        async with uow_factory() as uow:
            await uow.tasks.update("no-such-task", last_activity_at=None)


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(uow_factory):
    await _seed_user(uow_factory, "dup@example.com")
    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await uow.users.add(
                email="dup@example.com",
                name="again",
                permission_level=PermissionLevel.CONTRIBUTOR,
            )


@pytest.mark.asyncio
async def test_duplicate_task_pair_is_rejected_by_database(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)
    async with uow_factory() as uow:
        await uow.tasks.add(document_id=doc_id, translator_id=user_id, assigned_by=None)
    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await uow.tasks.add(
                document_id=doc_id, translator_id=user_id, assigned_by=None
            )


@pytest.mark.asyncio
async def test_second_final_version_violates_partial_index(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)
    common = {"document_id": doc_id, "content": "x", "created_by": user_id}
    async with uow_factory() as uow:
        await uow.versions.add(
            version_number=0, version_type=VersionType.ORIGINAL, is_final=True, **common
        )
    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await uow.versions.add(
                version_number=2,
                version_type=VersionType.MANUAL_TRANSLATION,
                is_final=True,
                **common,
            )


@pytest.mark.asyncio
async def test_clear_final_then_mark_final(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)
    common = {"document_id": doc_id, "content": "x", "created_by": user_id}
    async with uow_factory() as uow:
        first = await uow.versions.add(
            version_number=0, version_type=VersionType.ORIGINAL, is_final=True, **common
        )
        second = await uow.versions.add(
            version_number=1, version_type=VersionType.AI_DRAFT, is_final=False, **common
        )
        assert await uow.versions.clear_final(doc_id) == 1
        await uow.versions.mark_final(second.id)

    async with uow_factory() as uow:
        final = await uow.versions.get_final(doc_id)
        old = await uow.versions.get(first.id)
    assert final.id == second.id
    assert old.is_final is False


@pytest.mark.asyncio
async def test_foreign_keys_are_enforced(uow_factory):
    # 外键违反与唯一约束同属 IntegrityError，在 flush 时统一报告为冲突
    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await uow.documents.add(
                title="orphan",
                original_url="https://example.com",
                source_lang="en",
                target_lang="fr",
                created_by="nobody",
            )


@pytest.mark.asyncio
async def test_review_checklist_round_trips(uow_factory):
    user_id = await _seed_user(uow_factory)
    doc_id = await _seed_document(uow_factory, user_id)
    async with uow_factory() as uow:
        version = await uow.versions.add(
            document_id=doc_id,
            version_number=0,
            version_type=VersionType.ORIGINAL,
            content="x",
            is_final=False,
            created_by=user_id,
        )
        review = await uow.reviews.add(
            document_id=doc_id,
            document_version_id=version.id,
            reviewer_id=user_id,
            comment=None,
            checklist={"terminology": True, "style": False},
            is_complete=False,
        )
    async with uow_factory() as uow:
        await uow.reviews.update(review.id, checklist={"terminology": True, "style": True})
    async with uow_factory() as uow:
        stored = await uow.reviews.get(review.id)
    assert stored.checklist == {"terminology": True, "style": True}
