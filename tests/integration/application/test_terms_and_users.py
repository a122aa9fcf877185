# tests/integration/application/test_terms_and_users.py
"""
术语表、用户目录与身份提供者的集成测试。
"""

import pytest

from transflow.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from transflow.core.types import DocumentStatus, PermissionLevel, Principal
from tests.helpers.factories import create_document

pytestmark = [pytest.mark.db, pytest.mark.integration]


@pytest.fixture
def term_fields():
    return {
        "source_term": "workflow",
        "target_term": "工作流",
        "source_lang": "en",
        "target_lang": "zh-CN",
    }


class TestTermDictionary:
    @pytest.mark.asyncio
    async def test_create_lookup_and_conflict(self, coordinator, admin, term_fields):
        term = await coordinator.create_term(admin, **term_fields, description="流程")
        assert term.created_by == admin.id

        found = await coordinator.lookup_term("workflow", "en", "zh-CN")
        assert found.id == term.id
        with pytest.raises(NotFoundError):
            await coordinator.lookup_term("workflow", "en", "fr")

        with pytest.raises(ConflictError):
            await coordinator.create_term(admin, **term_fields)

    @pytest.mark.asyncio
    async def test_update_and_rename_clash(self, coordinator, admin, term_fields):
        term = await coordinator.create_term(admin, **term_fields)
        other = await coordinator.create_term(
            admin, **{**term_fields, "source_term": "pipeline", "target_term": "流水线"}
        )

        updated = await coordinator.update_term(admin, term.id, target_term="工作流程")
        assert updated.target_term == "工作流程"
        assert updated.source_term == "workflow"

        with pytest.raises(ConflictError):
            await coordinator.update_term(admin, other.id, source_term="workflow")

    @pytest.mark.asyncio
    async def test_delete_and_list(self, coordinator, admin, translator, term_fields):
        term = await coordinator.create_term(admin, **term_fields)
        await coordinator.create_term(admin, **{**term_fields, "target_lang": "ja"})
        assert len(await coordinator.list_terms(source_lang="en")) == 2
        assert len(await coordinator.list_terms(target_lang="ja")) == 1

        with pytest.raises(ForbiddenError):
            await coordinator.delete_term(translator, term.id)
        await coordinator.delete_term(admin, term.id)
        with pytest.raises(NotFoundError):
            await coordinator.get_term(term.id)
        with pytest.raises(NotFoundError):
            await coordinator.delete_term(admin, term.id)


class TestUserDirectory:
    @pytest.mark.asyncio
    async def test_register_issues_token_for_identity(self, app_container, coordinator):
        user, token = await coordinator.register_user(
            "carol@example.com", "Carol", PermissionLevel.CONTRIBUTOR
        )
        provider = app_container.persistence.identity_provider()
        principal = await provider.authenticate(token)
        assert principal == Principal(id=user.id, level=PermissionLevel.CONTRIBUTOR)

        with pytest.raises(AuthenticationError):
            await provider.authenticate("not-a-token")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, coordinator, translator):
        with pytest.raises(ConflictError):
            await coordinator.register_user(
                "alice@example.com", "Alice", PermissionLevel.CONTRIBUTOR
            )

    @pytest.mark.asyncio
    async def test_change_role_by_id_and_email(self, coordinator, admin, translator):
        promoted = await coordinator.change_role(
            admin, PermissionLevel.ADMIN, user_id=translator.id
        )
        assert promoted.permission_level is PermissionLevel.ADMIN

        demoted = await coordinator.change_role(
            admin, PermissionLevel.CONTRIBUTOR, email="alice@example.com"
        )
        assert demoted.permission_level is PermissionLevel.CONTRIBUTOR

        with pytest.raises(NotFoundError):
            await coordinator.change_role(
                admin, PermissionLevel.ADMIN, email="nobody@example.com"
            )

    @pytest.mark.asyncio
    async def test_promoted_user_gains_admin_actions(self, coordinator, admin):
        user, token = await coordinator.register_user(
            "dave@example.com", "Dave", PermissionLevel.CONTRIBUTOR
        )
        before = Principal(id=user.id, level=user.permission_level)
        with pytest.raises(ForbiddenError):
            await create_document(coordinator, before)

        await coordinator.change_role(admin, PermissionLevel.SUPER_ADMIN, user_id=user.id)
        after = Principal(id=user.id, level=PermissionLevel.SUPER_ADMIN)
        doc = await create_document(coordinator, after)
        assert doc.status is DocumentStatus.DRAFT


class TestDocumentLifecycle:
    @pytest.mark.asyncio
    async def test_default_languages_from_config(self, coordinator, admin):
        doc = await coordinator.create_document(
            admin, title="Defaults", original_url="https://example.com/d"
        )
        assert (doc.source_lang, doc.target_lang) == ("en", "zh-CN")

    @pytest.mark.asyncio
    async def test_update_metadata_and_filters(self, coordinator, admin):
        doc = await create_document(coordinator, admin, category_id="guides")
        await create_document(coordinator, admin, title="Other")

        updated = await coordinator.update_document(
            admin, doc.id, title="Renamed", estimated_length=1200, category_id=None
        )
        assert updated.title == "Renamed"
        assert updated.estimated_length == 1200
        assert updated.category_id == "guides"
        assert updated.last_modified_by == admin.id
        assert updated.status is DocumentStatus.DRAFT

        assert [d.id for d in await coordinator.list_documents(category_id="guides")] == [
            doc.id
        ]
        assert len(await coordinator.list_documents(status=DocumentStatus.DRAFT)) == 2
        assert len(await coordinator.list_documents(created_by=admin.id)) == 2

    @pytest.mark.asyncio
    async def test_missing_document(self, coordinator, admin):
        with pytest.raises(NotFoundError):
            await coordinator.get_document("missing")
        with pytest.raises(NotFoundError):
            await coordinator.update_document(admin, "missing", title="x")
