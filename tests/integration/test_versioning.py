"""
Жизненный цикл документа на уровне сервисов: публикация, восстановление,
подписи версий и нумерация при параллельных публикациях
"""
import asyncio
import uuid

import pytest

from jotter.core.errors import NotFoundError, ValidationError
from jotter.domains.documents.entities import DocumentStatus
from jotter.domains.documents.schemas import DocumentCreate, DocumentUpdate
from jotter.domains.documents.services import DocumentService, DocumentVersionService
from jotter.content import extract_text
from tests.factories import doc


async def _create(session_factory, owner, title="Draft", text="Hello world"):
    async with session_factory() as session:
        return await DocumentService(session).create_document(
            DocumentCreate(title=title, content=doc(text)), owner.uuid
        )


async def _update(session_factory, owner, document_id, text):
    async with session_factory() as session:
        return await DocumentService(session).update_document(
            document_id, DocumentUpdate(content=doc(text)), owner.uuid
        )


async def _publish(session_factory, owner, document_id):
    async with session_factory() as session:
        return await DocumentVersionService(session).publish(document_id, owner.uuid)


async def _versions(session_factory, owner, document_id):
    async with session_factory() as session:
        return await DocumentVersionService(session).list_versions(document_id, owner.uuid)


async def test_publish_scenario(session_factory, owner):
    document = await _create(session_factory, owner)

    published = await _publish(session_factory, owner, document.uuid)
    assert published.status is DocumentStatus.PUBLISHED
    assert published.published_content == doc("Hello world")

    versions = await _versions(session_factory, owner, document.uuid)
    assert [v.version_number for v in versions] == [1]
    assert versions[0].title == "Draft"
    assert versions[0].content == doc("Hello world")
    assert versions[0].created_by_name == "Olga Owner"

    await _update(session_factory, owner, document.uuid, "Hello there world")
    await _publish(session_factory, owner, document.uuid)

    versions = await _versions(session_factory, owner, document.uuid)
    assert [v.version_number for v in versions] == [2, 1]
    assert extract_text(versions[0].content) == "Hello there world"
    assert extract_text(versions[1].content) == "Hello world"


async def test_editing_draft_creates_no_version(session_factory, owner):
    document = await _create(session_factory, owner)
    await _update(session_factory, owner, document.uuid, "edited")

    assert await _versions(session_factory, owner, document.uuid) == []


async def test_version_numbers_strictly_increase(session_factory, owner):
    document = await _create(session_factory, owner)
    for _ in range(4):
        await _publish(session_factory, owner, document.uuid)

    numbers = [v.version_number for v in await _versions(session_factory, owner, document.uuid)]
    assert numbers == [4, 3, 2, 1]


async def test_concurrent_publishes_get_distinct_numbers(session_factory, owner):
    document = await _create(session_factory, owner)

    await asyncio.gather(
        _publish(session_factory, owner, document.uuid),
        _publish(session_factory, owner, document.uuid),
    )

    numbers = sorted(v.version_number for v in await _versions(session_factory, owner, document.uuid))
    assert numbers == [1, 2]


async def test_numbering_is_per_document(session_factory, owner):
    first = await _create(session_factory, owner, title="First")
    second = await _create(session_factory, owner, title="Second")

    await _publish(session_factory, owner, first.uuid)
    await _publish(session_factory, owner, first.uuid)
    await _publish(session_factory, owner, second.uuid)

    assert [v.version_number for v in await _versions(session_factory, owner, second.uuid)] == [1]


async def test_restore_is_non_destructive(session_factory, owner):
    document = await _create(session_factory, owner, text="original")
    await _publish(session_factory, owner, document.uuid)
    await _update(session_factory, owner, document.uuid, "rewritten")

    target = (await _versions(session_factory, owner, document.uuid))[0]

    async with session_factory() as session:
        restored = await DocumentVersionService(session).restore_version(
            document.uuid, target.uuid, owner.uuid
        )

    assert restored.content == doc("original")
    assert restored.status is DocumentStatus.PUBLISHED

    versions = await _versions(session_factory, owner, document.uuid)
    assert [v.version_number for v in versions] == [2, 1]
    assert versions[0].content == doc("rewritten")
    assert versions[1].content == doc("original")
    assert versions[1].uuid == target.uuid

    async with session_factory() as session:
        current = await DocumentService(session).get_document(document.uuid, owner.uuid)
    assert current.content == doc("original")


async def test_restore_rejects_version_of_another_document(session_factory, owner):
    first = await _create(session_factory, owner, title="First")
    second = await _create(session_factory, owner, title="Second")
    await _publish(session_factory, owner, second.uuid)
    foreign = (await _versions(session_factory, owner, second.uuid))[0]

    async with session_factory() as session:
        with pytest.raises(NotFoundError):
            await DocumentVersionService(session).restore_version(first.uuid, foreign.uuid, owner.uuid)

    assert await _versions(session_factory, owner, first.uuid) == []


async def test_unpublish(session_factory, owner):
    document = await _create(session_factory, owner)

    async with session_factory() as session:
        with pytest.raises(ValidationError):
            await DocumentVersionService(session).unpublish(document.uuid, owner.uuid)

    await _publish(session_factory, owner, document.uuid)
    async with session_factory() as session:
        unpublished = await DocumentVersionService(session).unpublish(document.uuid, owner.uuid)

    assert unpublished.status is DocumentStatus.DRAFT
    assert unpublished.published_content == doc("Hello world")
    assert len(await _versions(session_factory, owner, document.uuid)) == 1


async def test_annotate_version(session_factory, owner):
    document = await _create(session_factory, owner)
    await _publish(session_factory, owner, document.uuid)
    version = (await _versions(session_factory, owner, document.uuid))[0]

    async with session_factory() as session:
        annotated = await DocumentVersionService(session).annotate_version(
            document.uuid, version.uuid, "first cut", owner.uuid
        )
    assert annotated.annotation == "first cut"

    async with session_factory() as session:
        with pytest.raises(ValidationError):
            await DocumentVersionService(session).annotate_version(
                document.uuid, version.uuid, "x" * 501, owner.uuid
            )

    stored = (await _versions(session_factory, owner, document.uuid))[0]
    assert stored.annotation == "first cut"
    assert stored.content == version.content
    assert stored.version_number == 1


async def test_other_users_documents_are_not_found(session_factory, owner, stranger):
    document = await _create(session_factory, owner)

    async with session_factory() as session:
        service = DocumentVersionService(session)
        with pytest.raises(NotFoundError):
            await service.publish(document.uuid, stranger.uuid)
        with pytest.raises(NotFoundError):
            await service.list_versions(document.uuid, stranger.uuid)
        with pytest.raises(NotFoundError):
            await service.publish(uuid.uuid4(), owner.uuid)


async def test_compare_version_with_draft_and_other_version(session_factory, owner):
    document = await _create(session_factory, owner, text="Hello world")
    await _publish(session_factory, owner, document.uuid)
    await _update(session_factory, owner, document.uuid, "Hello there world")
    await _publish(session_factory, owner, document.uuid)
    await _update(session_factory, owner, document.uuid, "Goodbye world")

    v2, v1 = await _versions(session_factory, owner, document.uuid)

    async with session_factory() as session:
        service = DocumentVersionService(session)
        segments, summary = await service.compare_versions(document.uuid, v1.uuid, owner.uuid, against=v2.uuid)
        assert "".join(s.text for s in segments if s.type.value != "removed") == "Hello there world"
        assert summary["added"] == 1

        segments, _ = await service.compare_versions(document.uuid, v2.uuid, owner.uuid)
        assert "".join(s.text for s in segments if s.type.value != "added") == "Hello there world"
        assert "".join(s.text for s in segments if s.type.value != "removed") == "Goodbye world"


async def test_restore_brings_back_title(session_factory, owner):
    document = await _create(session_factory, owner, title="First title", text="original")
    await _publish(session_factory, owner, document.uuid)

    async with session_factory() as session:
        await DocumentService(session).update_document(
            document.uuid, DocumentUpdate(title="Second title", content=doc("rewritten")), owner.uuid
        )

    target = (await _versions(session_factory, owner, document.uuid))[0]
    async with session_factory() as session:
        restored = await DocumentVersionService(session).restore_version(
            document.uuid, target.uuid, owner.uuid
        )

    assert restored.title == target.title == "First title"

    backup, original = await _versions(session_factory, owner, document.uuid)
    assert backup.version_number == 2
    assert backup.title == "Second title"
    assert backup.content == doc("rewritten")
    assert original.title == "First title"


async def test_concurrent_restore_and_publish_get_consecutive_numbers(session_factory, owner):
    document = await _create(session_factory, owner)
    await _publish(session_factory, owner, document.uuid)
    target = (await _versions(session_factory, owner, document.uuid))[0]

    async def restore():
        async with session_factory() as session:
            return await DocumentVersionService(session).restore_version(
                document.uuid, target.uuid, owner.uuid
            )

    await asyncio.gather(restore(), _publish(session_factory, owner, document.uuid))

    numbers = sorted(v.version_number for v in await _versions(session_factory, owner, document.uuid))
    assert numbers == [1, 2, 3]
