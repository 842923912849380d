import uuid

import pytest

from jotter.core.errors import ValidationError
from jotter.domains.documents.entities import Document, DocumentStatus, DocumentVersion
from tests.factories import doc


@pytest.fixture
def document() -> Document:
    return Document.create_document("Draft", uuid.uuid4(), doc("Hello world"))


class TestDocument:
    def test_new_document_is_draft(self, document):
        assert document.status is DocumentStatus.DRAFT
        assert document.published_content is None
        assert document.published_at is None

    def test_publish_freezes_a_copy(self, document):
        document.publish()
        document.content["content"].append({"type": "paragraph"})

        assert document.is_published
        assert document.published_at is not None
        assert document.published_content == doc("Hello world")

    def test_unpublish_keeps_published_content(self, document):
        document.publish()
        document.unpublish()

        assert document.status is DocumentStatus.DRAFT
        assert document.published_content == doc("Hello world")

    def test_unpublish_draft_is_rejected(self, document):
        with pytest.raises(ValidationError):
            document.unpublish()

    def test_update_without_content_keeps_content(self, document):
        document.update(title="Renamed")
        assert document.title == "Renamed"
        assert document.content == doc("Hello world")

        document.update(content=None, replace_content=True)
        assert document.content is None

    def test_snapshot_is_independent_copy(self, document):
        version = document.snapshot(1, document.user_id)
        document.content["content"].clear()

        assert version.version_number == 1
        assert version.title == "Draft"
        assert version.get_text() == "Hello world"

    def test_excerpt_and_word_count(self, document):
        document.update(content=doc("word " * 40), replace_content=True)
        assert document.get_word_count() == 40
        assert document.get_excerpt().endswith("...")
        assert len(document.get_excerpt()) <= 103


class TestDocumentVersion:
    def _version(self) -> DocumentVersion:
        return DocumentVersion.create_version(uuid.uuid4(), "T", doc("x"), 1, uuid.uuid4())

    def test_annotation_is_stripped(self):
        version = self._version()
        version.annotate("  before the rewrite  ")
        assert version.annotation == "before the rewrite"

    def test_blank_annotation_clears(self):
        version = self._version()
        version.annotate("note")
        version.annotate("   ")
        assert version.annotation is None

    def test_annotation_length_limit(self):
        version = self._version()
        version.annotate("a" * 500)
        with pytest.raises(ValidationError):
            version.annotate("a" * 501)
        assert version.annotation == "a" * 500
