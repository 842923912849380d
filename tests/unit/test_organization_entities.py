import uuid

import pytest

from jotter.core.errors import ValidationError
from jotter.domains.organization.entities import Folder, Tag


class TestFolder:
    def test_move_to_self_is_rejected(self):
        folder = Folder.create_folder("Work", uuid.uuid4())

        with pytest.raises(ValidationError) as exc_info:
            folder.move_to(folder.uuid)

        assert exc_info.value.details == {"field": "parent_id"}
        assert folder.parent_id is None

    def test_move_to_root(self):
        parent = uuid.uuid4()
        folder = Folder.create_folder("Work", uuid.uuid4(), parent_id=parent)

        folder.move_to(None)

        assert folder.parent_id is None


class TestTag:
    def test_color_is_kept_unless_replaced(self):
        tag = Tag.create_tag("urgent", uuid.uuid4(), color="#ff0000")

        tag.update(name="later")
        assert (tag.name, tag.color) == ("later", "#ff0000")

        tag.update(color=None, replace_color=True)
        assert tag.color is None
