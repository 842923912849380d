from jotter.domains.organization.entities import Folder, Tag

__all__ = ["Folder", "Tag"]
