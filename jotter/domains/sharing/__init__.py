from jotter.domains.sharing.entities import Share, Comment

__all__ = ["Share", "Comment"]
