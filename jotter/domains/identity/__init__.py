from jotter.domains.identity.entities import User

__all__ = ["User"]
