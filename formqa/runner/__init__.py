from .tags import TagExpression

__all__ = ["TagExpression"]
