from portfolio.models.base import Base
from portfolio.models.content_entry import ContentEntry

__all__ = [
    "Base",
    "ContentEntry",
]
