"""FastAPI routers acting as controllers in the MVC architecture."""

from . import notes

__all__ = ["notes"]
