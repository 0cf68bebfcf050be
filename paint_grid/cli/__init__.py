"""Command line package exports."""
from .runner import app

__all__ = ["app"]
