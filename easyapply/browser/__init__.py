"""Browser access: CDP connection to the user's Chrome."""
from .connection import BrowserConnection

__all__ = ["BrowserConnection"]
