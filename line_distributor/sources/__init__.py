from .base import LineSource
from .file import FileLineSource, STDIN_NAME

__all__ = ["LineSource", "FileLineSource", "STDIN_NAME"]
