from .console import ConsoleBackend
from .file import FileBackend

__all__ = ['ConsoleBackend', 'FileBackend']
