from .interface import ITextSource, SourceError
from .keyboard import KeyboardSource
from .text import ArgumentSource, FileSource, StringSource

__all__ = [
    "ArgumentSource",
    "FileSource",
    "ITextSource",
    "KeyboardSource",
    "SourceError",
    "StringSource",
]
