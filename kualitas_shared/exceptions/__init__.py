from .base import DomainException, EmptyTableError, InvalidTableError, UnknownPresetError

__all__ = ["DomainException", "EmptyTableError", "InvalidTableError", "UnknownPresetError"]
