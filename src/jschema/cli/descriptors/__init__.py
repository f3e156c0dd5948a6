# cli/descriptors/__init__.py
from .tools import register, list_descriptors, show_descriptor

__all__ = ["register", "list_descriptors", "show_descriptor"]
