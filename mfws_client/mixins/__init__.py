"""Mixin classes for MFWSClient and AsyncMFWSClient."""

from .authentication import AuthenticationMixin
from .objects import ObjectsMixin
from .properties import PropertiesMixin
from .search import SearchMixin
from .structure import StructureMixin
from .valuelists import ValueListItemsMixin
from .workflows import WorkflowsMixin

__all__ = [
    "AuthenticationMixin",
    "ObjectsMixin",
    "PropertiesMixin",
    "SearchMixin",
    "StructureMixin",
    "ValueListItemsMixin",
    "WorkflowsMixin",
]
