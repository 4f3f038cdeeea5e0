"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, NoteFactory
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import NoteFactory, ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Models
    "NoteFactory",
    "ProjectFactory",
]
