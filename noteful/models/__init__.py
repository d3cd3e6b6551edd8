# Models package init
"""
Noteful API — ORM Models
========================

Importing this package registers every table on `Base.metadata`, which
Alembic's env.py and the test suite's create_all() both depend on.

Model Inventory:
    - User:   account with unique username and bcrypt password digest
    - Folder: named container owned by a user
    - Tag:    label owned by a user
    - Note:   title/content owned by a user, optionally in one folder,
              linked to tags through the `note_tags` association table
"""

from noteful.models.folder import Folder
from noteful.models.note import Note, note_tags
from noteful.models.tag import Tag
from noteful.models.user import User

__all__ = ["Folder", "Note", "Tag", "User", "note_tags"]
