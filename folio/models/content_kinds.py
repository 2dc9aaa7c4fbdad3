"""Content kinds sharing the like/comment machinery."""

from dataclasses import dataclass
from typing import Type
from pydantic import BaseModel

from folio.db.store import POSTS, PROJECTS
from folio.errors import NotFound, PostNotFound, ProjectNotFound
from folio.models.documents import Post, Project


@dataclass(frozen=True)
class ContentKind:
    """Describes one kind of likeable, commentable content item."""

    collection: str
    label: str
    not_found: Type[NotFound]
    document: Type[BaseModel]


POST = ContentKind(collection=POSTS, label="Post", not_found=PostNotFound, document=Post)
PROJECT = ContentKind(collection=PROJECTS, label="Project", not_found=ProjectNotFound, document=Project)
