"""
Stored document shapes.

Each model describes one record (or one embedded sub-collection entry) as
it is written to the document store. Services build these and persist
``model_dump(by_alias=True)``.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from folio.utils.identifiers import new_id, utcnow


class User(BaseModel):
    """Registered account."""

    name: str
    email: str = Field(..., description="Unique email")
    password: str = Field(..., description="bcrypt hash")
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    """Comment on a post or project. Name and avatar are a snapshot of the author."""

    id: str = Field(default_factory=new_id)
    user: str
    text: str
    name: str
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    title: str
    company: str
    location: Optional[str] = None
    from_: str = Field(..., alias="from")
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None


class EducationEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    school: str
    degree: str
    fieldofstudy: str
    from_: str = Field(..., alias="from")
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None


class Profile(BaseModel):
    """User profile. Unknown top-level fields supplied by the owner are kept."""

    model_config = ConfigDict(extra="allow")

    user: str = Field(..., description="Owning user id, set once")
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social: Dict[str, Optional[str]] = Field(default_factory=dict)
    experience: List[dict] = Field(default_factory=list)
    education: List[dict] = Field(default_factory=list)
    date: datetime = Field(default_factory=utcnow)


class Post(BaseModel):
    user: str
    name: str
    avatar: Optional[str] = None
    text: str
    likes: List[dict] = Field(default_factory=list)
    comments: List[dict] = Field(default_factory=list)
    date: datetime = Field(default_factory=utcnow)


class Project(BaseModel):
    user: str
    name: str
    avatar: Optional[str] = None
    title: str
    description: str
    likes: List[dict] = Field(default_factory=list)
    comments: List[dict] = Field(default_factory=list)
    date: datetime = Field(default_factory=utcnow)


class Chart(BaseModel):
    user: str
    chartName: str
    chartType: Optional[str] = None
    createdBy: Optional[str] = None
    chartId: str
    dateCreated: datetime = Field(default_factory=utcnow)
