"""Profile reconciler.

Merges partial profile input into the caller's stored profile and manages
the experience and education sub-collections.

Upsert uses patch semantics: keys present in the input overwrite the
stored value, keys absent from the input keep their stored value. The
``social`` links are rebuilt from each request and replaced as one unit.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Type

from pydantic import BaseModel

from folio.db.store import PROFILES, USERS, DocumentStore
from folio.errors import DuplicateKey, EducationNotFound, ExperienceNotFound, NotFound, ProfileNotFound
from folio.models.documents import EducationEntry, ExperienceEntry, Profile
from folio.services.subcollection import SubCollection

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("status", "company", "website", "location", "bio", "githubusername")
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "instagram", "linkedin")
# Never taken from client input
RESERVED_FIELDS = ("id", "_id", "user", "social", "experience", "education", "date", "version")


@dataclass(frozen=True)
class ProfileSection:
    """An ordered sub-collection of a profile."""

    field: str
    entry: Type[BaseModel]
    not_found: Type[NotFound]


EXPERIENCE = ProfileSection("experience", ExperienceEntry, ExperienceNotFound)
EDUCATION = ProfileSection("education", EducationEntry, EducationNotFound)


def split_skills(skills: str) -> List[str]:
    """Split a comma separated skills string, trimming each piece."""
    return [skill.strip() for skill in skills.split(",")]


def _is_plain_key(key: str) -> bool:
    """Dotted and $-prefixed keys would be read by the store as paths or operators."""
    return bool(key) and "." not in key and not key.startswith("$")


def build_profile_fields(caller_id: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the profile fields to store from raw request input.

    Args:
        caller_id: Owning user id
        raw: Fields present in the request

    Returns:
        Dict[str, Any]: Fields with ``user`` and ``social`` always set
    """
    fields: Dict[str, Any] = {"user": caller_id, "social": {}}
    for key, value in raw.items():
        if key in SCALAR_FIELDS:
            fields[key] = value
        elif key == "skills":
            fields["skills"] = split_skills(value)
        elif key in SOCIAL_FIELDS:
            fields["social"][key] = value
        elif key in RESERVED_FIELDS or not _is_plain_key(key):
            logger.debug("Ignoring profile field %s", key)
        else:
            fields[key] = value
    return fields


class ProfileReconciler:
    """Create, update, read and edit user profiles."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def upsert(self, caller_id: str, raw: Dict[str, Any]) -> dict:
        """
        Create the caller's profile, or patch it if it already exists.

        Args:
            caller_id: Authenticated user id
            raw: Fields present in the request

        Returns:
            dict: The stored profile
        """
        fields = build_profile_fields(caller_id, raw)

        existing = await self.store.find_one(PROFILES, {"user": caller_id})
        if existing is not None:
            # The owner reference is set once, on creation
            fields.pop("user")
            profile = await self.store.find_one_and_update(PROFILES, {"user": caller_id}, fields)
            if profile is not None:
                logger.info("Updated profile %s for user %s", profile["id"], caller_id)
                return profile

        try:
            profile = await self.store.insert(PROFILES, Profile(**fields).model_dump())
        except DuplicateKey:
            # A concurrent upsert created the profile first
            fields.pop("user")
            profile = await self.store.find_one_and_update(PROFILES, {"user": caller_id}, fields)
            if profile is None:
                raise
            logger.info("Updated profile %s for user %s", profile["id"], caller_id)
            return profile
        logger.info("Created profile %s for user %s", profile["id"], caller_id)
        return profile

    async def _owned_profile(self, caller_id: str) -> dict:
        profile = await self.store.find_one(PROFILES, {"user": caller_id})
        if profile is None:
            raise ProfileNotFound()
        return profile

    async def _populate(self, profile: dict) -> dict:
        """Join the owner's name and avatar into the profile."""
        owner = await self.store.find_by_id(USERS, profile["user"]) or {}
        populated = dict(profile)
        populated["user"] = {
            "id": profile["user"],
            "name": owner.get("name"),
            "avatar": owner.get("avatar"),
        }
        return populated

    async def get_mine(self, caller_id: str) -> dict:
        return await self._populate(await self._owned_profile(caller_id))

    async def get_by_user(self, user_id: str) -> dict:
        """
        Fetch a profile by its owner.

        Raises:
            ProfileNotFound: For unknown or malformed user ids
        """
        profile = await self.store.find_one(PROFILES, {"user": user_id})
        if profile is None:
            raise ProfileNotFound()
        return await self._populate(profile)

    async def list_all(self) -> List[dict]:
        profiles = await self.store.find(PROFILES)
        return [await self._populate(profile) for profile in profiles]

    async def add_entry(self, caller_id: str, section: ProfileSection, fields: Dict[str, Any]) -> dict:
        """
        Add an entry at the front of a profile section.

        Raises:
            ProfileNotFound: If the caller has no profile yet
        """
        profile = await self._owned_profile(caller_id)
        entry = section.entry(**fields).model_dump(by_alias=True)
        SubCollection(profile, section.field, not_found=section.not_found).prepend(entry)
        profile = await self.store.save(PROFILES, profile)
        logger.info("Added %s %s for user %s", section.field, entry["id"], caller_id)
        return profile

    async def update_entry(
        self,
        caller_id: str,
        section: ProfileSection,
        entry_id: str,
        fields: Dict[str, Any]
    ) -> dict:
        profile = await self._owned_profile(caller_id)
        SubCollection(profile, section.field, not_found=section.not_found).update(entry_id, fields)
        return await self.store.save(PROFILES, profile)

    async def remove_entry(self, caller_id: str, section: ProfileSection, entry_id: str) -> dict:
        """
        Remove an entry from a profile section by its id.

        Raises:
            ProfileNotFound: If the caller has no profile
            NotFound: The section's not-found error if no entry has that id
        """
        profile = await self._owned_profile(caller_id)
        SubCollection(profile, section.field, not_found=section.not_found).remove(entry_id)
        profile = await self.store.save(PROFILES, profile)
        logger.info("Removed %s %s for user %s", section.field, entry_id, caller_id)
        return profile

    async def add_experience(self, caller_id: str, fields: Dict[str, Any]) -> dict:
        return await self.add_entry(caller_id, EXPERIENCE, fields)

    async def update_experience(self, caller_id: str, entry_id: str, fields: Dict[str, Any]) -> dict:
        return await self.update_entry(caller_id, EXPERIENCE, entry_id, fields)

    async def remove_experience(self, caller_id: str, entry_id: str) -> dict:
        return await self.remove_entry(caller_id, EXPERIENCE, entry_id)

    async def add_education(self, caller_id: str, fields: Dict[str, Any]) -> dict:
        return await self.add_entry(caller_id, EDUCATION, fields)

    async def update_education(self, caller_id: str, entry_id: str, fields: Dict[str, Any]) -> dict:
        return await self.update_entry(caller_id, EDUCATION, entry_id, fields)

    async def remove_education(self, caller_id: str, entry_id: str) -> dict:
        return await self.remove_entry(caller_id, EDUCATION, entry_id)
