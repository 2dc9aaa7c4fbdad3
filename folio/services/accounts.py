"""User accounts: registration, sign in and removal."""

import logging

from fastapi.concurrency import run_in_threadpool

from folio.db.store import CHARTS, POSTS, PROFILES, PROJECTS, USERS, DocumentStore
from folio.errors import Conflict, DuplicateKey, UserNotFound, ValidationFailed
from folio.models.documents import User
from folio.services.passwords import PasswordHasher
from folio.services.token_codec import TokenCodec
from folio.utils.gravatar import gravatar_url

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = [{"field": "credentials", "message": "Invalid Credentials"}]


class AccountService:
    """Register users, issue tokens and remove accounts."""

    def __init__(self, store: DocumentStore, token_codec: TokenCodec, hasher: PasswordHasher):
        self.store = store
        self.token_codec = token_codec
        self.hasher = hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """
        Create a user and sign them in.

        Args:
            name: Display name
            email: Email address, unique across users
            password: Plain text password

        Returns:
            str: Bearer token for the new user

        Raises:
            Conflict: If the email is already registered
        """
        if await self.store.find_one(USERS, {"email": email}) is not None:
            raise Conflict("User already exists")

        digest = await run_in_threadpool(self.hasher.hash, password)
        user = User(name=name, email=email, password=digest, avatar=gravatar_url(email))
        try:
            stored = await self.store.insert(USERS, user.model_dump())
        except DuplicateKey:
            # Another registration for the same email won the race
            raise Conflict("User already exists")
        logger.info("Registered user %s", stored["id"])
        return self.token_codec.issue(stored["id"])

    async def login(self, email: str, password: str) -> str:
        """
        Check credentials and issue a token.

        Unknown emails and wrong passwords fail the same way.

        Raises:
            ValidationFailed: If the credentials do not match
        """
        user = await self.store.find_one(USERS, {"email": email})
        if user is None:
            raise ValidationFailed(INVALID_CREDENTIALS)

        matches = await run_in_threadpool(self.hasher.verify, password, user["password"])
        if not matches:
            raise ValidationFailed(INVALID_CREDENTIALS)
        return self.token_codec.issue(user["id"])

    async def current_user(self, caller_id: str) -> dict:
        user = await self.store.find_by_id(USERS, caller_id)
        if user is None:
            raise UserNotFound()
        user.pop("password", None)
        return user

    async def delete_account(self, caller_id: str) -> None:
        """Remove the caller's profile, content and user record."""
        await self.store.find_one_and_remove(PROFILES, {"user": caller_id})
        removed_posts = await self.store.delete_many(POSTS, {"user": caller_id})
        removed_projects = await self.store.delete_many(PROJECTS, {"user": caller_id})
        await self.store.delete_many(CHARTS, {"user": caller_id})
        await self.store.find_one_and_remove(USERS, {"id": caller_id})
        logger.info(
            "Deleted user %s with %d posts and %d projects",
            caller_id,
            removed_posts,
            removed_projects,
        )
