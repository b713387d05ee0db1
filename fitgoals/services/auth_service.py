"""Authentication service - credential store and login."""
import logging
from typing import Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from fitgoals.exceptions import DuplicateIdentity, InternalFailure, NotFound, Unauthorized
from fitgoals.models.common import utcnow
from fitgoals.models.user import User
from fitgoals.utils.auth import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Service for user credentials, login and profile lookups."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        """Convert a user document to the public User model (no hash)."""
        return User(
            _id=str(doc["_id"]),
            username=doc["username"],
            email=doc["email"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def find_by_email(self, email: str) -> Optional[dict]:
        """Return the user document with this email, or None."""
        return await self.users.find_one({"email": email.strip().lower()})

    async def find_by_id(self, user_id: str) -> Optional[dict]:
        """Return the user document with this id, or None (also for malformed ids)."""
        if not ObjectId.is_valid(user_id):
            return None
        return await self.users.find_one({"_id": ObjectId(user_id)})

    def verify_user_password(self, user_doc: dict, password: str) -> bool:
        """
        Compare a plain password against the user's stored hash.

        Returns:
            True on match, False otherwise

        Raises:
            InternalFailure: If the stored hash cannot be compared
        """
        try:
            return verify_password(password, user_doc["hashed_password"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Password comparison failed for user %s: %s", user_doc.get("_id"), e)
            raise InternalFailure("Password comparison failed")

    async def register_user(self, username: str, email: str, password: str) -> User:
        """
        Register a new user.

        Args:
            username: Unique username (already validated)
            email: Unique, normalized email (already validated)
            password: Plain text password

        Returns:
            User object (without password)

        Raises:
            DuplicateIdentity: If username or email is already taken
        """
        # Username conflicts are reported ahead of email conflicts
        if await self.users.find_one({"username": username}):
            raise DuplicateIdentity("Username already exists")
        if await self.users.find_one({"email": email}):
            raise DuplicateIdentity("Email already exists")

        now = utcnow()
        user_doc = {
            "username": username,
            "email": email,
            "hashed_password": hash_password(password),
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = await self.users.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race against a concurrent signup
            raise DuplicateIdentity("Username or email already exists")

        user_doc["_id"] = result.inserted_id
        logger.info("Registered user %s", user_doc["_id"])
        return self._doc_to_user(user_doc)

    async def login(self, email: str, password: str) -> str:
        """
        Login user and return JWT token.

        Raises:
            Unauthorized: If email is unknown or password is wrong
        """
        user_doc = await self.find_by_email(email)
        if not user_doc or not self.verify_user_password(user_doc, password):
            logger.warning("Failed login attempt")
            raise Unauthorized("Invalid credentials")

        return create_access_token(
            user_id=str(user_doc["_id"]),
            email=user_doc["email"],
            name=user_doc["username"],
        )

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            NotFound: If user does not exist
        """
        user_doc = await self.find_by_id(user_id)
        if not user_doc:
            raise NotFound("User not found")
        return self._doc_to_user(user_doc)

    async def change_password(
        self, user_id: str, current_password: str, new_password: str
    ) -> User:
        """
        Replace the user's password.

        The hash and ``updated_at`` are only rewritten when the new password
        differs from the current one.

        Raises:
            NotFound: If user does not exist
            Unauthorized: If current_password is wrong
        """
        user_doc = await self.find_by_id(user_id)
        if not user_doc:
            raise NotFound("User not found")

        if not self.verify_user_password(user_doc, current_password):
            raise Unauthorized("Invalid credentials")

        if self.verify_user_password(user_doc, new_password):
            return self._doc_to_user(user_doc)

        updated_doc = await self.users.find_one_and_update(
            {"_id": user_doc["_id"]},
            {"$set": {"hashed_password": hash_password(new_password), "updated_at": utcnow()}},
            return_document=True,
        )
        logger.info("Password changed for user %s", user_id)
        return self._doc_to_user(updated_doc)
