"""
Business logic for users.

``UserService`` registers accounts and authenticates them.  Passwords
are stored as salted PBKDF2 hashes (see ``core.security``); successful
authentication yields a signed session token.  E-mail uniqueness is
not enforced.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from capsulify_api.app.core.config import settings
from capsulify_api.app.core.db import Database, run
from capsulify_api.app.core.errors import AuthenticationError, NotFoundError
from capsulify_api.app.core.security import hash_password, issue_session_token, verify_password


@lru_cache(maxsize=1)
def _placeholder_hash() -> str:
    # Verified against when the e-mail is unknown so both failure paths
    # cost one hash computation.
    return hash_password("placeholder-password")


class UserService:
    """Сервис для работы с пользователями.

    Хранит пользователей в коллекции ``users`` и выдаёт токены сессий.
    """

    def __init__(self, database: Database, uniform_errors: Optional[bool] = None) -> None:
        self.database = database
        self.uniform_errors = settings.uniform_login_errors if uniform_errors is None else uniform_errors

    async def register(self, email: str, password: str) -> Dict[str, Any]:
        """Create a new user and return the store's write acknowledgement."""
        logger = logging.getLogger(__name__)
        logger.info("Registering user %s", email)
        hashed = await run(hash_password, password)
        result = await run(self.database.users.insert_one, {"email": email, "password": hashed})
        return {"acknowledged": result.acknowledged, "inserted_id": str(result.inserted_id)}

    async def authenticate(self, email: str, password: str) -> str:
        """Check the credentials and return a new session token.

        Raises ``NotFoundError`` for an unknown e-mail (or
        ``AuthenticationError`` when uniform errors are enabled) and
        ``AuthenticationError`` for a wrong password.
        """
        logger = logging.getLogger(__name__)
        user = await run(self.database.users.find_one, {"email": email})
        if user is None:
            await run(verify_password, password, _placeholder_hash())
            logger.info("Login failed for %s: unknown user", email)
            if self.uniform_errors:
                raise AuthenticationError("Invalid credentials")
            raise NotFoundError("User not found")

        if not await run(verify_password, password, user.get("password") or ""):
            logger.info("Login failed for %s: invalid password", email)
            if self.uniform_errors:
                raise AuthenticationError("Invalid credentials")
            raise AuthenticationError("Invalid password")

        return issue_session_token(str(user["_id"]), user["email"])
