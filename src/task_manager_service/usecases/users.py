"""User registration, login and promotion."""

from __future__ import annotations

import structlog

from task_manager_service.auth.jwt import TokenService
from task_manager_service.auth.passwords import PasswordHasher
from task_manager_service.domain.errors import AppError, ErrorKind
from task_manager_service.domain.models import ROLE_ADMIN, ROLE_USER, User
from task_manager_service.domain.repositories import UserRepository

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "invalid username or password"


class UserUsecase:
    def __init__(
        self,
        repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._repo = repo
        self._hasher = hasher
        self._tokens = tokens

    async def register(self, username: str, password: str) -> User:
        """
        Create a user with a hashed password.

        The first user ever registered (an empty user store) becomes the
        admin; everyone after that starts as a regular user. The count and
        the insert are separate store calls, so two registrations racing on
        an empty store can both become admin.
        """
        if not username or not password:
            raise AppError.bad_request("username and password are required")

        try:
            await self._repo.find_by_username(username)
        except AppError as exc:
            if exc.kind is not ErrorKind.NOT_FOUND:
                raise
        else:
            raise AppError.bad_request("username already exists")

        try:
            password_hash = self._hasher.hash(password)
        except Exception as exc:
            logger.error("password_hash_failed", error=str(exc))
            raise AppError.internal("error hashing password") from exc

        count = await self._repo.count_users()
        role = ROLE_ADMIN if count == 0 else ROLE_USER

        user = await self._repo.create_user(
            User(username=username, password_hash=password_hash, role=role)
        )
        if role == ROLE_ADMIN:
            logger.info("bootstrap_admin_assigned", username=username)
        logger.info("user_registered", username=username, role=role)
        return user

    async def login(self, username: str, password: str) -> str:
        """Verify credentials and return a signed token carrying the user's current role."""
        try:
            user = await self._repo.find_by_username(username)
        except AppError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                logger.info("login_failed", username=username)
                raise AppError.bad_request(INVALID_CREDENTIALS) from exc
            raise AppError.internal("error authenticating user") from exc

        if not self._hasher.verify(password, user.password_hash):
            logger.info("login_failed", username=username)
            raise AppError.bad_request(INVALID_CREDENTIALS)

        try:
            return self._tokens.generate_token(user.username, user.role)
        except Exception as exc:
            raise AppError.internal("error generating token") from exc

    async def promote_user(self, username: str) -> User:
        """Grant the admin role. Callers are expected to have been authorized already."""
        user = await self._repo.find_by_username(username)
        if user.role == ROLE_ADMIN:
            raise AppError.bad_request("user is already an admin")

        user.role = ROLE_ADMIN
        await self._repo.update_user(user.id, user)
        logger.info("user_promoted", username=username)
        return user
