"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.
"""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_core.domain.entities import User
from account_core.domain.enums import AccountState, UserRole
from account_core.domain.errors import DuplicateRecordError, StaleRecordError
from account_core.infrastructure.persistence.base import as_utc
from account_core.infrastructure.persistence.models.user import UserModel


def duplicate_from_integrity_error(error: IntegrityError) -> DuplicateRecordError:
    """Name the unique users column a rejected write collided on."""
    detail = str(error.orig)
    if "pending_email" in detail:
        return DuplicateRecordError("pending_email")
    return DuplicateRecordError("email")


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Does not commit: the owning SqlAlchemyAccountStore decides when the
    unit of work becomes durable.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.unit_of_work() as store:
        ...     user = await store.users.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            Domain User entity if found, None otherwise.
        """
        return await self._find_one(UserModel.id == user_id)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by primary email (stored normalized, exact match)."""
        return await self._find_one(UserModel.email == email)

    async def find_by_pending_email(self, email: str) -> User | None:
        """Find user whose pending email equals email."""
        return await self._find_one(UserModel.pending_email == email)

    async def save(self, user: User) -> None:
        """Insert a new user row.

        Raises:
            DuplicateRecordError: If email or pending_email is taken.
        """
        self.session.add(self._to_model(user))
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise duplicate_from_integrity_error(e) from e

    async def update(self, user: User) -> None:
        """Write user back if the stored version still matches.

        Raises:
            StaleRecordError: If another writer updated the row first.
            DuplicateRecordError: If email or pending_email collides.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id, UserModel.version == user.version)
            .values(
                email=user.email,
                password_hash=user.password_hash,
                state=user.state.value,
                roles=sorted(role.value for role in user.roles),
                pending_email=user.pending_email,
                display_name=user.display_name,
                updated_at=user.updated_at,
                version=user.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as e:
            raise duplicate_from_integrity_error(e) from e

        if result.rowcount != 1:
            raise StaleRecordError(f"User {user.id} changed since it was read")
        user.version += 1

    async def _find_one(self, criterion) -> User | None:
        stmt = (
            select(UserModel)
            .where(criterion)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    @staticmethod
    def _to_domain(user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            state=AccountState(user_model.state),
            roles={UserRole(role) for role in user_model.roles},
            pending_email=user_model.pending_email,
            display_name=user_model.display_name,
            version=user_model.version,
            created_at=as_utc(user_model.created_at),
            updated_at=as_utc(user_model.updated_at),
        )

    @staticmethod
    def _to_model(user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            state=user.state.value,
            roles=sorted(role.value for role in user.roles),
            pending_email=user.pending_email,
            display_name=user.display_name,
            version=user.version,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
