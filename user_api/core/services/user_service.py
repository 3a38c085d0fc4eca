from user_api.api.utils.app_startup import get_logger
from user_api.core.services.database.db_session import DbSessionService
from user_api.entities.user import (
    CreateUserRequest,
    GetUsersQuery,
    UpdateUserRequest,
    User,
    UserPage,
    UserRepository,
    UserTable,
)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

log = get_logger("user_service")


class UserNotFoundError(LookupError):
    """Raised when no active user exists for the requested id."""

    def __init__(self, user_id: int):
        super().__init__("record not found")
        self.user_id = user_id


class UserService:
    """Business operations on users.

    Every call runs in its own unit of work; storage errors propagate to the
    caller unchanged after the transaction is rolled back.
    """

    def __init__(self, database_service: DbSessionService):
        self._database = database_service

    def create_user(self, request: CreateUserRequest) -> User:
        row = UserTable(
            name=request.name,
            email=request.email,
            age=request.age,
            phone=request.phone,
        )
        with self._database.session_scope() as session:
            created = UserRepository(session).create(row)
            user = User.model_validate(created)

        log.bind(user_id=user.id).info("User created")
        return user

    def get_user(self, user_id: int) -> User:
        with self._database.session_scope() as session:
            row = UserRepository(session).get(user_id)
            user = User.model_validate(row) if row is not None else None

        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list_users(self, query: GetUsersQuery) -> UserPage:
        """Return one page of active users matching the name/email filters.

        Missing or non-positive paging values fall back to page 1 of 10.
        """
        page = query.page if query.page and query.page > 0 else DEFAULT_PAGE
        page_size = (
            query.page_size
            if query.page_size and query.page_size > 0
            else DEFAULT_PAGE_SIZE
        )

        with self._database.session_scope() as session:
            repo = UserRepository(session)
            total = repo.count(name=query.name, email=query.email)
            rows = repo.search(
                name=query.name,
                email=query.email,
                offset=(page - 1) * page_size,
                limit=page_size,
            )
            users = [User.model_validate(row) for row in rows]

        return UserPage(users=users, total=total, page=page, page_size=page_size)

    def update_user(self, user_id: int, request: UpdateUserRequest) -> User:
        changes = request.changes()

        with self._database.session_scope() as session:
            repo = UserRepository(session)
            row = repo.get(user_id)
            if row is not None:
                user = User.model_validate(repo.update(row, changes))

        if row is None:
            raise UserNotFoundError(user_id)

        log.bind(user_id=user_id, fields=sorted(changes)).info("User updated")
        return user

    def delete_user(self, user_id: int) -> None:
        """Soft-delete a user. Unknown or already deleted ids are a no-op."""
        with self._database.session_scope() as session:
            deleted = UserRepository(session).soft_delete(user_id)

        if deleted:
            log.bind(user_id=user_id).info("User deleted")
        else:
            log.bind(user_id=user_id).debug("Delete matched no active user")
