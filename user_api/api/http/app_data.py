from dataclasses import dataclass

from user_api.core.services.database.db_session import DbSessionService
from user_api.core.services.user_service import UserService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    user_service: UserService
