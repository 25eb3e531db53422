from fitleague.database import database
from fitleague.models.db.user import User
from fitleague.utils.db import fetch_one_parsed
from fitleague.utils.id_types import UserId


async def get_user_by_id(user_id: UserId) -> User | None:
    return await fetch_one_parsed(
        database,
        User,
        "SELECT * FROM users WHERE id = :user_id",
        values={"user_id": user_id},
    )


async def get_user(email: str) -> User | None:
    return await fetch_one_parsed(
        database,
        User,
        "SELECT * FROM users WHERE email = :email",
        values={"email": email},
    )
