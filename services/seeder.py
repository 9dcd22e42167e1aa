# services/seeder.py
from __future__ import annotations
from typing import Iterable, Tuple

from tortoise.transactions import in_transaction

from models import Profile, User
from services import config
from services.security import hash_password


async def seed_users_if_empty(
    users: Iterable[Tuple[str, str, str]] = config.SEED_USERS,
    logger=print,
) -> int:
    count = await User.all().count()
    logger(f"[seed] counts => users={count}")
    if count:
        logger("[seed] already populated - skipping.")
        return 0

    created = 0
    async with in_transaction():
        for username, password, profile in users:
            try:
                prof = Profile(profile)
            except ValueError:
                logger(f"[seed] skipping {username}: unknown profile {profile!r}")
                continue
            await User.create(
                username=username,
                hashed_password=hash_password(password),
                profile=prof,
            )
            created += 1
    logger(f"[seed] users created={created}")
    return created
