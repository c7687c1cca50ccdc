import argparse
import asyncio
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from localconnect.auth import encode_access_token
from localconnect.database import close_mongo_connection, connect_to_mongo, ensure_indexes, get_database
from localconnect.models.business import Business
from localconnect.models.offer import Category
from localconnect.models.user import User, UserRole
from localconnect.repositories.store import Store

DEMO_USERS = [
    ("Demo Admin", "admin@localconnect.dev", UserRole.ADMIN),
    ("Demo Owner", "owner@localconnect.dev", UserRole.BUSINESS_OWNER),
    ("Demo Customer", "customer@localconnect.dev", UserRole.CUSTOMER),
]

DEMO_BUSINESSES = [
    ("Brew House", "Cafe", 77.5946, 12.9716),
    ("Book Nook", "Books", 77.6010, 12.9750),
    ("Lalbagh Florist", "Florist", 77.5850, 12.9507),
]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed a local MongoDB with demo users and businesses.")
    parser.add_argument(
        "--token-ttl",
        type=int,
        default=7 * 24 * 3600,
        help="Lifetime in seconds of the printed bearer tokens.",
    )
    return parser.parse_args()


async def _run() -> None:
    args = _parse_args()

    await connect_to_mongo()
    try:
        database = get_database()
        await ensure_indexes(database)
        store = Store.from_database(database)

        tokens: dict[str, str] = {}
        user_ids: dict[UserRole, str] = {}
        for name, email, role in DEMO_USERS:
            existing = await database["users"].find_one({"email": email})
            if existing is None:
                # Demo accounts cannot log in; they are used through the printed tokens.
                user = User(name=name, email=email, password_hash="!", role=role)
                existing = await store.users.insert(user.model_dump(mode="python", exclude={"id"}))
            user_ids[role] = str(existing["_id"])
            tokens[email] = encode_access_token(user_ids[role], expires_in_seconds=args.token_ttl)

        for name, category, lng, lat in DEMO_BUSINESSES:
            if await database["businesses"].find_one({"name": name}) is not None:
                continue
            business = Business(
                owner_id=user_ids[UserRole.BUSINESS_OWNER],
                name=name,
                category=category,
                location={"type": "Point", "coordinates": [lng, lat], "city": "Bengaluru", "state": "KA"},
            )
            await store.businesses.insert(business.model_dump(mode="python", exclude={"id"}))

        for _, category, _, _ in DEMO_BUSINESSES:
            if await store.categories.find_by_name(category) is None:
                await store.categories.insert(Category(name=category).model_dump(mode="python", exclude={"id"}))
    finally:
        await close_mongo_connection()

    print(json.dumps({"tokens": tokens}, indent=2))


if __name__ == "__main__":
    asyncio.run(_run())
