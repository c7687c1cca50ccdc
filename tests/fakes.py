"""In-memory repositories exposing the same coroutine API as the MongoDB ones."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from bson import ObjectId

from localconnect.config import settings
from localconnect.errors import ConflictError
from localconnect.geo import haversine_km, point_coordinates
from localconnect.repositories.store import Store

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _created_key(doc: dict[str, Any]) -> tuple[datetime, ObjectId]:
    created_at = doc.get("created_at") or _EPOCH
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at, doc["_id"]


class InMemoryRepository:
    duplicate_message = "Document already exists"
    unique_keys: tuple[tuple[str, ...], ...] = ()

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        payload = dict(document)
        payload.pop("id", None)
        payload.setdefault("_id", ObjectId())
        for keys in self.unique_keys:
            for existing in self.docs.values():
                if all(existing.get(key) == payload.get(key) for key in keys):
                    raise ConflictError(self.duplicate_message)
        self.docs[str(payload["_id"])] = payload
        return dict(payload)

    async def get(self, document_id: str) -> dict[str, Any] | None:
        doc = self.docs.get(str(document_id))
        return dict(doc) if doc is not None else None

    async def get_many(self, document_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
        found = {}
        for document_id in document_ids:
            doc = self.docs.get(str(document_id))
            if doc is not None:
                found[str(document_id)] = dict(doc)
        return found

    async def exists(self, document_id: str) -> bool:
        return str(document_id) in self.docs

    async def update_fields(self, document_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        doc = self.docs.get(str(document_id))
        if doc is None:
            return None
        doc.update(fields)
        doc["updated_at"] = datetime.now(timezone.utc)
        return dict(doc)

    async def delete(self, document_id: str) -> bool:
        return self.docs.pop(str(document_id), None) is not None

    async def count(self) -> int:
        return len(self.docs)

    async def recent(self, limit: int) -> list[dict[str, Any]]:
        ordered = sorted(self.docs.values(), key=_created_key, reverse=True)
        return [dict(doc) for doc in ordered[:limit]]

    def where(self, **criteria: Any) -> list[dict[str, Any]]:
        return [
            dict(doc)
            for doc in self.docs.values()
            if all(doc.get(key) == value for key, value in criteria.items())
        ]


class InMemoryUserRepository(InMemoryRepository):
    duplicate_message = "User already exists"
    unique_keys = (("email",),)


class InMemoryBusinessRepository(InMemoryRepository):
    async def list_all(self, *, skip: int = 0, limit: int | None = None) -> list[dict[str, Any]]:
        ordered = sorted(self.docs.values(), key=lambda doc: doc["_id"])[skip:]
        if limit is not None:
            ordered = ordered[:limit]
        return [dict(doc) for doc in ordered]

    async def find_within_sphere(self, *, lng: float, lat: float, radians: float) -> list[dict[str, Any]]:
        max_distance = radians * settings.earth_radius_km
        found = []
        for doc in self.docs.values():
            coordinates = point_coordinates(doc.get("location"))
            if coordinates is None:
                continue
            if haversine_km(lng, lat, coordinates[0], coordinates[1]) <= max_distance:
                found.append(dict(doc))
        return found

    async def top_rated(self, limit: int) -> list[dict[str, Any]]:
        ordered = sorted(
            self.docs.values(),
            key=lambda doc: (-float(doc.get("average_rating") or 0.0), doc["_id"]),
        )
        return [dict(doc) for doc in ordered[:limit]]

    async def set_rating_aggregate(
        self,
        business_id: str,
        *,
        average_rating: float,
        num_reviews: int,
        expected_version: int | None = None,
    ) -> bool:
        doc = self.docs.get(str(business_id))
        if doc is None:
            return False
        if expected_version is not None and int(doc.get("rating_version") or 0) != expected_version:
            return False
        doc["average_rating"] = average_rating
        doc["num_reviews"] = num_reviews
        doc["rating_version"] = int(doc.get("rating_version") or 0) + 1
        return True


class InMemoryReviewRepository(InMemoryRepository):
    duplicate_message = "You already reviewed this business"
    unique_keys = (("user_id", "business_id"),)

    async def find_by_user_and_business(self, user_id: str, business_id: str) -> dict[str, Any] | None:
        matches = self.where(user_id=user_id, business_id=business_id)
        return matches[0] if matches else None

    async def list_for_business(self, business_id: str) -> list[dict[str, Any]]:
        return sorted(self.where(business_id=business_id), key=_created_key, reverse=True)

    async def ratings_for_business(self, business_id: str) -> list[int]:
        return [int(doc["rating"]) for doc in self.where(business_id=business_id)]

    async def rating_summaries(self, business_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
        summaries = {}
        for business_id in dict.fromkeys(business_ids):
            ratings = await self.ratings_for_business(business_id)
            if ratings:
                summaries[business_id] = {
                    "average_rating": sum(ratings) / len(ratings),
                    "review_count": len(ratings),
                }
        return summaries


class InMemoryFollowRepository(InMemoryRepository):
    duplicate_message = "Already following this business"
    unique_keys = (("user_id", "business_id"),)

    async def find_by_user_and_business(self, user_id: str, business_id: str) -> dict[str, Any] | None:
        matches = self.where(user_id=user_id, business_id=business_id)
        return matches[0] if matches else None

    async def delete_pair(self, user_id: str, business_id: str) -> bool:
        for key, doc in list(self.docs.items()):
            if doc.get("user_id") == user_id and doc.get("business_id") == business_id:
                del self.docs[key]
                return True
        return False

    async def followed_business_ids(self, user_id: str, business_ids: Iterable[str]) -> set[str]:
        wanted = set(business_ids)
        return {doc["business_id"] for doc in self.where(user_id=user_id) if doc["business_id"] in wanted}

    async def follower_counts(self, business_ids: Iterable[str]) -> dict[str, int]:
        wanted = set(business_ids)
        counts: dict[str, int] = {}
        for doc in self.docs.values():
            if doc["business_id"] in wanted:
                counts[doc["business_id"]] = counts.get(doc["business_id"], 0) + 1
        return counts

    async def most_followed(self, limit: int) -> list[dict[str, Any]]:
        counts = await self.follower_counts(doc["business_id"] for doc in self.docs.values())
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [{"business_id": business_id, "followers": followers} for business_id, followers in ordered[:limit]]

    async def list_for_user(self, user_id: str) -> list[dict[str, Any]]:
        return sorted(self.where(user_id=user_id), key=_created_key, reverse=True)

    async def list_for_business(self, business_id: str) -> list[dict[str, Any]]:
        return sorted(self.where(business_id=business_id), key=_created_key)


class InMemoryVisitRepository(InMemoryRepository):
    async def visit_counts_since(self, since: datetime, limit: int) -> list[dict[str, Any]]:
        counts: dict[str, int] = {}
        for doc in self.docs.values():
            if doc["created_at"] >= since:
                counts[doc["business_id"]] = counts.get(doc["business_id"], 0) + 1
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [{"business_id": business_id, "visit_count": count} for business_id, count in ordered[:limit]]


class InMemoryOfferRepository(InMemoryRepository):
    async def list_for_business(self, business_id: str, *, is_active: bool | None = None) -> list[dict[str, Any]]:
        docs = self.where(business_id=business_id)
        if is_active is not None:
            docs = [doc for doc in docs if doc.get("is_active") is is_active]
        return sorted(docs, key=_created_key, reverse=True)

    async def list_all(self, *, active_at: datetime | None = None) -> list[dict[str, Any]]:
        docs = [dict(doc) for doc in self.docs.values()]
        if active_at is not None:
            docs = [
                doc
                for doc in docs
                if doc.get("is_active") and doc["valid_from"] <= active_at <= doc["valid_to"]
            ]
        return sorted(docs, key=_created_key, reverse=True)


class InMemoryCategoryRepository(InMemoryRepository):
    duplicate_message = "Category already exists"
    unique_keys = (("name",),)

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        matches = self.where(name=name)
        return matches[0] if matches else None

    async def list_sorted(self) -> list[dict[str, Any]]:
        return sorted((dict(doc) for doc in self.docs.values()), key=lambda doc: doc["name"])


def make_store() -> Store:
    return Store(
        users=InMemoryUserRepository(),
        businesses=InMemoryBusinessRepository(),
        reviews=InMemoryReviewRepository(),
        follows=InMemoryFollowRepository(),
        visits=InMemoryVisitRepository(),
        offers=InMemoryOfferRepository(),
        categories=InMemoryCategoryRepository(),
    )


def add_user(store: Store, *, name: str = "Asha", role: str = "customer", email: str | None = None, **extra: Any) -> str:
    user_id = ObjectId()
    store.users.docs[str(user_id)] = {
        "_id": user_id,
        "name": name,
        "email": email or f"{name.lower().replace(' ', '.')}.{user_id}@example.com",
        "password_hash": "not-a-real-hash",
        "role": role,
        "favorites": [],
        "created_at": extra.pop("created_at", datetime.now(timezone.utc)),
        **extra,
    }
    return str(user_id)


def add_business(
    store: Store,
    *,
    owner_id: str,
    name: str = "Cafe Coffee Day",
    lng: float = 77.5946,
    lat: float = 12.9716,
    category: str = "Cafe",
    **extra: Any,
) -> str:
    business_id = ObjectId()
    store.businesses.docs[str(business_id)] = {
        "_id": business_id,
        "owner_id": owner_id,
        "name": name,
        "description": None,
        "category": category,
        "images": [f"https://img.example.com/{business_id}.jpg"],
        "contact": {"phone": None, "email": None, "website": None},
        "location": {"type": "Point", "coordinates": [lng, lat], "address": None, "city": "Bengaluru", "state": "KA"},
        "opening_hours": {},
        "is_verified": False,
        "is_featured": False,
        "average_rating": extra.pop("average_rating", 0.0),
        "num_reviews": extra.pop("num_reviews", 0),
        "rating_version": 0,
        "created_at": extra.pop("created_at", datetime.now(timezone.utc)),
        **extra,
    }
    return str(business_id)


def add_doc(repository: InMemoryRepository, **fields: Any) -> str:
    doc_id = fields.pop("_id", None) or ObjectId()
    fields.setdefault("created_at", datetime.now(timezone.utc))
    repository.docs[str(doc_id)] = {"_id": doc_id, **fields}
    return str(doc_id)
