from __future__ import annotations

from dataclasses import dataclass

from motor.motor_asyncio import AsyncIOMotorDatabase

from localconnect.repositories.businesses import BusinessRepository
from localconnect.repositories.categories import CategoryRepository
from localconnect.repositories.follows import FollowRepository
from localconnect.repositories.offers import OfferRepository
from localconnect.repositories.reviews import ReviewRepository
from localconnect.repositories.users import UserRepository
from localconnect.repositories.visits import VisitRepository


@dataclass
class Store:
    """Request-scoped handle bundling one repository per collection."""

    users: UserRepository
    businesses: BusinessRepository
    reviews: ReviewRepository
    follows: FollowRepository
    visits: VisitRepository
    offers: OfferRepository
    categories: CategoryRepository

    @classmethod
    def from_database(cls, database: AsyncIOMotorDatabase) -> "Store":
        return cls(
            users=UserRepository(database),
            businesses=BusinessRepository(database),
            reviews=ReviewRepository(database),
            follows=FollowRepository(database),
            visits=VisitRepository(database),
            offers=OfferRepository(database),
            categories=CategoryRepository(database),
        )
