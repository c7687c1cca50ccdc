from localconnect.repositories.base import MongoRepository, to_object_id
from localconnect.repositories.businesses import BusinessRepository
from localconnect.repositories.categories import CategoryRepository
from localconnect.repositories.follows import FollowRepository
from localconnect.repositories.offers import OfferRepository
from localconnect.repositories.reviews import ReviewRepository
from localconnect.repositories.store import Store
from localconnect.repositories.users import UserRepository
from localconnect.repositories.visits import VisitRepository

__all__ = [
    "BusinessRepository",
    "CategoryRepository",
    "FollowRepository",
    "MongoRepository",
    "OfferRepository",
    "ReviewRepository",
    "Store",
    "UserRepository",
    "VisitRepository",
    "to_object_id",
]
