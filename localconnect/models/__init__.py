from localconnect.models.business import (
    Business,
    BusinessCreate,
    BusinessUpdate,
    Contact,
    DayHours,
    Location,
    OpeningHours,
)
from localconnect.models.follow import Follow, Visit, VisitCreate
from localconnect.models.geo import GeoPoint
from localconnect.models.offer import Category, CategoryCreate, Offer, OfferCreate, OfferUpdate
from localconnect.models.review import Review, ReviewCreate, ReviewUpdate
from localconnect.models.user import User, UserRole

__all__ = [
    "Business",
    "BusinessCreate",
    "BusinessUpdate",
    "Category",
    "CategoryCreate",
    "Contact",
    "DayHours",
    "Follow",
    "GeoPoint",
    "Location",
    "Offer",
    "OfferCreate",
    "OfferUpdate",
    "OpeningHours",
    "Review",
    "ReviewCreate",
    "ReviewUpdate",
    "User",
    "UserRole",
    "Visit",
    "VisitCreate",
]
