import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from localconnect.errors import ForbiddenError
from localconnect.services.admin_service import AdminService
from tests.fakes import add_business, add_doc, add_user


def test_analytics_requires_admin(store, owner) -> None:
    with pytest.raises(ForbiddenError):
        asyncio.run(AdminService(store).get_analytics(owner))


def test_analytics_snapshot(store, owner, customer, other_customer, admin) -> None:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    popular = add_business(store, owner_id=owner.id, name="Popular", average_rating=3.0, created_at=base)
    niche = add_business(store, owner_id=owner.id, name="Niche", average_rating=5.0, num_reviews=1,
                         created_at=base + timedelta(days=1))
    add_doc(store.follows, user_id=customer.id, business_id=popular)
    add_doc(store.follows, user_id=other_customer.id, business_id=popular)
    add_doc(store.follows, user_id=customer.id, business_id=niche)
    add_doc(store.reviews, user_id=customer.id, business_id=niche, rating=5, comment="Hidden gem",
            created_at=base + timedelta(days=2))

    report = asyncio.run(AdminService(store).get_analytics(admin))

    assert report["total_users"] == 4
    assert report["total_businesses"] == 2
    assert report["total_reviews"] == 1
    assert report["total_follows"] == 3
    assert report["most_followed_businesses"] == [
        {"business_id": popular, "name": "Popular", "followers": 2},
        {"business_id": niche, "name": "Niche", "followers": 1},
    ]
    assert [item["name"] for item in report["top_rated_businesses"]] == ["Niche", "Popular"]
    assert [item["name"] for item in report["recent_businesses"]] == ["Niche", "Popular"]
    assert report["recent_reviews"][0]["user"]["name"] == "Asha"
    assert report["recent_reviews"][0]["business"] == {"id": niche, "name": "Niche"}
    assert all("password_hash" not in user for user in report["recent_users"])


def test_analytics_limits_lists_to_top_five(store, admin) -> None:
    owner_id = add_user(store, name="Owner", role="businessOwner")
    for index in range(7):
        add_business(store, owner_id=owner_id, name=f"Shop {index}", average_rating=float(index % 5))

    report = asyncio.run(AdminService(store).get_analytics(admin))

    assert len(report["top_rated_businesses"]) == 5
    assert len(report["recent_businesses"]) == 5
    assert len(report["recent_users"]) == 2
