import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from localconnect.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from localconnect.models.offer import OfferCreate, OfferUpdate
from localconnect.services.category_service import CategoryService
from localconnect.services.offer_service import OfferService, is_offer_active
from tests.fakes import add_business, add_doc

NOW = datetime.now(timezone.utc)


def test_is_offer_active_predicate() -> None:
    offer = {"is_active": True, "valid_from": NOW - timedelta(days=1), "valid_to": NOW + timedelta(days=1)}
    assert is_offer_active(offer, NOW) is True
    assert is_offer_active({**offer, "is_active": False}, NOW) is False
    assert is_offer_active({**offer, "valid_to": NOW - timedelta(seconds=1)}, NOW) is False
    assert is_offer_active({**offer, "valid_from": NOW}, NOW) is True


def test_create_offer_only_for_owner_or_admin(store, owner, customer) -> None:
    business_id = add_business(store, owner_id=owner.id, name="Brew House")
    payload = OfferCreate(
        title="Monsoon special",
        discount_percent=20,
        valid_from=NOW - timedelta(days=1),
        valid_to=NOW + timedelta(days=6),
    )
    service = OfferService(store)

    with pytest.raises(ForbiddenError):
        asyncio.run(service.create_offer(business_id, customer, payload))

    offer = asyncio.run(service.create_offer(business_id, owner, payload))
    assert offer["business"]["name"] == "Brew House"
    assert offer["is_currently_active"] is True

    with pytest.raises(NotFoundError):
        asyncio.run(service.create_offer("64b7f0c2a1b2c3d4e5f60718", owner, payload))


def test_offer_window_must_be_ordered() -> None:
    with pytest.raises(ValueError):
        OfferCreate(title="Backwards", valid_from=NOW, valid_to=NOW - timedelta(days=1))


def test_offer_window_accepts_mixed_timezone_inputs() -> None:
    payload = OfferCreate(
        title="New year",
        valid_from="2024-01-01T00:00:00Z",
        valid_to="2024-02-01T00:00:00",
    )

    assert payload.valid_to == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert OfferUpdate(valid_from="2024-03-01T00:00:00").valid_from.tzinfo is not None
    with pytest.raises(ValueError):
        OfferCreate(title="Backwards", valid_from="2024-02-01T00:00:00Z", valid_to="2024-01-01T00:00:00")


def test_list_offers_active_only(store, owner) -> None:
    business_id = add_business(store, owner_id=owner.id)
    live = add_doc(store.offers, business_id=business_id, title="Live", is_active=True,
                   valid_from=NOW - timedelta(days=1), valid_to=NOW + timedelta(days=1))
    add_doc(store.offers, business_id=business_id, title="Expired", is_active=True,
            valid_from=NOW - timedelta(days=5), valid_to=NOW - timedelta(days=1))
    add_doc(store.offers, business_id=business_id, title="Paused", is_active=False,
            valid_from=NOW - timedelta(days=1), valid_to=NOW + timedelta(days=1))
    service = OfferService(store)

    active = asyncio.run(service.list_offers(active_only=True))
    assert [item["id"] for item in active] == [live]
    assert len(asyncio.run(service.list_offers())) == 3

    flagged = asyncio.run(service.list_business_offers(business_id, active=False))
    assert [item["title"] for item in flagged] == ["Paused"]


def test_update_and_delete_offer(store, owner, customer) -> None:
    business_id = add_business(store, owner_id=owner.id)
    offer_id = add_doc(store.offers, business_id=business_id, title="Live", is_active=True,
                       valid_from=NOW - timedelta(days=1), valid_to=NOW + timedelta(days=1))
    service = OfferService(store)

    updated = asyncio.run(service.update_offer(offer_id, owner, OfferUpdate(is_active=False)))
    assert updated["is_active"] is False
    assert updated["title"] == "Live"

    with pytest.raises(BadRequestError):
        asyncio.run(service.update_offer(offer_id, owner, OfferUpdate(valid_to=NOW - timedelta(days=3))))
    with pytest.raises(ForbiddenError):
        asyncio.run(service.delete_offer(offer_id, customer))

    asyncio.run(service.delete_offer(offer_id, owner))
    assert offer_id not in store.offers.docs


def test_categories(store, admin, customer) -> None:
    service = CategoryService(store)

    with pytest.raises(ForbiddenError):
        asyncio.run(service.create_category(customer, "Cafe"))
    with pytest.raises(BadRequestError):
        asyncio.run(service.create_category(admin, "  "))

    asyncio.run(service.create_category(admin, "Salon", icon="scissors"))
    asyncio.run(service.create_category(admin, "Cafe"))
    with pytest.raises(ConflictError):
        asyncio.run(service.create_category(admin, "Cafe"))

    assert [item["name"] for item in asyncio.run(service.list_categories())] == ["Cafe", "Salon"]
