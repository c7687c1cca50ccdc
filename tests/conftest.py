import pytest

from localconnect.auth import Caller
from tests.fakes import add_user, make_store


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def customer(store):
    user_id = add_user(store, name="Asha", role="customer")
    return Caller(id=user_id, role="customer", user=store.users.docs[user_id])


@pytest.fixture
def other_customer(store):
    user_id = add_user(store, name="Ravi", role="customer")
    return Caller(id=user_id, role="customer", user=store.users.docs[user_id])


@pytest.fixture
def owner(store):
    user_id = add_user(store, name="Meera", role="businessOwner")
    return Caller(id=user_id, role="businessOwner", user=store.users.docs[user_id])


@pytest.fixture
def admin(store):
    user_id = add_user(store, name="Root", role="admin")
    return Caller(id=user_id, role="admin", user=store.users.docs[user_id])
