from fastapi import Depends, Header

from localconnect.auth import Caller, parse_bearer_token, resolve_caller
from localconnect.database import get_database
from localconnect.errors import UnauthorizedError
from localconnect.repositories.store import Store


def get_store() -> Store:
    return Store.from_database(get_database())


async def get_optional_caller(
    authorization: str | None = Header(default=None),
    store: Store = Depends(get_store),
) -> Caller | None:
    token = parse_bearer_token(authorization)
    if token is None:
        return None
    return await resolve_caller(token, store)


async def get_current_caller(caller: Caller | None = Depends(get_optional_caller)) -> Caller:
    if caller is None:
        raise UnauthorizedError()
    return caller
