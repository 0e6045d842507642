import pytest

from oauth_identity_api.app.core.exceptions import NotFoundError
from oauth_identity_api.app.schemas.page import PageRequest
from oauth_identity_api.app.schemas.scope import ScopeRequest
from oauth_identity_api.app.services.scope_service import ScopeService


@pytest.fixture()
def service():
    return ScopeService()


@pytest.mark.asyncio
async def test_scope_lifecycle(service):
    created = await service.create_scope(ScopeRequest(name="profile", description="Profile data"))
    assert created.id == 3

    modified = await service.modify_scope(ScopeRequest(id=created.id, name="profile", description="Basic profile"))
    assert modified.description == "Basic profile"

    await service.delete_scope(created.id)
    assert await service.get_scope(created.id) is None
    with pytest.raises(NotFoundError):
        await service.get_response(created.id)


@pytest.mark.asyncio
async def test_seeded_scopes_listed(service):
    page = await service.list_scopes(PageRequest())

    assert [scope.name for scope in page.items] == ["read", "write"]
    assert page.total == 2


@pytest.mark.asyncio
async def test_get_scopes_by_ids(service):
    found = await service.get_scopes_by_ids([2, 3, 1])

    assert [scope.id for scope in found] == [1, 2]
