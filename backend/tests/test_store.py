"""Entity store: single-row writes, eager includes, cascade on delete."""

import pytest
from sqlalchemy import select

from deskmap.errors import NotFoundError, StoreConflictError
from deskmap.models import Employee, Location, Map
from deskmap.services.store import EMPLOYEE_WITH_MAPS, LOCATION_WITH_RELATIONS, MAP_WITH_EMPLOYEES


MAP_VALUES = {
    "name": "HQ", "state": "CA", "city": "SF", "building": "A", "floor": "1",
    "image_url": "/uploads/hq.png",
}


async def _seed(store):
    map_obj = await store.create(Map, MAP_VALUES)
    employee = await store.create(Employee, {"name": "Jo", "phone": "555", "email": "jo@x.com"})
    location = await store.create(
        Location, {"map_id": map_obj.id, "employee_id": employee.id, "x": 0.2, "y": 0.8}
    )
    return map_obj, employee, location


async def test_create_assigns_opaque_id_and_timestamps(store):
    map_obj = await store.create(Map, MAP_VALUES)
    assert isinstance(map_obj.id, str) and len(map_obj.id) == 36
    assert map_obj.created_at is not None
    assert map_obj.updated_at is not None


async def test_get_unknown_id_returns_none(store):
    assert await store.get(Map, "missing") is None


async def test_require_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc:
        await store.require(Employee, "missing")
    assert exc.value.entity == "Employee"
    assert exc.value.message == "Employee not found"


async def test_includes_load_nested_relations(store):
    map_obj, employee, location = await _seed(store)

    loaded_map = await store.get(Map, map_obj.id, MAP_WITH_EMPLOYEES)
    assert [loc.employee.email for loc in loaded_map.locations] == ["jo@x.com"]

    loaded_employee = await store.get(Employee, employee.id, EMPLOYEE_WITH_MAPS)
    assert [loc.map.name for loc in loaded_employee.locations] == ["HQ"]

    loaded_location = await store.get(Location, location.id, LOCATION_WITH_RELATIONS)
    assert loaded_location.map.id == map_obj.id
    assert loaded_location.employee.id == employee.id


async def test_partial_update_only_touches_supplied_fields(store):
    map_obj = await store.create(Map, MAP_VALUES)
    updated = await store.update(Map, map_obj.id, {"floor": "2"})
    assert updated.floor == "2"
    assert updated.name == "HQ"
    assert updated.image_url == "/uploads/hq.png"


async def test_update_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.update(Location, "missing", {"x": 0.1})


async def test_delete_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.delete(Map, "missing")


async def test_deleting_map_cascades_to_locations(store, test_db):
    map_obj, employee, _ = await _seed(store)

    await store.delete(Map, map_obj.id)

    remaining = (await test_db.execute(select(Location))).scalars().all()
    assert remaining == []
    assert await store.get(Employee, employee.id) is not None


async def test_deleting_employee_cascades_to_locations(store, test_db):
    map_obj, employee, _ = await _seed(store)

    await store.delete(Employee, employee.id)

    remaining = (await test_db.execute(select(Location))).scalars().all()
    assert remaining == []
    assert await store.get(Map, map_obj.id) is not None


async def test_find_employee_id_by_email(store):
    _, employee, _ = await _seed(store)
    assert await store.find_employee_id_by_email("jo@x.com") == employee.id
    assert await store.find_employee_id_by_email("JO@x.com") is None


async def test_find_many_orders_results(store):
    await store.create(Map, {**MAP_VALUES, "state": "WA"})
    await store.create(Map, {**MAP_VALUES, "state": "CA", "city": "LA"})
    await store.create(Map, {**MAP_VALUES, "state": "CA", "city": "SF"})

    maps = await store.find_many(Map, order_by=(Map.state, Map.city, Map.building))
    assert [(m.state, m.city) for m in maps] == [("CA", "LA"), ("CA", "SF"), ("WA", "SF")]


async def test_duplicate_email_write_raises_conflict(store):
    await store.create(Employee, {"name": "Jo", "phone": "555", "email": "jo@x.com"})

    with pytest.raises(StoreConflictError):
        await store.create(Employee, {"name": "Other Jo", "phone": "556", "email": "jo@x.com"})

    rows = await store.find_many(Employee)
    assert [e.name for e in rows] == ["Jo"]
