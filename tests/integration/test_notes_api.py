"""Tests for note creation, editing and deletion."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.research_notes.models import Project
from src.research_notes.store import DEFAULT_TAB_NAMES

pytestmark = pytest.mark.integration

TAB_CREATED_AT = "2026-03-01T10:00:00.000Z"
TABS = {
    "finding": {"content": "x", "order": 1, "created_at": TAB_CREATED_AT},
    "evidence": {"content": "<ul><li>a</li></ul>", "order": 2, "created_at": TAB_CREATED_AT},
}


async def create_note(client: AsyncClient, project: Project, **body) -> dict:
    response = await client.post(f"/api/v1/projects/{project.id}/notes", json=body)
    assert response.status_code == 201, response.text
    return response.json()["note"]


async def test_create_note(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="  Tide levels ", content=" rising ")

    assert note["project_id"] == str(project.id)
    assert note["title"] == "Tide levels"
    assert note["content"] == "rising"
    assert note["tabs"] is None
    assert note["display_order"] == 0


async def test_display_order_increments_per_project(client: AsyncClient, project: Project):
    first = await create_note(client, project, title="one", content="a")
    second = await create_note(client, project, title="two", content="b")

    assert first["display_order"] == 0
    assert second["display_order"] == 1


async def test_display_order_is_independent_between_projects(
    client: AsyncClient, project: Project
):
    await create_note(client, project, title="one", content="a")
    other = (await client.post("/api/v1/projects", json={"name": "Other"})).json()["project"]

    response = await client.post(
        f"/api/v1/projects/{other['id']}/notes", json={"title": "first", "content": "c"}
    )

    assert response.json()["note"]["display_order"] == 0


async def test_display_order_follows_highest_existing(
    client: AsyncClient, project: Project, seed_notes
):
    await seed_notes(3)
    note = await create_note(client, project, title="after", content="a")
    assert note["display_order"] == 3


async def test_tabs_round_trip_unchanged(client: AsyncClient, project: Project):
    created = await create_note(client, project, title="Tabbed", tabs=TABS, active_tab="evidence")

    fetched = (await client.get(f"/api/v1/notes/{created['id']}")).json()["note"]

    assert fetched["tabs"] == TABS
    assert fetched["active_tab"] == "evidence"
    assert fetched["content"] is None


async def test_note_without_content_gets_default_tabs(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Blank")

    assert list(note["tabs"]) == list(DEFAULT_TAB_NAMES)
    assert [tab["order"] for tab in note["tabs"].values()] == [1, 2, 3]
    assert all(tab["content"] == "" for tab in note["tabs"].values())
    assert note["active_tab"] == "finding"
    assert note["default_tabs"] == list(DEFAULT_TAB_NAMES)


@pytest.mark.parametrize(
    "body",
    [
        {"content": "no title"},
        {"title": "   ", "content": "x"},
        {"title": "t" * 201, "content": "x"},
        {"title": "ok", "content": 5},
        {"title": "ok", "tabs": {"finding": {"content": "x", "order": "1", "created_at": "T"}}},
        {"title": "ok", "tabs": TABS, "active_tab": "details"},
    ],
)
async def test_create_note_validation(client: AsyncClient, project: Project, body: dict):
    response = await client.post(f"/api/v1/projects/{project.id}/notes", json=body)

    assert response.status_code == 400
    listed = (await client.get(f"/api/v1/projects/{project.id}/notes")).json()["notes"]
    assert listed == []


async def test_active_tab_error_names_field(client: AsyncClient, project: Project):
    response = await client.post(
        f"/api/v1/projects/{project.id}/notes",
        json={"title": "ok", "tabs": TABS, "active_tab": "details"},
    )
    assert response.json()["field"] == "active_tab"


async def test_create_note_for_missing_project(client: AsyncClient):
    response = await client.post(
        f"/api/v1/projects/{uuid4()}/notes", json={"title": "orphan", "content": "x"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Project not found"


async def test_list_notes_for_project_without_notes(client: AsyncClient, project: Project):
    response = await client.get(f"/api/v1/projects/{project.id}/notes")

    assert response.status_code == 200
    assert response.json() == {"notes": []}


async def test_update_note_whitespace_title_rejected(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Original", content="body")

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"title": "   "})

    assert response.status_code == 400
    stored = (await client.get(f"/api/v1/notes/{note['id']}")).json()["note"]
    assert stored["title"] == "Original"
    assert stored["updated_at"] == note["updated_at"]


async def test_update_note_partial(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Original", content="body")

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"content": " revised "})

    assert response.status_code == 200
    updated = response.json()["note"]
    assert updated["title"] == "Original"
    assert updated["content"] == "revised"
    assert updated["display_order"] == note["display_order"]
    assert updated["updated_at"] >= note["updated_at"]


async def test_update_note_tabs_and_active_tab(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Tabbed", tabs=TABS)

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"active_tab": "evidence"})
    assert response.status_code == 200
    assert response.json()["note"]["active_tab"] == "evidence"

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"active_tab": "missing"})
    assert response.status_code == 400


async def test_update_note_replaces_tabs(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Tabbed", tabs=TABS)
    new_tabs = {"summary": {"content": "done", "order": 1, "created_at": "2026-04-01T00:00:00Z"}}

    response = await client.put(
        f"/api/v1/notes/{note['id']}", json={"tabs": new_tabs, "active_tab": "summary"}
    )

    assert response.status_code == 200
    assert response.json()["note"]["tabs"] == new_tabs


async def test_replacing_tabs_moves_stale_active_tab(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Defaults")
    assert note["active_tab"] == "finding"
    new_tabs = {
        "later": {"content": "", "order": 2, "created_at": TAB_CREATED_AT},
        "other": {"content": "x", "order": 1, "created_at": TAB_CREATED_AT},
    }

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"tabs": new_tabs})

    assert response.status_code == 200
    assert response.json()["note"]["active_tab"] == "other"
    fetched = (await client.get(f"/api/v1/notes/{note['id']}")).json()["note"]
    assert fetched["active_tab"] == "other"


async def test_replacing_tabs_keeps_active_tab_that_survives(
    client: AsyncClient, project: Project
):
    note = await create_note(client, project, title="Tabbed", tabs=TABS, active_tab="evidence")
    new_tabs = {"evidence": TABS["evidence"]}

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"tabs": new_tabs})

    assert response.json()["note"]["active_tab"] == "evidence"


async def test_clearing_tabs_clears_active_tab(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Defaults")

    response = await client.put(f"/api/v1/notes/{note['id']}", json={"tabs": {}})

    assert response.status_code == 200
    assert response.json()["note"]["tabs"] is None
    assert response.json()["note"]["active_tab"] is None


async def test_tab_key_order_is_not_significant(client: AsyncClient, project: Project):
    tabs = {"finding": {"created_at": TAB_CREATED_AT, "order": 1, "content": "x"}}

    note = await create_note(client, project, title="Reordered keys", tabs=tabs)

    assert note["tabs"] == tabs
    assert list(note["tabs"]["finding"]) == ["content", "order", "created_at"]


async def test_update_missing_note(client: AsyncClient):
    response = await client.put(f"/api/v1/notes/{uuid4()}", json={"title": "x"})
    assert response.status_code == 404
    assert response.json()["error"] == "Note not found"


async def test_delete_note(client: AsyncClient, project: Project):
    note = await create_note(client, project, title="Temp", content="x")

    response = await client.delete(f"/api/v1/notes/{note['id']}")

    assert response.status_code == 204
    assert (await client.get(f"/api/v1/notes/{note['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/projects/{project.id}")).status_code == 200


async def test_delete_missing_note_is_not_an_error(client: AsyncClient):
    response = await client.delete(f"/api/v1/notes/{uuid4()}")
    assert response.status_code == 204
