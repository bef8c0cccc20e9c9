"""Project Routes — nomination, browsing and detail.

Invariants:
    - Nominating into an unknown round is a validation failure (400 INVALID_REFERENCE)
    - Optional fields default: repo_url "" and category "general"
    - List/detail enriched with total_contributions, quadratic_weight, contributors_count
"""

from uuid import uuid4

import pytest

from app.models.fund import Fund


async def test_create_project_returns_201_with_defaults(client, active_round):
    res = await client.post("/api/v1/projects", json={
        "title": "Shared Memory Index",
        "description": "Open index of agent memories",
        "nominator_agent": "scout-1",
        "round_id": str(active_round.id),
    })
    assert res.status_code == 201
    body = res.json()
    assert body["repo_url"] == ""
    assert body["category"] == "general"
    assert body["round_id"] == str(active_round.id)
    assert body["nominator_agent"] == "scout-1"


async def test_create_project_keeps_optional_fields(client, active_round):
    res = await client.post("/api/v1/projects", json={
        "title": "Parser",
        "description": "Fast parser",
        "repo_url": "https://example.com/parser",
        "category": "tooling",
        "nominator_agent": "scout-2",
        "round_id": str(active_round.id),
    })
    assert res.status_code == 201
    assert res.json()["repo_url"] == "https://example.com/parser"
    assert res.json()["category"] == "tooling"


async def test_create_project_unknown_round_returns_400(client):
    missing = uuid4()
    res = await client.post("/api/v1/projects", json={
        "title": "Orphan",
        "description": "No round",
        "nominator_agent": "scout-3",
        "round_id": str(missing),
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_REFERENCE"
    assert error["category"] == "validation"
    assert error["context"]["round_id"] == str(missing)


async def test_create_project_missing_fields_returns_400(client, active_round):
    res = await client.post("/api/v1/projects", json={
        "title": "No description",
        "round_id": str(active_round.id),
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_project_allowed_in_any_round_state(client, completed_round):
    res = await client.post("/api/v1/projects", json={
        "title": "Late",
        "description": "Nominated after close",
        "nominator_agent": "scout-4",
        "round_id": str(completed_round.id),
    })
    assert res.status_code == 201


async def test_list_projects_enriched(client, test_db, active_round, make_project):
    funded = await make_project(active_round, title="Funded")
    await make_project(active_round, title="Unfunded")
    test_db.add_all([
        Fund(project_id=funded.id, round_id=active_round.id, agent_name="a", amount=4),
        Fund(project_id=funded.id, round_id=active_round.id, agent_name="b", amount=9),
    ])
    await test_db.commit()

    res = await client.get("/api/v1/projects")
    assert res.status_code == 200
    by_title = {p["title"]: p for p in res.json()}
    assert by_title["Funded"]["total_contributions"] == 13
    assert by_title["Funded"]["quadratic_weight"] == pytest.approx(25)
    assert by_title["Funded"]["contributors_count"] == 2
    assert by_title["Unfunded"]["total_contributions"] == 0
    assert by_title["Unfunded"]["quadratic_weight"] == 0
    assert "contributions" not in by_title["Funded"]


async def test_list_projects_filters_by_round(
    client, active_round, completed_round, make_project,
):
    await make_project(active_round, title="Current")
    await make_project(completed_round, title="Past")

    res = await client.get(
        "/api/v1/projects", params={"round_id": str(completed_round.id)},
    )
    assert [p["title"] for p in res.json()] == ["Past"]


async def test_get_project_detail_includes_contributions(
    client, test_db, active_round, make_project,
):
    project = await make_project(active_round, title="Detail")
    test_db.add(Fund(
        project_id=project.id, round_id=active_round.id, agent_name="alice", amount=16,
    ))
    await test_db.commit()

    res = await client.get(f"/api/v1/projects/{project.id}")
    assert res.status_code == 200
    body = res.json()
    assert body["quadratic_weight"] == pytest.approx(16)
    assert body["contributors_count"] == 1
    assert body["contributions"][0]["agent_name"] == "alice"
    assert body["contributions"][0]["amount"] == 16


async def test_get_project_unknown_returns_404(client):
    res = await client.get(f"/api/v1/projects/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_project_malformed_id_returns_404(client):
    res = await client.get("/api/v1/projects/not-a-uuid")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
