"""Fund Project — write path through the API.

Invariants:
    - Success returns 201 with round_id copied from the project
    - Agent budget is per round; exactly-at-budget succeeds, one more unit fails
    - BUDGET_EXCEEDED carries remaining allowance in error.context
    - Completed/upcoming rounds reject with ROUND_NOT_ACTIVE
    - Rejected requests persist nothing
"""

from uuid import uuid4

from sqlalchemy import select

from app.models.fund import Fund


async def _fund(client, project, agent, amount):
    return await client.post(
        f"/api/v1/projects/{project.id}/fund",
        json={"agent_name": agent, "amount": amount},
    )


async def test_fund_project_returns_201(client, active_round, make_project):
    project = await make_project(active_round)
    res = await _fund(client, project, "alice", 10)
    assert res.status_code == 201
    body = res.json()
    assert body["project_id"] == str(project.id)
    assert body["round_id"] == str(active_round.id)
    assert body["agent_name"] == "alice"
    assert body["amount"] == 10


async def test_funding_up_to_budget_then_one_more_fails(client, active_round, make_project):
    project = await make_project(active_round)
    assert (await _fund(client, project, "alice", 30)).status_code == 201
    assert (await _fund(client, project, "alice", 20)).status_code == 201

    res = await _fund(client, project, "alice", 1)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "BUDGET_EXCEEDED"
    assert error["context"]["remaining_budget"] == 0
    assert error["context"]["agent_name"] == "alice"


async def test_budget_rejection_reports_remaining(client, active_round, make_project):
    project = await make_project(active_round)
    await _fund(client, project, "alice", 35)

    res = await _fund(client, project, "alice", 20)
    assert res.status_code == 400
    assert res.json()["error"]["context"]["remaining_budget"] == 15
    assert "15 points remaining" in res.json()["error"]["message"]


async def test_budget_spans_projects_in_same_round(client, active_round, make_project):
    first = await make_project(active_round, title="First")
    second = await make_project(active_round, title="Second")
    assert (await _fund(client, first, "alice", 40)).status_code == 201

    res = await _fund(client, second, "alice", 11)
    assert res.status_code == 400
    assert res.json()["error"]["context"]["remaining_budget"] == 10


async def test_budgets_are_per_agent(client, active_round, make_project):
    project = await make_project(active_round)
    assert (await _fund(client, project, "alice", 50)).status_code == 201
    assert (await _fund(client, project, "bob", 50)).status_code == 201


async def test_ended_round_rejects_funding(client, completed_round, make_project):
    project = await make_project(completed_round)
    res = await _fund(client, project, "alice", 5)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "ROUND_NOT_ACTIVE"
    assert error["category"] == "invalid_state"


async def test_upcoming_round_rejects_funding(client, upcoming_round, make_project):
    project = await make_project(upcoming_round)
    res = await _fund(client, project, "alice", 5)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ROUND_NOT_ACTIVE"


async def test_unknown_project_returns_404(client):
    res = await client.post(
        f"/api/v1/projects/{uuid4()}/fund",
        json={"agent_name": "alice", "amount": 5},
    )
    assert res.status_code == 404


async def test_malformed_project_id_returns_404(client):
    res = await client.post(
        "/api/v1/projects/12345/fund",
        json={"agent_name": "alice", "amount": 5},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_fractional_amounts_fill_budget_exactly(client, test_db, active_round, make_project):
    active_round.funding_budget_per_agent = 0.3
    await test_db.commit()
    project = await make_project(active_round)
    assert (await _fund(client, project, "alice", 0.1)).status_code == 201
    assert (await _fund(client, project, "alice", 0.2)).status_code == 201
    assert (await _fund(client, project, "alice", 0.01)).status_code == 400


async def test_non_positive_amount_returns_400(client, active_round, make_project):
    project = await make_project(active_round)
    for amount in (0, -3):
        res = await _fund(client, project, "alice", amount)
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_missing_agent_returns_400(client, active_round, make_project):
    project = await make_project(active_round)
    res = await client.post(
        f"/api/v1/projects/{project.id}/fund", json={"amount": 5},
    )
    assert res.status_code == 400


async def test_rejected_funding_persists_nothing(
    client, test_db, completed_round, active_round, make_project,
):
    closed = await make_project(completed_round)
    open_ = await make_project(active_round)
    await _fund(client, closed, "alice", 5)
    await _fund(client, open_, "alice", 51)

    result = await test_db.execute(select(Fund))
    assert result.scalars().all() == []
