"""Bid submission over HTTP."""

from uuid import uuid4

import pytest
from sqlmodel import select

from src.matchboard.models import Bid
from src.matchboard.services.proposal import NONE_SELECTED
from tests.factories import PortfolioItemFactory, QualificationFactory
from tests.helpers import auth_headers, create_professional

pytestmark = pytest.mark.api

BID = {
    "proposalText": "We have delivered three similar schemes.",
    "feeProposal": "£45,000 fixed",
    "methodology": "Stage-gated design reviews",
    "timeline": "12 weeks",
}


def apply_url(project) -> str:
    return f"/api/v1/projects/{project.id}/apply"


async def test_bid_snapshot_with_qualification_and_no_portfolio(
    client, project, professional, db_session
):
    user, profile = professional
    qualification = QualificationFactory.build(
        profile_id=profile.id, title="RIBA Chartered Architect", authority="RIBA"
    )
    db_session.add(qualification)
    await db_session.commit()

    response = await client.post(
        apply_url(project),
        json={**BID, "qualificationIds": [str(qualification.id)], "portfolioIds": []},
        headers=auth_headers(user),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "SUBMITTED"
    assert body["professionalId"] == str(profile.id)
    assert "- RIBA Chartered Architect (RIBA)" in body["proposalText"]
    assert body["proposalText"].endswith(f"--- SELECTED PORTFOLIO ITEMS ---\n{NONE_SELECTED}")


async def test_foreign_records_silently_dropped(client, project, professional, db_session):
    user, _ = professional
    _, rival = await create_professional(db_session)
    foreign = QualificationFactory.build(profile_id=rival.id, title="Borrowed Credential")
    db_session.add(foreign)
    await db_session.commit()

    response = await client.post(
        apply_url(project),
        json={**BID, "qualificationIds": [str(foreign.id), str(uuid4())]},
        headers=auth_headers(user),
    )

    assert response.status_code == 201
    text = response.json()["proposalText"]
    assert "Borrowed Credential" not in text
    assert f"--- SELECTED QUALIFICATIONS ---\n{NONE_SELECTED}" in text


async def test_snapshot_survives_profile_edits(client, project, professional, db_session):
    user, profile = professional
    item = PortfolioItemFactory.build(
        profile_id=profile.id, title="Mill Conversion", location="Halifax", units=24
    )
    db_session.add(item)
    await db_session.commit()

    response = await client.post(
        apply_url(project), json={**BID, "portfolioIds": [str(item.id)]}, headers=auth_headers(user)
    )
    original = response.json()["proposalText"]

    await db_session.delete(item)
    await db_session.commit()

    db_session.expire_all()
    stored = (await db_session.execute(select(Bid))).scalar_one()
    assert stored.proposal_text == original
    assert "- Mill Conversion (Halifax), 24 units" in stored.proposal_text


async def test_duplicate_bid_rejected(client, project, professional, db_session):
    headers = auth_headers(professional[0])

    first = await client.post(apply_url(project), json=BID, headers=headers)
    second = await client.post(apply_url(project), json=BID, headers=headers)

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["detail"] == "You have already applied to this project"
    bids = (await db_session.execute(select(Bid))).scalars().all()
    assert len(bids) == 1


async def test_bid_count_on_project_page(client, project, professional, developer):
    await client.post(apply_url(project), json=BID, headers=auth_headers(professional[0]))

    response = await client.get(
        f"/api/v1/projects/{project.id}", headers=auth_headers(developer[0])
    )

    assert response.json()["bidCount"] == 1


async def test_developer_cannot_apply(client, project, developer):
    response = await client.post(apply_url(project), json=BID, headers=auth_headers(developer[0]))

    assert response.status_code == 403


async def test_unknown_project(client, professional):
    response = await client.post(
        f"/api/v1/projects/{uuid4()}/apply", json=BID, headers=auth_headers(professional[0])
    )

    assert response.status_code == 404


async def test_missing_fields_listed(client, project, professional):
    response = await client.post(
        apply_url(project), json={"proposalText": "Hi"}, headers=auth_headers(professional[0])
    )

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"feeProposal", "methodology", "timeline"} <= fields
