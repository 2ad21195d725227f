import pytest
from uuid import uuid4

from shared.constants import Role
from shared.models.user import CurrentUser

BASE = "/api/v1/user-reports"
ADMIN = "/api/v1/admin/user-reports"


def _payload(target_id, **overrides) -> dict:
    data = {
        "reportedUser": str(target_id),
        "reason": "spam",
        "description": "Sends the same advert to every buyer.",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_health(async_client) -> None:
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "moderation"}


@pytest.mark.asyncio
async def test_unauthenticated_request_rejected(async_client) -> None:
    response = await async_client.get(BASE)
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


@pytest.mark.asyncio
async def test_report_lifecycle(async_client, login, reporter_user, admin_user, target, admin) -> None:
    login(reporter_user)
    created = await async_client.post(
        BASE,
        json=_payload(target.id, evidenceUrls=["https://img.example.com/1.png"], relatedAd="ad-7"),
    )
    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "pending"
    assert body["reportCount"] == 1
    assert body["isResolved"] is False
    assert body["reportedUser"] == str(target.id)
    assert body["reportedBy"] == str(reporter_user.id)
    assert body["reportedUserDetails"] == {
        "id": str(target.id),
        "name": "Tom Target",
        "email": "tom@example.com",
        "phone": "+15550199",
    }
    assert body["reportedByDetails"]["name"] == "Rita Reporter"
    assert body["evidenceUrls"] == ["https://img.example.com/1.png"]
    assert body["relatedAd"] == "ad-7"
    assert body["reviewedBy"] is None
    assert body["reviewedByDetails"] is None

    again = await async_client.post(BASE, json=_payload(target.id))
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "already_reported"

    login(admin_user)
    resolved = await async_client.put(
        f"{ADMIN}/{body['id']}", json={"status": "resolved", "adminNotes": "Warned user"}
    )
    assert resolved.status_code == 200
    data = resolved.json()
    assert data["status"] == "resolved"
    assert data["isResolved"] is True
    assert data["adminNotes"] == "Warned user"
    assert data["reviewedBy"] == str(admin.id)
    assert data["reviewedByDetails"]["name"] == "Ada Admin"
    assert data["reviewedAt"] is not None

    stats = await async_client.get(f"{ADMIN}/stats")
    assert stats.status_code == 200
    assert stats.json() == {
        "totalReports": 1,
        "pendingReports": 0,
        "resolvedReports": 1,
        "dismissedReports": 0,
        "reportsByReason": {"spam": 1},
        "reportsByStatus": {"resolved": 1},
    }


@pytest.mark.asyncio
async def test_submit_validation_errors(async_client, login, reporter_user, target) -> None:
    login(reporter_user)

    response = await async_client.post(BASE, json=_payload(target.id, description="too short"))
    assert response.status_code == 400
    payload = response.json()
    assert payload["error"]["code"] == "invalid_request"
    assert [e["field"] for e in payload["detail"]] == ["description"]

    response = await async_client.post(BASE, json=_payload(target.id, reason="rude"))
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["detail"]] == ["reason"]

    response = await async_client.post(BASE, json=_payload(target.id, unexpected=True))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_submit_against_self_and_unknown_user(async_client, login, reporter_user) -> None:
    login(reporter_user)

    response = await async_client.post(BASE, json=_payload(reporter_user.id))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "cannot_report_self"

    response = await async_client.post(BASE, json=_payload(uuid4()))
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "reported_user_not_found"


@pytest.mark.asyncio
async def test_list_is_scoped_to_caller(
    async_client, login, reporter, reporter_user, target, make_actor, add_report, admin_user
) -> None:
    other = await make_actor("Other Reporter")
    await add_report(target.id, reporter.id)
    await add_report(target.id, other.id)

    login(reporter_user)
    response = await async_client.get(BASE, params={"reportedBy": str(other.id)})
    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 1
    assert page["data"][0]["reportedBy"] == str(reporter.id)
    assert page["page"] == 1
    assert page["limit"] == 20
    assert page["totalPages"] == 1
    assert page["hasNext"] is False
    assert page["hasPrev"] is False

    login(admin_user)
    response = await async_client.get(BASE, params={"limit": 1, "page": 2, "sortOrder": "ASC"})
    page = response.json()
    assert page["total"] == 2
    assert len(page["data"]) == 1
    assert page["totalPages"] == 2
    assert page["hasNext"] is False
    assert page["hasPrev"] is True


@pytest.mark.asyncio
async def test_list_rejects_bad_query(async_client, login, reporter_user) -> None:
    login(reporter_user)
    response = await async_client.get(BASE, params={"limit": 500, "sortBy": "reason"})
    assert response.status_code == 400
    assert {e["field"] for e in response.json()["detail"]} == {"limit", "sortBy"}

    response = await async_client.get(BASE, params={"status": "archived"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_report_access(
    async_client, login, reporter, reporter_user, target, make_actor, add_report
) -> None:
    report = await add_report(target.id, reporter.id)

    login(reporter_user)
    response = await async_client.get(f"{BASE}/{report.id}")
    assert response.status_code == 200
    assert response.json()["id"] == str(report.id)

    stranger = await make_actor("Stranger")
    login(CurrentUser(id=stranger.id, email=stranger.email, roles=[Role.USER]))
    response = await async_client.get(f"{BASE}/{report.id}")
    assert response.status_code == 403
    assert response.json()["detail"] == "You can only view your own reports."

    response = await async_client.get(f"{BASE}/{uuid4()}")
    assert response.status_code == 404

    response = await async_client.get(f"{BASE}/not-a-uuid")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_routes_forbidden_for_standard_users(
    async_client, login, reporter, reporter_user, target, add_report
) -> None:
    report = await add_report(target.id, reporter.id)
    login(reporter_user)

    assert (await async_client.get(f"{ADMIN}/stats")).status_code == 403
    response = await async_client.put(f"{ADMIN}/{report.id}", json={"status": "resolved"})
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "admin_required"
    assert (await async_client.delete(f"{ADMIN}/{report.id}")).status_code == 403


@pytest.mark.asyncio
async def test_admin_delete_hides_report(
    async_client, login, reporter, target, admin_user, add_report
) -> None:
    report = await add_report(target.id, reporter.id)
    login(admin_user)

    response = await async_client.delete(f"{ADMIN}/{report.id}")
    assert response.status_code == 204
    assert response.content == b""

    assert (await async_client.get(f"{BASE}/{report.id}")).status_code == 404
    assert (await async_client.delete(f"{ADMIN}/{report.id}")).status_code == 404
    assert (await async_client.get(BASE)).json()["total"] == 0


@pytest.mark.asyncio
async def test_admin_notes_too_long(async_client, login, reporter, target, admin_user, add_report) -> None:
    report = await add_report(target.id, reporter.id)
    login(admin_user)
    response = await async_client.put(
        f"{ADMIN}/{report.id}", json={"status": "dismissed", "adminNotes": "n" * 501}
    )
    assert response.status_code == 400
    assert response.json()["detail"][0]["field"] == "adminNotes"


@pytest.mark.asyncio
async def test_request_id_echoed(async_client) -> None:
    response = await async_client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
