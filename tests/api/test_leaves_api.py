import pytest

LEAVE = {"type": "Medical", "fromDate": "2024-06-01", "toDate": "2024-06-05", "reason": "Doctor appointment in town"}


def test_submit_decide_flow(login, notifications):
    created = login("usr-s1").post("/leaves", json=LEAVE)
    assert created.status_code == 201
    leave_id = created.get_json()["data"]["id"]
    assert created.get_json()["data"]["status"] == "PENDING"
    assert len(notifications.rows) == 2

    decided = login("usr-admin").put(f"/leaves/{leave_id}", json={"status": "approved", "remarks": "ok"})
    assert decided.status_code == 200
    assert decided.get_json()["message"] == "Leave request approved"
    assert decided.get_json()["data"]["approverId"] == "usr-admin"

    crossing = login("usr-admin").put(f"/leaves/{leave_id}", json={"status": "REJECTED"})
    assert crossing.status_code == 400

    withdraw = login("usr-s1").delete(f"/leaves/{leave_id}")
    assert withdraw.status_code == 400


def test_overlap_and_quota_are_conflicts(login):
    client = login("usr-s1")
    assert client.post("/leaves", json=LEAVE).status_code == 201

    overlap = client.post("/leaves", json={**LEAVE, "fromDate": "2024-06-03", "toDate": "2024-06-10"})
    assert overlap.status_code == 409

    client.post("/leaves", json={**LEAVE, "fromDate": "2024-07-01", "toDate": "2024-07-01"})
    client.post("/leaves", json={**LEAVE, "fromDate": "2024-08-01", "toDate": "2024-08-01"})
    quota = client.post("/leaves", json={**LEAVE, "fromDate": "2024-09-01", "toDate": "2024-09-01"})
    assert quota.status_code == 409


def test_validation_reports_fields(login):
    resp = login("usr-s1").post("/leaves", json={**LEAVE, "fromDate": "2024-06-10"})

    assert resp.status_code == 400
    assert resp.get_json()["data"] == {"fields": ["toDate"]}


def test_admin_cannot_submit(login):
    assert login("usr-admin").post("/leaves", json=LEAVE).status_code == 403


def test_list_scoping_and_status_filter(login):
    login("usr-s1").post("/leaves", json=LEAVE)
    login("usr-s2").post("/leaves", json=LEAVE)

    assert len(login("usr-admin").get("/leaves").get_json()["data"]) == 2
    assert len(login("usr-s2").get("/leaves").get_json()["data"]) == 1
    assert login("usr-admin").get("/leaves?status=approved").get_json()["data"] == []
    assert login("usr-admin").get("/leaves?status=maybe").status_code == 400


def test_missing_leave(login):
    assert login("usr-admin").get("/leaves/lv-nope").status_code == 404


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"fromDate": 20240601}, "fromDate"),
        ({"toDate": {"day": 5}}, "toDate"),
        ({"type": 12}, "type"),
        ({"reason": ["Doctor appointment in town"]}, "reason"),
    ],
)
def test_wrongly_typed_leave_fields_are_validation_errors(login, overrides, field):
    resp = login("usr-s1").post("/leaves", json={**LEAVE, **overrides})

    assert resp.status_code == 400
    assert resp.get_json()["data"] == {"fields": [field]}


def test_non_string_remarks_are_rejected(login, leaves):
    leave_id = login("usr-s1").post("/leaves", json=LEAVE).get_json()["data"]["id"]

    resp = login("usr-admin").put(f"/leaves/{leave_id}", json={"status": "APPROVED", "remarks": 42})

    assert resp.status_code == 400
    assert resp.get_json()["data"] == {"fields": ["remarks"]}
    assert leaves.get_by_id(leave_id).status.value == "PENDING"
