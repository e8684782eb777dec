from hms.core.config import settings

API = settings.API_PREFIX


def test_health(client):
    assert client.get(f"{API}/health").json() == {"status": "ok"}


def test_local_env_without_token_acts_as_chief(client):
    res = client.get(f"{API}/me")
    assert res.status_code == 200
    assert res.json()["role"] == "admin"


def test_missing_token_outside_local(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod")
    assert client.get(f"{API}/patients").status_code == 401


def test_bad_token(client):
    res = client.get(f"{API}/patients", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_clerk_scopes(client, clerk_headers):
    me = client.get(f"{API}/me", headers=clerk_headers).json()
    assert me["role"] == "clerk"
    assert "appointments:write" in me["scopes"]
    assert client.get(f"{API}/posts", headers=clerk_headers).status_code == 200
    res = client.post(f"{API}/posts", json={"title": "Hi", "content": "There"}, headers=clerk_headers)
    assert res.status_code == 403
    res = client.put(f"{API}/availability/templates/D-001", json={"slots": ["09:00 AM"]}, headers=clerk_headers)
    assert res.status_code == 403


def test_admin_can_publish(client, admin_headers):
    res = client.post(f"{API}/posts", json={"title": "Hi", "content": "There"}, headers=admin_headers)
    assert res.status_code == 201
    assert res.json()["author_name"] == "Chief"


def test_booking_flow_and_conflict(client, clerk_headers):
    slots = client.get(f"{API}/availability/slots", params={"doctor_id": "D-001", "on": "2025-12-20"},
                       headers=clerk_headers).json()["slots"]
    assert "10:00 AM" not in slots
    body = {"patient_id": "P-002", "doctor_id": "D-001", "date": "2025-12-20", "time": slots[0]}
    res = client.post(f"{API}/appointments", json=body, headers=clerk_headers)
    assert res.status_code == 201
    res = client.post(f"{API}/appointments", json=body, headers=clerk_headers)
    assert res.status_code == 409
    assert res.json()["detail"] == "This slot is already booked for the selected doctor."


def test_cancel_with_waitlist_over_http(client, clerk_headers):
    res = client.post(f"{API}/appointments/A-001/status", json={"status": "Cancelled", "add_to_waitlist": True},
                      headers=clerk_headers)
    assert res.status_code == 200
    entry = res.json()["waitlist_entry"]
    assert entry["department"] == "Dermatology"
    listed = client.get(f"{API}/waitlist", headers=clerk_headers).json()
    assert [w["id"] for w in listed] == [entry["id"]]


def test_not_found_and_validation(client, clerk_headers):
    assert client.get(f"{API}/patients/P-404", headers=clerk_headers).status_code == 404
    assert client.get(f"{API}/availability/slots", params={"doctor_id": "D-404", "on": "2025-12-20"},
                      headers=clerk_headers).status_code == 404
    res = client.post(f"{API}/patients", json={"name": "X", "phone": "12", "doctor_id": "D-001", "nurse_id": "N-001"},
                      headers=clerk_headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "Phone must be 9-12 digits."
    assert client.post(f"{API}/patients", json={"name": "X"}, headers=clerk_headers).status_code == 422


def test_delete_doctor_with_dependents_conflicts(client, clerk_headers):
    res = client.delete(f"{API}/doctors/D-001", headers=clerk_headers)
    assert res.status_code == 409
    assert client.get(f"{API}/doctors/D-001", headers=clerk_headers).status_code == 200


def test_storage_failure_is_503(client, storage, store, clerk_headers):
    storage.fail_writes = True
    res = client.post(f"{API}/nurses", json={"name": "Nurse Lost", "department": "ER"}, headers=clerk_headers)
    assert res.status_code == 503
    assert len(store.nurses) == 2


def test_dashboard(client, clerk_headers):
    res = client.get(f"{API}/dashboard", params={"timeframe": "all"}, headers=clerk_headers)
    assert res.status_code == 200
    data = res.json()
    assert data["kpis"]["doctors_on_duty"] == 2
    assert len(data["appointments"]) == 2
    bad = client.get(f"{API}/dashboard", params={"timeframe": "custom", "start": "2025-02-01", "end": "2025-01-01"},
                     headers=clerk_headers)
    assert bad.status_code == 400


def test_notifications_decide_requires_write(client, clerk_headers, admin_headers):
    res = client.post(f"{API}/notifications/NTF-001/decision", json={"status": "approved"}, headers=clerk_headers)
    assert res.status_code == 403
    res = client.post(f"{API}/notifications/NTF-001/decision", json={"status": "approved"}, headers=admin_headers)
    assert res.json()["status"] == "approved"
    res = client.post(f"{API}/notifications/NTF-001/decision", json={"status": "rejected"}, headers=admin_headers)
    assert res.status_code == 409


def test_patch_appointment_rejects_null_fields(client, clerk_headers):
    for field in ("status", "date", "patient_id", "doctor_id", "time"):
        res = client.patch(f"{API}/appointments/A-001", json={field: None}, headers=clerk_headers)
        assert res.status_code == 422, field
    assert client.get(f"{API}/appointments/A-001", headers=clerk_headers).json()["status"] == "Scheduled"


def test_patch_patient_with_null_status_is_a_validation_error(client, clerk_headers):
    res = client.patch(f"{API}/patients/P-001", json={"status": None}, headers=clerk_headers)
    assert res.status_code == 400
    assert client.get(f"{API}/patients/P-001", headers=clerk_headers).json()["status"] == "In Treatment"
