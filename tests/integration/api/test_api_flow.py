from __future__ import annotations


def _auth_headers(client, email="ana@example.com", password="pass-1234"):
    registered = client.post("/api/auth/register", json={"name": "Ana", "email": email, "password": password})
    assert registered.status_code == 201
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] is True
    return {"Authorization": f"Bearer {body['token']}"}


def _by_name(rows, name):
    return next(row for row in rows if row["name"] == name)


def test_health_is_public_inside_and_outside_prefix(client):
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()["ok"] is True


def test_protected_routes_require_bearer_token(client):
    response = client.get("/api/projects")
    assert response.status_code == 401
    assert response.json() == {"message": "Authorization header is required."}

    response = client.get("/api/negotiations", headers={"Authorization": "Token abc"})
    assert response.status_code == 401

    response = client.get("/api/projects", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401


def test_register_and_login_contract(client):
    headers = _auth_headers(client)

    duplicate = client.post("/api/auth/register", json={"name": "Ana", "email": "ANA@example.com", "password": "x"})
    assert duplicate.status_code == 409

    missing = client.post("/api/auth/register", json={"email": "bob@example.com"})
    assert missing.status_code == 400
    assert "required" in missing.json()["message"]

    wrong = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "nope"})
    assert wrong.status_code == 200
    assert wrong.json() == {"status": False, "message": "Invalid credentials."}

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "pass-1234"})
    assert unknown.json() == wrong.json()

    me = client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "ana@example.com"


def test_project_to_negotiation_flow(client):
    headers = _auth_headers(client)
    me = client.get("/api/auth/me", headers=headers).json()["user"]

    acme = _by_name(client.get("/api/projects/clients", headers=headers).json(), "Acme Corp")
    consulting = _by_name(client.get("/api/projects/types", headers=headers).json(), "Consulting")
    sellers = client.get("/api/projects/sellers", headers=headers).json()
    assert [seller["id"] for seller in sellers] == [me["id"]]
    log_status = client.get("/api/projects/statusWithBitacora", headers=headers).json()
    assert log_status["name"] == "In negotiation"

    created = client.post(
        "/api/projects",
        headers=headers,
        json={"project": "CRM rollout", "clientId": acme["id"], "typeId": consulting["id"], "value": "1.500,50"},
    )
    assert created.status_code == 201
    project_id = created.json()["id"]

    projects = client.get("/api/projects", headers=headers).json()
    assert len(projects) == 1
    assert projects[0]["id"] == project_id
    assert projects[0]["estimatedValue"] == "1500.5"
    assert projects[0]["statusName"] == "Prospect"
    assert projects[0]["sellerId"] == me["id"]

    moved = client.patch(f"/api/projects/{project_id}", headers=headers, json={"statusId": log_status["id"]})
    assert moved.status_code == 200
    assert moved.json()["generaBitacora"] is True

    opened = client.post(
        "/api/negotiations",
        headers=headers,
        json={"projectId": project_id, "clientId": acme["id"], "sellerId": me["id"], "description": "Kick-off call"},
    )
    assert opened.status_code == 201
    negotiation = opened.json()
    assert negotiation["logsCount"] == 1
    assert negotiation["project"]["id"] == project_id

    again = client.post(
        "/api/negotiations",
        headers=headers,
        json={"projectId": project_id, "clientId": acme["id"], "sellerId": me["id"], "description": "Twice"},
    )
    assert again.status_code == 409
    assert again.json() == {"message": "Project already has a negotiation."}

    logged = client.post(
        f"/api/negotiations/{negotiation['id']}/logs",
        headers=headers,
        json={"description": "Sent revised quote"},
    )
    assert logged.status_code == 201
    assert logged.json()["sellerId"] == me["id"]

    detail = client.get(f"/api/negotiations/{negotiation['id']}", headers=headers).json()
    assert detail["logsCount"] == 2
    assert {log["description"] for log in detail["logs"]} == {"Kick-off call", "Sent revised quote"}

    listed = client.get("/api/negotiations", headers=headers).json()
    assert [row["id"] for row in listed] == [negotiation["id"]]

    blocked = client.delete(f"/api/projects/{project_id}", headers=headers)
    assert blocked.status_code == 409


def test_project_update_and_delete_errors(client):
    headers = _auth_headers(client)
    acme = _by_name(client.get("/api/projects/clients", headers=headers).json(), "Acme Corp")
    consulting = _by_name(client.get("/api/projects/types", headers=headers).json(), "Consulting")

    invalid = client.post(
        "/api/projects",
        headers=headers,
        json={"name": "Negative", "clientId": acme["id"], "businessTypeId": consulting["id"], "estimatedValue": -5},
    )
    assert invalid.status_code == 400

    project_id = client.post(
        "/api/projects",
        headers=headers,
        json={"name": "Small job", "clientId": acme["id"], "businessTypeId": consulting["id"], "estimatedValue": 100},
    ).json()["id"]

    empty = client.put(f"/api/projects/{project_id}", headers=headers, json={"unrelated": 1})
    assert empty.status_code == 400
    assert "No updatable fields" in empty.json()["message"]

    missing = client.patch("/api/projects/missing", headers=headers, json={"name": "Renamed"})
    assert missing.status_code == 404

    renamed = client.put(f"/api/projects/{project_id}", headers=headers, json={"name": "Bigger job", "value": 250.25})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Bigger job"
    assert renamed.json()["estimatedValue"] == "250.25"

    deleted = client.delete(f"/api/projects/{project_id}", headers=headers)
    assert deleted.json() == {"id": project_id, "deleted": True}
    assert client.delete(f"/api/projects/{project_id}", headers=headers).status_code == 404

    assert client.get("/api/negotiations/missing", headers=headers).status_code == 404


def test_login_with_non_object_body_is_a_plain_credential_failure(client):
    for body in ([], "x", 42, None):
        response = client.post("/api/auth/login", json=body)
        assert response.status_code == 200
        assert response.json() == {"status": False, "message": "Invalid credentials."}


def test_bearer_scheme_must_match_exactly(client):
    headers = _auth_headers(client)
    token = headers["Authorization"].split(" ")[1]

    assert client.get("/api/auth/me", headers=headers).status_code == 200
    for value in (f"bearer {token}", f"BEARER {token}", f"Bearer  {token}", f"Bearer {token} extra"):
        response = client.get("/api/auth/me", headers={"Authorization": value})
        assert response.status_code == 401
        assert response.json() == {"message": "Authorization header must be: Bearer <token>."}


def test_log_timestamps_keep_their_utc_offset_on_read(client):
    headers = _auth_headers(client)
    acme = _by_name(client.get("/api/projects/clients", headers=headers).json(), "Acme Corp")
    consulting = _by_name(client.get("/api/projects/types", headers=headers).json(), "Consulting")
    me = client.get("/api/auth/me", headers=headers).json()["user"]
    project_id = client.post(
        "/api/projects",
        headers=headers,
        json={"name": "Clock check", "clientId": acme["id"], "businessTypeId": consulting["id"], "estimatedValue": 1},
    ).json()["id"]
    negotiation_id = client.post(
        "/api/negotiations",
        headers=headers,
        json={"projectId": project_id, "clientId": acme["id"], "sellerId": me["id"], "description": "Opened"},
    ).json()["id"]

    posted = client.post(f"/api/negotiations/{negotiation_id}/logs", headers=headers, json={"description": "follow up"})
    detail = client.get(f"/api/negotiations/{negotiation_id}", headers=headers).json()
    read_back = next(log for log in detail["logs"] if log["id"] == posted.json()["id"])

    assert read_back["date"] == posted.json()["date"]
    assert detail["createdAt"].endswith(("Z", "+00:00"))
