"""HTTP tests for authentication and the session endpoints."""


def test_health_is_public(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_missing_authorization_is_401(client):
    assert client.get("/api/me").status_code == 401


def test_malformed_authorization_is_400(client):
    assert client.get("/api/me", headers={"Authorization": "Token 1"}).status_code == 400
    assert client.get("/api/me", headers={"Authorization": "Bearer abc"}).status_code == 400


def test_unknown_user_is_401(client):
    assert client.get("/api/me", headers={"Authorization": "Bearer 99999"}).status_code == 401


def test_me_returns_expanded_permissions(client, auth_headers):
    r = client.get("/api/me", headers=auth_headers("rita_reviewer"))
    assert r.status_code == 200
    body = r.json()
    assert body["roles"] == ["Reviewer"]
    assert body["department_name"] == "Finance"
    assert {"resource": "compliance.governance", "action": "view", "scope": "global"} in body["permissions"]


def test_me_zero_roles_falls_back_to_contributor(client, auth_headers):
    body = client.get("/api/me", headers=auth_headers("nora_no_roles")).json()
    assert body["assigned_roles"] == []
    assert body["roles"] == ["Contributor"]


def test_navigation_is_pruned(client, auth_headers):
    r = client.get("/api/me/navigation", headers=auth_headers("rita_reviewer"))
    assert r.status_code == 200
    names = [item["name"] for item in r.json()]
    assert "Internal Audit" not in names
    assert "Compliance" in names
    for item in r.json():
        if item["href"] is None:
            assert item["children"]


def test_navigation_for_audit_head(client, auth_headers):
    names = [item["name"] for item in client.get("/api/me/navigation", headers=auth_headers("hank_audit_head")).json()]
    assert names == ["Dashboard", "Internal Audit", "Log Out"]
