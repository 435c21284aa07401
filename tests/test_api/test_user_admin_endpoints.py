"""HTTP tests for role listing and role assignment."""


def test_roles_listing(client, auth_headers):
    r = client.get("/api/roles", headers=auth_headers("cust_admin"))
    assert r.status_code == 200
    assert len(r.json()) == 11


def test_users_listing_requires_permission(client, auth_headers):
    assert client.get("/api/users", headers=auth_headers("colin_contrib")).status_code == 403
    r = client.get("/api/users", headers=auth_headers("cust_admin"))
    assert r.status_code == 200
    assert "nora_no_roles" in [u["username"] for u in r.json()]


def test_assign_roles_takes_effect_on_next_request(client, auth_headers, ids):
    nora = ids["users"]["nora_no_roles"]
    r = client.put(f"/api/users/{nora}/roles", json={"roles": ["Reviewer"]}, headers=auth_headers("cust_admin"))
    assert r.status_code == 200
    assert [role["name"] for role in r.json()["roles"]] == ["Reviewer"]

    me = client.get("/api/me", headers=auth_headers("nora_no_roles")).json()
    assert me["roles"] == ["Reviewer"]


def test_assign_unknown_role_is_404(client, auth_headers, ids):
    nora = ids["users"]["nora_no_roles"]
    r = client.put(f"/api/users/{nora}/roles", json={"roles": ["Overlord"]}, headers=auth_headers("cust_admin"))
    assert r.status_code == 404
    assert "Overlord" in r.json()["detail"]


def test_assign_roles_requires_edit(client, auth_headers, ids):
    nora = ids["users"]["nora_no_roles"]
    r = client.put(f"/api/users/{nora}/roles", json={"roles": []}, headers=auth_headers("colin_contrib"))
    assert r.status_code == 403
