def test_list_with_stats_for_boutique_without_sales(client, admin_headers, boutique_a):
    response = client.get("/api/v1/boutiques", params={"includeStats": "true"}, headers=admin_headers)

    assert response.status_code == 200
    boutiques = response.json()
    assert len(boutiques) == 1
    assert boutiques[0]["stats"]["totalVentes"] == 0
    assert boutiques[0]["stats"]["totalImpayes"] == 0
    assert boutiques[0]["capitalInitial"] == 1000


def test_list_without_stats(client, admin_headers, boutique_a):
    response = client.get("/api/v1/boutiques", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()[0]["stats"] is None


def test_create_and_read(client, admin_headers):
    response = client.post(
        "/api/v1/boutiques", json={"nom": "Nouvelle", "capitalInitial": 250}, headers=admin_headers
    )
    assert response.status_code == 201
    boutique_id = response.json()["id"]

    detail = client.get(f"/api/v1/boutiques/{boutique_id}", headers=admin_headers).json()
    assert detail["nom"] == "Nouvelle"
    assert detail["users"] == []
    assert detail["_count"] == {"produits": 0, "ventes": 0, "clients": 0}


def test_gestionnaire_is_forbidden(client, gestionnaire_headers, boutique_a):
    assert client.get("/api/v1/boutiques", headers=gestionnaire_headers).status_code == 403

    response = client.post("/api/v1/boutiques", json={"nom": "Valide"}, headers=gestionnaire_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "AUTHORIZATION_ERROR"


def test_delete_refused_with_users(client, admin_headers, boutique_a, gestionnaire):
    response = client.delete(f"/api/v1/boutiques/{boutique_a.id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "BUSINESS_ERROR"
    assert client.get(f"/api/v1/boutiques/{boutique_a.id}", headers=admin_headers).status_code == 200


def test_delete_empty_boutique(client, admin_headers, boutique_b):
    response = client.delete(f"/api/v1/boutiques/{boutique_b.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/v1/boutiques/{boutique_b.id}", headers=admin_headers).status_code == 404


def test_path_id_and_boutique_query_are_distinct(client, admin_headers, boutique_a, boutique_b):
    response = client.get(
        f"/api/v1/boutiques/{boutique_a.id}", params={"boutiqueId": boutique_b.id}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["id"] == boutique_a.id
