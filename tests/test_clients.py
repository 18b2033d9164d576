def test_empty_email_is_stored_as_null(client, gestionnaire_headers):
    for nom in ("Sow", "Fall"):
        response = client.post(
            "/api/v1/clients", json={"nom": nom, "email": ""}, headers=gestionnaire_headers
        )
        assert response.status_code == 201
        assert response.json()["email"] is None
        assert response.json()["_count"] == {"ventes": 0}


def test_email_unique_per_boutique(client, gestionnaire_headers, gestionnaire_b_headers):
    payload = {"nom": "Ba", "email": "ba@client.com"}
    assert client.post("/api/v1/clients", json=payload, headers=gestionnaire_headers).status_code == 201

    duplicate = client.post("/api/v1/clients", json=payload, headers=gestionnaire_headers)
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "CONFLICT"
    assert duplicate.json()["details"]["field"] == "email"

    assert client.post("/api/v1/clients", json=payload, headers=gestionnaire_b_headers).status_code == 201


def test_list_is_paginated_and_searchable(client, gestionnaire_headers, client_a):
    client.post("/api/v1/clients", json={"nom": "Kane"}, headers=gestionnaire_headers)

    response = client.get("/api/v1/clients", params={"search": "diallo", "limit": 5}, headers=gestionnaire_headers)
    body = response.json()
    assert response.status_code == 200
    assert [c["id"] for c in body["clients"]] == [client_a.id]
    assert body["pagination"] == {"page": 1, "limit": 5, "total": 1, "pages": 1}


def test_other_boutique_cannot_read(client, gestionnaire_b_headers, client_a):
    response = client.get(f"/api/v1/clients/{client_a.id}", headers=gestionnaire_b_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_delete_refused_with_sales(client, gestionnaire_headers, client_a, catalogue):
    sale = client.post(
        "/api/v1/ventes",
        json={"clientId": client_a.id, "lignes": [{"produitId": catalogue["produit"].id, "quantite": 1}]},
        headers=gestionnaire_headers,
    )
    assert sale.status_code == 201

    response = client.delete(f"/api/v1/clients/{client_a.id}", headers=gestionnaire_headers)
    assert response.status_code == 400
    assert response.json()["details"] == {"ventes": 1}

    detail = client.get(f"/api/v1/clients/{client_a.id}", headers=gestionnaire_headers).json()
    assert detail["ventes"][0]["numeroVente"] == "V001"


def test_every_invalid_field_is_reported(client, gestionnaire_headers):
    response = client.post("/api/v1/clients", json={"email": "pas-un-email"}, headers=gestionnaire_headers)

    assert response.status_code == 400
    details = response.json()["details"]
    assert {"nom", "email"} <= set(details)
    assert client.get("/api/v1/clients", headers=gestionnaire_headers).json()["pagination"]["total"] == 0
