def test_depense_requires_category(client, gestionnaire_headers):
    response = client.post(
        "/api/v1/transactions",
        json={"type": "DEPENSE", "montant": 30, "description": "Loyer", "categorie": "Local"},
        headers=gestionnaire_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert "categorieDepense" in response.json()["details"]


def test_depense_is_stored_negative_and_counted(client, gestionnaire_headers):
    recette = client.post(
        "/api/v1/transactions",
        json={"type": "RECETTE", "montant": 200, "description": "Retouches", "categorie": "Services"},
        headers=gestionnaire_headers,
    )
    depense = client.post(
        "/api/v1/transactions",
        json={
            "type": "DEPENSE", "montant": 80, "description": "Électricité",
            "categorie": "Charges", "categorieDepense": "EXPLOITATION",
        },
        headers=gestionnaire_headers,
    )
    assert recette.status_code == 201
    assert depense.json()["montant"] == -80

    body = client.get("/api/v1/transactions", headers=gestionnaire_headers).json()
    assert body["pagination"]["total"] == 2
    assert body["stats"] == {
        "recettesMois": 200,
        "depensesMois": 80,
        "beneficeMois": 120,
        "solde": 1120,
    }

    filtered = client.get("/api/v1/transactions", params={"type": "DEPENSE"}, headers=gestionnaire_headers).json()
    assert [t["description"] for t in filtered["transactions"]] == ["Électricité"]


def test_update_and_delete(client, gestionnaire_headers, gestionnaire_b_headers):
    created = client.post(
        "/api/v1/transactions",
        json={"type": "RECETTE", "montant": 50, "description": "Divers", "categorie": "Autre"},
        headers=gestionnaire_headers,
    ).json()

    updated = client.put(
        f"/api/v1/transactions/{created['id']}", json={"montant": 75}, headers=gestionnaire_headers
    )
    assert updated.json()["montant"] == 75

    assert client.delete(
        f"/api/v1/transactions/{created['id']}", headers=gestionnaire_b_headers
    ).status_code == 404
    assert client.delete(
        f"/api/v1/transactions/{created['id']}", headers=gestionnaire_headers
    ).json() == {"success": True}


def test_capital_injection_cannot_be_edited(client, admin_headers, gestionnaire_headers, boutique_a):
    injection = client.post(
        "/api/v1/capital",
        json={"boutiqueId": boutique_a.id, "montant": 100, "description": "Apport"},
        headers=admin_headers,
    ).json()

    response = client.delete(f"/api/v1/transactions/{injection['id']}", headers=gestionnaire_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "BUSINESS_ERROR"
