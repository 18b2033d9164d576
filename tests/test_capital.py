def test_gestionnaire_is_forbidden(client, gestionnaire_headers, boutique_a):
    response = client.post(
        "/api/v1/capital",
        json={"boutiqueId": boutique_a.id, "montant": 100, "description": "Apport"},
        headers=gestionnaire_headers,
    )
    assert response.status_code == 403
    assert client.get("/api/v1/capital", headers=gestionnaire_headers).status_code == 403


def test_unknown_boutique(client, admin_headers):
    response = client.post(
        "/api/v1/capital",
        json={"boutiqueId": "inexistante", "montant": 100, "description": "Apport"},
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Boutique introuvable"


def test_amount_must_be_positive(client, admin_headers, boutique_a):
    response = client.post(
        "/api/v1/capital",
        json={"boutiqueId": boutique_a.id, "montant": 0, "description": "Apport"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "montant" in response.json()["details"]


def test_injection_feeds_balance(client, admin_headers, boutique_a):
    response = client.post(
        "/api/v1/capital",
        json={"boutiqueId": boutique_a.id, "montant": 500, "description": "Apport associé"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["type"] == "INJECTION_CAPITAL"

    injections = client.get("/api/v1/capital", headers=admin_headers).json()
    assert [i["montant"] for i in injections] == [500]

    transactions = client.get(
        "/api/v1/transactions", params={"boutiqueId": boutique_a.id}, headers=admin_headers
    ).json()
    assert transactions["stats"]["solde"] == 1500
