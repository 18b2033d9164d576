def test_gestionnaire_requires_boutique(client, admin_headers):
    response = client.post(
        "/api/v1/utilisateurs",
        json={"name": "Sans boutique", "email": "sans@boutique.com", "password": "secret123", "role": "GESTIONNAIRE"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert "boutiqueId" in response.json()["details"]


def test_create_and_login(client, admin_headers, boutique_a):
    response = client.post(
        "/api/v1/utilisateurs",
        json={
            "name": "Nouveau", "email": "nouveau@boutique.com", "password": "motdepasse",
            "role": "GESTIONNAIRE", "boutiqueId": boutique_a.id,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert "password" not in response.json()
    assert "passwordHash" not in response.json()

    login = client.post(
        "/api/v1/auth/login-json", json={"email": "nouveau@boutique.com", "password": "motdepasse"}
    )
    assert login.status_code == 200


def test_duplicate_email(client, admin_headers, gestionnaire, boutique_a):
    response = client.post(
        "/api/v1/utilisateurs",
        json={
            "name": "Doublon", "email": gestionnaire.email, "password": "secret123",
            "role": "GESTIONNAIRE", "boutiqueId": boutique_a.id,
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "email"}


def test_list_filtered_by_boutique(client, admin_headers, gestionnaire, gestionnaire_b, boutique_a):
    response = client.get("/api/v1/utilisateurs", params={"boutiqueId": boutique_a.id}, headers=admin_headers)

    assert [u["email"] for u in response.json()] == [gestionnaire.email]


def test_delete_rules(client, admin, admin_headers, gestionnaire, gestionnaire_headers):
    own = client.delete(f"/api/v1/utilisateurs/{admin.id}", headers=admin_headers)
    assert own.status_code == 400

    client.post(
        "/api/v1/transactions",
        json={"type": "RECETTE", "montant": 10, "description": "Caisse", "categorie": "Divers"},
        headers=gestionnaire_headers,
    )
    active = client.delete(f"/api/v1/utilisateurs/{gestionnaire.id}", headers=admin_headers)
    assert active.status_code == 400
    assert active.json()["code"] == "BUSINESS_ERROR"
