def test_create_opens_empty_stock(client, gestionnaire_headers, catalogue):
    response = client.post(
        "/api/v1/produits",
        json={"nom": "Sandale", "prixAchat": 8, "prixVente": 15, "categorieId": catalogue["categorie"].id},
        headers=gestionnaire_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["quantiteStock"] == 0
    assert body["categorie"]["nom"] == "Chaussures"

    stocks = client.get("/api/v1/stocks", params={"search": "Sandale"}, headers=gestionnaire_headers).json()
    assert stocks["stocks"][0]["quantite"] == 0


def test_category_must_belong_to_boutique(client, gestionnaire_b_headers, catalogue):
    response = client.post(
        "/api/v1/produits",
        json={"nom": "Sandale", "prixAchat": 8, "prixVente": 15, "categorieId": catalogue["categorie"].id},
        headers=gestionnaire_b_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Catégorie non trouvée"


def test_prices_must_be_positive(client, gestionnaire_headers, catalogue):
    response = client.post(
        "/api/v1/produits",
        json={"nom": "Sandale", "prixAchat": 0, "prixVente": 15, "categorieId": catalogue["categorie"].id},
        headers=gestionnaire_headers,
    )

    assert response.status_code == 400
    assert "prixAchat" in response.json()["details"]


def test_list_and_delete_guard(client, gestionnaire_headers, catalogue):
    produit_id = catalogue["produit"].id

    listing = client.get("/api/v1/produits", params={"search": "bask"}, headers=gestionnaire_headers).json()
    assert listing["produits"][0]["quantiteStock"] == 10

    client.post(
        "/api/v1/ventes", json={"lignes": [{"produitId": produit_id, "quantite": 1}]}, headers=gestionnaire_headers
    )
    response = client.delete(f"/api/v1/produits/{produit_id}", headers=gestionnaire_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "BUSINESS_ERROR"
