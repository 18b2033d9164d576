def test_manual_movements(client, gestionnaire_headers, catalogue):
    stock_id = catalogue["stock"].id

    entree = client.post(
        "/api/v1/stocks/mouvements",
        json={"stockId": stock_id, "type": "ENTREE", "quantite": 5, "motif": "Inventaire"},
        headers=gestionnaire_headers,
    )
    assert entree.status_code == 201

    sortie = client.post(
        "/api/v1/stocks/mouvements",
        json={"stockId": stock_id, "type": "SORTIE", "quantite": 20, "motif": "Casse"},
        headers=gestionnaire_headers,
    )
    assert sortie.status_code == 400
    assert sortie.json()["error"] == "Stock insuffisant. Quantité disponible: 15"

    stock = client.get(f"/api/v1/stocks/{stock_id}", headers=gestionnaire_headers).json()
    assert stock["quantite"] == 15
    assert stock["derniereEntree"] is not None


def test_alert_filter(client, gestionnaire_headers, catalogue):
    client.post(
        "/api/v1/stocks/mouvements",
        json={"stockId": catalogue["stock"].id, "type": "SORTIE", "quantite": 8, "motif": "Vente comptoir"},
        headers=gestionnaire_headers,
    )

    body = client.get("/api/v1/stocks", params={"alerte": "true"}, headers=gestionnaire_headers).json()
    assert body["stocksEnAlerte"] == 1
    assert body["stocks"][0]["alerte"] is True
    assert body["stocks"][0]["produit"]["categorie"]["nom"] == "Chaussures"


def test_stock_of_another_boutique(client, gestionnaire_b_headers, catalogue):
    response = client.post(
        "/api/v1/stocks/mouvements",
        json={"stockId": catalogue["stock"].id, "type": "ENTREE", "quantite": 1, "motif": "Test"},
        headers=gestionnaire_b_headers,
    )
    assert response.status_code == 404
