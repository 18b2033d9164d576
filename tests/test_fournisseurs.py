def test_crud(client, gestionnaire_headers):
    created = client.post(
        "/api/v1/fournisseurs",
        json={"nom": "Sarr", "entreprise": "Textiles du Sahel", "email": ""},
        headers=gestionnaire_headers,
    )
    assert created.status_code == 201
    fournisseur_id = created.json()["id"]
    assert created.json()["email"] is None

    found = client.get("/api/v1/fournisseurs", params={"search": "sahel"}, headers=gestionnaire_headers).json()
    assert found["pagination"]["total"] == 1

    updated = client.put(
        f"/api/v1/fournisseurs/{fournisseur_id}", json={"ville": "Dakar"}, headers=gestionnaire_headers
    )
    assert updated.json()["ville"] == "Dakar"

    assert client.delete(f"/api/v1/fournisseurs/{fournisseur_id}", headers=gestionnaire_headers).json() == {
        "success": True
    }


def test_delete_refused_with_orders(client, gestionnaire_headers, fournisseur_a, catalogue):
    client.post(
        "/api/v1/commandes",
        json={
            "fournisseurId": fournisseur_a.id,
            "lignes": [{"produitId": catalogue["produit"].id, "quantite": 1, "prixUnitaire": 20}],
        },
        headers=gestionnaire_headers,
    )

    response = client.delete(f"/api/v1/fournisseurs/{fournisseur_a.id}", headers=gestionnaire_headers)
    assert response.status_code == 400

    detail = client.get(f"/api/v1/fournisseurs/{fournisseur_a.id}", headers=gestionnaire_headers).json()
    assert detail["commandes"][0]["numeroCommande"] == "CMD-000001"
