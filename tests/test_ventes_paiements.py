import pytest


def _stock_quantite(client, headers):
    return client.get("/api/v1/stocks", headers=headers).json()["stocks"][0]["quantite"]


@pytest.fixture
def vente(client, gestionnaire_headers, catalogue, client_a):
    response = client.post(
        "/api/v1/ventes",
        json={
            "clientId": client_a.id,
            "lignes": [{"produitId": catalogue["produit"].id, "quantite": 3}],
            "montantPaye": 100,
        },
        headers=gestionnaire_headers,
    )
    assert response.status_code == 201
    return response.json()


def test_sale_totals_and_stock(client, gestionnaire_headers, vente):
    assert vente["numeroVente"] == "V001"
    assert vente["montantTotal"] == 150
    assert vente["montantPaye"] == 100
    assert vente["montantRestant"] == 50
    assert vente["statut"] == "PARTIEL"
    assert vente["lignes"][0]["prixUnitaire"] == 50
    assert _stock_quantite(client, gestionnaire_headers) == 7

    mouvements = client.get("/api/v1/stocks/mouvements", headers=gestionnaire_headers).json()["mouvements"]
    assert mouvements[0]["type"] == "SORTIE"
    assert mouvements[0]["venteId"] == vente["id"]


def test_unpaid_sale_and_numbering(client, gestionnaire_headers, catalogue, vente):
    response = client.post(
        "/api/v1/ventes",
        json={"lignes": [{"produitId": catalogue["produit"].id, "quantite": 1, "prixUnitaire": 45}], "montantPaye": 0},
        headers=gestionnaire_headers,
    )
    body = response.json()
    assert body["numeroVente"] == "V002"
    assert body["statut"] == "IMPAYE"
    assert body["montantRestant"] == 45


def test_insufficient_stock_leaves_nothing_behind(client, gestionnaire_headers, catalogue):
    response = client.post(
        "/api/v1/ventes",
        json={"lignes": [{"produitId": catalogue["produit"].id, "quantite": 11}]},
        headers=gestionnaire_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "BUSINESS_ERROR"
    assert _stock_quantite(client, gestionnaire_headers) == 10
    assert client.get("/api/v1/ventes", headers=gestionnaire_headers).json()["pagination"]["total"] == 0


def test_product_of_another_boutique(client, gestionnaire_b_headers, catalogue):
    response = client.post(
        "/api/v1/ventes",
        json={"lignes": [{"produitId": catalogue["produit"].id, "quantite": 1}]},
        headers=gestionnaire_b_headers,
    )
    assert response.status_code == 404


def test_sale_is_isolated(client, gestionnaire_b_headers, admin_headers, vente):
    assert client.get(f"/api/v1/ventes/{vente['id']}", headers=gestionnaire_b_headers).status_code == 404
    assert client.get(f"/api/v1/ventes/{vente['id']}", headers=admin_headers).status_code == 200


def test_payment_flow(client, gestionnaire_headers, vente):
    too_much = client.post(
        "/api/v1/paiements",
        json={"venteId": vente["id"], "montant": 60, "methodePaiement": "ESPECES"},
        headers=gestionnaire_headers,
    )
    assert too_much.status_code == 400
    assert too_much.json()["error"] == "Le montant du paiement dépasse le montant restant"

    creances = client.get("/api/v1/paiements", headers=gestionnaire_headers).json()
    assert [c["id"] for c in creances["creances"]] == [vente["id"]]
    assert creances["creances"][0]["joursRetard"] == 0
    assert creances["creances"][0]["enRetard"] is False

    paiement = client.post(
        "/api/v1/paiements",
        json={"venteId": vente["id"], "montant": 50, "methodePaiement": "MOBILE", "reference": "OM-1"},
        headers=gestionnaire_headers,
    )
    assert paiement.status_code == 201
    assert paiement.json()["vente"]["statut"] == "PAYE"

    detail = client.get(f"/api/v1/ventes/{vente['id']}", headers=gestionnaire_headers).json()
    assert detail["montantRestant"] == 0
    assert len(detail["paiements"]) == 1

    creances = client.get("/api/v1/paiements", headers=gestionnaire_headers).json()
    assert creances["creances"] == []
    assert creances["statistiques"]["nombreCreances"] == 1
    assert creances["statistiques"]["montantTotalCreances"] == 150
    assert creances["statistiques"]["montantTotalRestant"] == 0

    transactions = client.get("/api/v1/transactions", headers=gestionnaire_headers).json()
    assert transactions["stats"]["recettesMois"] == 150


def test_delete_payment_reopens_receivable(client, gestionnaire_headers, vente):
    paiement = client.post(
        "/api/v1/paiements",
        json={"venteId": vente["id"], "montant": 50, "methodePaiement": "ESPECES"},
        headers=gestionnaire_headers,
    ).json()

    response = client.delete(f"/api/v1/paiements/{paiement['id']}", headers=gestionnaire_headers)
    assert response.json() == {"success": True}

    detail = client.get(f"/api/v1/ventes/{vente['id']}", headers=gestionnaire_headers).json()
    assert detail["statut"] == "PARTIEL"
    assert detail["montantRestant"] == 50

    transactions = client.get("/api/v1/transactions", headers=gestionnaire_headers).json()
    assert transactions["stats"]["recettesMois"] == 100


def test_cancel_sale_restores_stock(client, gestionnaire_headers, vente):
    response = client.delete(f"/api/v1/ventes/{vente['id']}", headers=gestionnaire_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert _stock_quantite(client, gestionnaire_headers) == 10
    assert client.get(f"/api/v1/ventes/{vente['id']}", headers=gestionnaire_headers).status_code == 404


def test_list_filters(client, gestionnaire_headers, vente):
    by_client = client.get("/api/v1/ventes", params={"search": "diallo"}, headers=gestionnaire_headers).json()
    assert by_client["pagination"]["total"] == 1

    paid = client.get("/api/v1/ventes", params={"statut": "PAYE"}, headers=gestionnaire_headers).json()
    assert paid["ventes"] == []


def test_payment_deletion_keeps_recette_of_cancelled_sale(client, gestionnaire_headers, catalogue):
    def vente_avec_paiement():
        vente = client.post(
            "/api/v1/ventes",
            json={"lignes": [{"produitId": catalogue["produit"].id, "quantite": 1}], "montantPaye": 0},
            headers=gestionnaire_headers,
        ).json()
        paiement = client.post(
            "/api/v1/paiements",
            json={"venteId": vente["id"], "montant": 20, "methodePaiement": "ESPECES"},
            headers=gestionnaire_headers,
        ).json()
        return vente, paiement

    annulee, _ = vente_avec_paiement()
    client.delete(f"/api/v1/ventes/{annulee['id']}", headers=gestionnaire_headers)

    reprise, paiement = vente_avec_paiement()
    assert reprise["numeroVente"] == annulee["numeroVente"]

    client.delete(f"/api/v1/paiements/{paiement['id']}", headers=gestionnaire_headers)

    recettes = client.get(
        "/api/v1/transactions", params={"type": "RECETTE"}, headers=gestionnaire_headers
    ).json()["transactions"]
    assert len(recettes) == 1
    assert recettes[0]["paiementId"] is None
    assert recettes[0]["description"] == f"Paiement vente #{annulee['numeroVente']}"
