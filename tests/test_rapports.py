from datetime import date
from types import SimpleNamespace

import pytest

from boutique_manager.core.exceptions import ValidationError
from boutique_manager.modules.rapports.schemas import Periode
from boutique_manager.modules.rapports.service import period_bounds
from boutique_manager.shared.services.statistics import stock_levels, stock_value

WIDE = {"dateDebut": "2000-01-01", "dateFin": "2100-12-31"}
TODAY = date(2024, 5, 15)


def _rapport(client, headers, type_, **params):
    return client.get("/api/v1/rapports", params={"type": type_, **WIDE, **params}, headers=headers)


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


@pytest.mark.parametrize("periode, debut", [
    (Periode.JOUR, date(2024, 5, 15)),
    (Periode.SEMAINE, date(2024, 5, 12)),
    (Periode.MOIS, date(2024, 5, 1)),
    (Periode.TRIMESTRE, date(2024, 4, 1)),
    (Periode.ANNEE, date(2024, 1, 1)),
    (None, date(2024, 5, 1)),
])
def test_period_bounds(periode, debut):
    assert period_bounds(periode, today=TODAY) == (debut, TODAY)


def test_explicit_dates_override_period():
    bounds = period_bounds(Periode.JOUR, date(2024, 1, 1), date(2024, 2, 1), today=TODAY)
    assert bounds == (date(2024, 1, 1), date(2024, 2, 1))


def test_reversed_dates_are_rejected():
    with pytest.raises(ValidationError):
        period_bounds(None, date(2024, 2, 1), date(2024, 1, 1))


def test_stock_levels_and_value():
    produit = SimpleNamespace(seuil_alerte=2, prix_vente=10)
    stocks = [SimpleNamespace(quantite=q, produit=produit) for q in (0, 2, 5)]

    levels = stock_levels(stocks)

    assert [len(levels[k]) for k in ("enRupture", "stockFaible", "stockNormal")] == [1, 1, 1]
    assert stock_value(stocks) == 70


def test_type_is_required(client, gestionnaire_headers):
    response = client.get("/api/v1/rapports", headers=gestionnaire_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_sales_report(client, gestionnaire_headers, vente):
    response = _rapport(client, gestionnaire_headers, "ventes")
    assert response.status_code == 200
    body = response.json()

    assert body["type"] == "ventes"
    assert body["periode"]["type"] == "personnalisee"
    assert body["resume"]["totalVentes"] == 1
    assert body["resume"]["chiffreAffaires"] == 150
    assert body["resume"]["ventesParJour"][0]["nombre"] == 1
    assert body["produitsVendus"][0]["produit"]["nom"] == "Basket"
    assert body["produitsVendus"][0]["quantite"] == 3
    assert body["statutsVente"] == [{"statut": "PARTIEL", "nombre": 1, "montant": 150}]


def test_products_and_stock_reports(client, gestionnaire_headers, vente):
    produits = _rapport(client, gestionnaire_headers, "produits").json()
    assert produits["resume"]["totalProduits"] == 1
    assert produits["produitsPopulaires"][0]["categorie"]["nom"] == "Chaussures"
    assert produits["stocksAnalyse"] == {"enRupture": 0, "stockFaible": 0, "stockNormal": 1}

    stocks = _rapport(client, gestionnaire_headers, "stocks").json()
    assert stocks["resume"]["valeurTotaleStock"] == 350
    assert stocks["analyse"]["stockNormal"][0]["produit"]["quantite"] == 7
    assert stocks["mouvementsRecents"][0]["type"] == "SORTIE"


def test_clients_report(client, gestionnaire_headers, vente):
    body = _rapport(client, gestionnaire_headers, "clients").json()
    assert body["resume"]["totalClients"] == 1
    assert body["resume"]["clientsActifs"] == 1
    assert body["clientsActifs"][0]["nom"] == "Diallo"
    assert body["clientsActifs"][0]["montantAchats"] == 150


def test_financial_report(client, gestionnaire_headers, vente):
    client.post(
        "/api/v1/transactions",
        json={
            "type": "DEPENSE", "montant": 30, "description": "Loyer",
            "categorie": "Local", "categorieDepense": "EXPLOITATION",
        },
        headers=gestionnaire_headers,
    )

    resume = _rapport(client, gestionnaire_headers, "financier").json()["resume"]

    assert resume["chiffreAffaires"] == 150
    assert resume["recettes"] == 100
    assert resume["depenses"] == 30
    assert resume["benefice"] == 120
    assert resume["solde"] == 70


def test_report_is_scoped_to_own_boutique(client, gestionnaire_b_headers, vente):
    body = _rapport(client, gestionnaire_b_headers, "ventes").json()
    assert body["resume"]["totalVentes"] == 0
    assert body["produitsVendus"] == []
