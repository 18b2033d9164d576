def test_name_unique_per_boutique(client, gestionnaire_headers, gestionnaire_b_headers):
    first = client.post("/api/v1/categories", json={"nom": "Sacs"}, headers=gestionnaire_headers)
    assert first.status_code == 201

    duplicate = client.post("/api/v1/categories", json={"nom": "Sacs"}, headers=gestionnaire_headers)
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "CONFLICT"
    assert duplicate.json()["details"] == {"field": "nom"}

    other_boutique = client.post("/api/v1/categories", json={"nom": "Sacs"}, headers=gestionnaire_b_headers)
    assert other_boutique.status_code == 201


def test_gestionnaire_cannot_target_another_boutique(
    client, gestionnaire_headers, gestionnaire_b_headers, boutique_a, boutique_b
):
    client.post("/api/v1/categories", json={"nom": "Ceintures"}, headers=gestionnaire_b_headers)

    response = client.get("/api/v1/categories", params={"boutiqueId": boutique_b.id}, headers=gestionnaire_headers)
    assert response.status_code == 200
    assert response.json() == []

    created = client.post(
        "/api/v1/categories", params={"boutiqueId": boutique_b.id},
        json={"nom": "Montres"}, headers=gestionnaire_headers,
    )
    assert created.json()["boutiqueId"] == boutique_a.id


def test_admin_must_name_boutique_to_create(client, admin_headers, boutique_b):
    response = client.post("/api/v1/categories", json={"nom": "Sacs"}, headers=admin_headers)
    assert response.status_code == 401
    assert response.json()["error"] == "Boutique non spécifiée"

    response = client.post(
        "/api/v1/categories", params={"boutiqueId": boutique_b.id}, json={"nom": "Sacs"}, headers=admin_headers
    )
    assert response.status_code == 201
    assert response.json()["boutiqueId"] == boutique_b.id


def test_delete_refused_while_products_exist(client, gestionnaire_headers, catalogue):
    categorie_id = catalogue["categorie"].id

    response = client.delete(f"/api/v1/categories/{categorie_id}", headers=gestionnaire_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "BUSINESS_ERROR"

    listing = client.get("/api/v1/categories", params={"includeCount": "true"}, headers=gestionnaire_headers)
    assert listing.json()[0]["_count"] == {"produits": 1}


def test_validation_error_shape(client, gestionnaire_headers):
    response = client.post("/api/v1/categories", json={}, headers=gestionnaire_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Données invalides"
    assert body["code"] == "VALIDATION_ERROR"
    assert "nom" in body["details"]


def test_unexpected_error_is_generic(client, gestionnaire_headers, monkeypatch):
    from fastapi.testclient import TestClient

    from boutique_manager.main import app
    from boutique_manager.modules.categories.service import CategoriesService

    async def boom(self, *args, **kwargs):
        raise RuntimeError("connexion perdue")

    monkeypatch.setattr(CategoriesService, "list_categories", boom)

    response = TestClient(app, raise_server_exceptions=False).get("/api/v1/categories", headers=gestionnaire_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Erreur interne du serveur", "code": "INTERNAL_ERROR"}


def test_storage_unique_constraint_reports_field(client, gestionnaire_headers, monkeypatch):
    from boutique_manager.modules.categories.repository import CategoriesRepository

    client.post("/api/v1/categories", json={"nom": "Sacs"}, headers=gestionnaire_headers)
    monkeypatch.setattr(CategoriesRepository, "find_by_nom", lambda self, *args, **kwargs: None)

    duplicate = client.post("/api/v1/categories", json={"nom": "Sacs"}, headers=gestionnaire_headers)

    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "CONFLICT"
    assert duplicate.json()["details"] == {"field": "nom"}


def test_conflict_field_from_constraint_name():
    from sqlalchemy.exc import IntegrityError

    from boutique_manager.shared.database.repository import conflict_field

    postgres = IntegrityError(
        "INSERT", {}, Exception('duplicate key value violates unique constraint "clients_email_unique_per_boutique"')
    )
    sqlite = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
    other = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: produits.nom"))

    assert conflict_field(postgres) == "email"
    assert conflict_field(sqlite) == "email"
    assert conflict_field(other) is None
