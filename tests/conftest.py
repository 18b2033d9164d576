import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.service import AuthService
from boutique_manager.main import app
from boutique_manager.shared.database.models import (
    Base, Boutique, Categorie, Client, Fournisseur, Produit, Stock, User
)

PASSWORD = "secret123"
PASSWORD_HASH = AuthService.get_password_hash(PASSWORD)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    # Les fixtures gardent leurs attributs après commit
    session = session_factory(expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {AuthService.token_for_user(user)}"}


def _add(db, entity):
    db.add(entity)
    db.commit()
    return entity


@pytest.fixture
def boutique_a(db):
    return _add(db, Boutique(nom="Boutique A", capital_initial=1000))


@pytest.fixture
def boutique_b(db):
    return _add(db, Boutique(nom="Boutique B", capital_initial=0))


@pytest.fixture
def admin(db):
    return _add(db, User(name="Admin", email="admin@boutique.com", password_hash=PASSWORD_HASH, role="ADMIN"))


@pytest.fixture
def gestionnaire(db, boutique_a):
    return _add(db, User(
        name="Gérant A", email="gerant.a@boutique.com", password_hash=PASSWORD_HASH,
        role="GESTIONNAIRE", boutique_id=boutique_a.id,
    ))


@pytest.fixture
def gestionnaire_b(db, boutique_b):
    return _add(db, User(
        name="Gérant B", email="gerant.b@boutique.com", password_hash=PASSWORD_HASH,
        role="GESTIONNAIRE", boutique_id=boutique_b.id,
    ))


@pytest.fixture
def admin_headers(admin):
    return _make_headers(admin)


@pytest.fixture
def gestionnaire_headers(gestionnaire):
    return _make_headers(gestionnaire)


@pytest.fixture
def gestionnaire_b_headers(gestionnaire_b):
    return _make_headers(gestionnaire_b)


@pytest.fixture
def catalogue(db, boutique_a):
    """Une catégorie, un produit à 50 et 10 unités en stock dans la boutique A"""
    categorie = _add(db, Categorie(nom="Chaussures", boutique_id=boutique_a.id))
    produit = _add(db, Produit(
        nom="Basket", prix_achat=20, prix_vente=50, seuil_alerte=2,
        categorie_id=categorie.id, boutique_id=boutique_a.id,
    ))
    stock = _add(db, Stock(produit_id=produit.id, boutique_id=boutique_a.id, quantite=10))
    return {"categorie": categorie, "produit": produit, "stock": stock}


@pytest.fixture
def client_a(db, boutique_a):
    return _add(db, Client(nom="Diallo", prenom="Awa", telephone="770000000", boutique_id=boutique_a.id))


@pytest.fixture
def fournisseur_a(db, boutique_a):
    return _add(db, Fournisseur(nom="Ndiaye", entreprise="Import SARL", boutique_id=boutique_a.id))
