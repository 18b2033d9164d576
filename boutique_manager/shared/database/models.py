# boutique_manager/shared/database/models.py
import uuid

from sqlalchemy import (
    Column, String, DateTime, Text, Integer,
    Numeric, ForeignKey, UniqueConstraint, CheckConstraint,
    func
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def generate_id() -> str:
    return uuid.uuid4().hex


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Ajoute les colonnes created_at et updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# TENANT
# =====================================================

class Boutique(Base, TimestampMixin):
    """Boutique : unité d'isolation des données"""
    __tablename__ = "boutiques"

    id = Column(String(32), primary_key=True, default=generate_id)
    nom = Column(String(255), nullable=False)
    adresse = Column(Text)
    telephone = Column(String(50))
    description = Column(Text)
    capital_initial = Column(Numeric(12, 2), nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("capital_initial >= 0", name="boutiques_capital_initial_positive"),
    )

    # Relationships
    users = relationship("User", back_populates="boutique")
    categories = relationship("Categorie", back_populates="boutique", cascade="all, delete-orphan")
    clients = relationship("Client", back_populates="boutique", cascade="all, delete-orphan")
    fournisseurs = relationship("Fournisseur", back_populates="boutique", cascade="all, delete-orphan")
    produits = relationship("Produit", back_populates="boutique", cascade="all, delete-orphan")
    stocks = relationship("Stock", back_populates="boutique", cascade="all, delete-orphan")
    commandes = relationship("Commande", back_populates="boutique", cascade="all, delete-orphan")
    ventes = relationship("Vente", back_populates="boutique", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="boutique", cascade="all, delete-orphan")


# =====================================================
# UTILISATEURS
# =====================================================

class User(Base, TimestampMixin):
    """Utilisateur : ADMIN (multi-boutiques) ou GESTIONNAIRE (une boutique)"""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="GESTIONNAIRE")
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=True, index=True)

    # Relationships
    boutique = relationship("Boutique", back_populates="users")
    ventes = relationship("Vente", back_populates="user")
    transactions = relationship("Transaction", back_populates="user")


# =====================================================
# CATALOGUE
# =====================================================

class Categorie(Base, TimestampMixin):
    __tablename__ = "categories"

    id = Column(String(32), primary_key=True, default=generate_id)
    nom = Column(String(100), nullable=False)
    description = Column(Text)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("boutique_id", "nom", name="categories_nom_unique_per_boutique"),
    )

    boutique = relationship("Boutique", back_populates="categories")
    produits = relationship("Produit", back_populates="categorie")


class Produit(Base, TimestampMixin):
    __tablename__ = "produits"

    id = Column(String(32), primary_key=True, default=generate_id)
    nom = Column(String(255), nullable=False)
    description = Column(Text)
    prix_achat = Column(Numeric(12, 2), nullable=False)
    prix_vente = Column(Numeric(12, 2), nullable=False)
    seuil_alerte = Column(Integer, nullable=False, default=0)
    categorie_id = Column(String(32), ForeignKey("categories.id"), nullable=False, index=True)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)

    boutique = relationship("Boutique", back_populates="produits")
    categorie = relationship("Categorie", back_populates="produits")
    stocks = relationship("Stock", back_populates="produit", cascade="all, delete-orphan")
    lignes_vente = relationship("LigneVente", back_populates="produit")
    lignes_commande = relationship("LigneCommande", back_populates="produit")


class Stock(Base, TimestampMixin):
    __tablename__ = "stocks"

    id = Column(String(32), primary_key=True, default=generate_id)
    produit_id = Column(String(32), ForeignKey("produits.id"), nullable=False, index=True)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)
    quantite = Column(Integer, nullable=False, default=0)
    derniere_entree = Column(DateTime)
    derniere_sortie = Column(DateTime)

    __table_args__ = (
        UniqueConstraint("produit_id", "boutique_id", name="stocks_produit_unique_per_boutique"),
        CheckConstraint("quantite >= 0", name="stocks_quantite_positive"),
    )

    produit = relationship("Produit", back_populates="stocks")
    boutique = relationship("Boutique", back_populates="stocks")
    mouvements = relationship("MouvementStock", back_populates="stock", cascade="all, delete-orphan")


class MouvementStock(Base):
    __tablename__ = "mouvements_stock"

    id = Column(String(32), primary_key=True, default=generate_id)
    stock_id = Column(String(32), ForeignKey("stocks.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False)
    quantite = Column(Integer, nullable=False)
    motif = Column(String(255))
    vente_id = Column(String(32), ForeignKey("ventes.id"))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    stock = relationship("Stock", back_populates="mouvements")
    vente = relationship("Vente", back_populates="mouvements")


# =====================================================
# TIERS
# =====================================================

class Client(Base, TimestampMixin):
    __tablename__ = "clients"

    id = Column(String(32), primary_key=True, default=generate_id)
    nom = Column(String(255), nullable=False)
    prenom = Column(String(255))
    telephone = Column(String(50))
    adresse = Column(Text)
    email = Column(String(255))
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)

    # Plusieurs NULL restent autorisés : seul un email renseigné est unique
    __table_args__ = (
        UniqueConstraint("boutique_id", "email", name="clients_email_unique_per_boutique"),
    )

    boutique = relationship("Boutique", back_populates="clients")
    ventes = relationship("Vente", back_populates="client")


class Fournisseur(Base, TimestampMixin):
    __tablename__ = "fournisseurs"

    id = Column(String(32), primary_key=True, default=generate_id)
    nom = Column(String(255), nullable=False)
    prenom = Column(String(255))
    entreprise = Column(String(255))
    telephone = Column(String(50))
    email = Column(String(255))
    adresse = Column(Text)
    ville = Column(String(100))
    pays = Column(String(100))
    notes = Column(Text)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)

    boutique = relationship("Boutique", back_populates="fournisseurs")
    commandes = relationship("Commande", back_populates="fournisseur")


# =====================================================
# COMMANDES FOURNISSEURS
# =====================================================

class Commande(Base, TimestampMixin):
    __tablename__ = "commandes"

    id = Column(String(32), primary_key=True, default=generate_id)
    numero_commande = Column(String(20), nullable=False)
    fournisseur_id = Column(String(32), ForeignKey("fournisseurs.id"), nullable=False, index=True)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)
    statut = Column(String(20), nullable=False, default="EN_ATTENTE")
    montant_total = Column(Numeric(12, 2), nullable=False, default=0)
    montant_paye = Column(Numeric(12, 2), nullable=False, default=0)
    montant_restant = Column(Numeric(12, 2), nullable=False, default=0)
    date_commande = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    date_echeance = Column(DateTime)
    date_reception = Column(DateTime)
    notes = Column(Text)

    __table_args__ = (
        UniqueConstraint("boutique_id", "numero_commande", name="commandes_numero_unique_per_boutique"),
    )

    boutique = relationship("Boutique", back_populates="commandes")
    fournisseur = relationship("Fournisseur", back_populates="commandes")
    lignes = relationship("LigneCommande", back_populates="commande", cascade="all, delete-orphan")


class LigneCommande(Base):
    __tablename__ = "lignes_commande"

    id = Column(String(32), primary_key=True, default=generate_id)
    commande_id = Column(String(32), ForeignKey("commandes.id"), nullable=False, index=True)
    produit_id = Column(String(32), ForeignKey("produits.id"), nullable=False)
    quantite = Column(Integer, nullable=False)
    quantite_recue = Column(Integer, nullable=False, default=0)
    prix_unitaire = Column(Numeric(12, 2), nullable=False)
    sous_total = Column(Numeric(12, 2), nullable=False)

    commande = relationship("Commande", back_populates="lignes")
    produit = relationship("Produit", back_populates="lignes_commande")


# =====================================================
# VENTES
# =====================================================

class Vente(Base, TimestampMixin):
    __tablename__ = "ventes"

    id = Column(String(32), primary_key=True, default=generate_id)
    numero_vente = Column(String(20), nullable=False)
    client_id = Column(String(32), ForeignKey("clients.id"), index=True)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    montant_total = Column(Numeric(12, 2), nullable=False, default=0)
    montant_paye = Column(Numeric(12, 2), nullable=False, default=0)
    montant_restant = Column(Numeric(12, 2), nullable=False, default=0)
    statut = Column(String(10), nullable=False, default="IMPAYE")
    date_vente = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    date_echeance = Column(DateTime)

    __table_args__ = (
        UniqueConstraint("boutique_id", "numero_vente", name="ventes_numero_unique_per_boutique"),
    )

    boutique = relationship("Boutique", back_populates="ventes")
    client = relationship("Client", back_populates="ventes")
    user = relationship("User", back_populates="ventes")
    lignes = relationship("LigneVente", back_populates="vente", cascade="all, delete-orphan")
    paiements = relationship(
        "Paiement", back_populates="vente", cascade="all, delete-orphan",
        order_by="Paiement.date_creation.desc()"
    )
    mouvements = relationship("MouvementStock", back_populates="vente")


class LigneVente(Base):
    __tablename__ = "lignes_vente"

    id = Column(String(32), primary_key=True, default=generate_id)
    vente_id = Column(String(32), ForeignKey("ventes.id"), nullable=False, index=True)
    produit_id = Column(String(32), ForeignKey("produits.id"), nullable=False)
    quantite = Column(Integer, nullable=False)
    prix_unitaire = Column(Numeric(12, 2), nullable=False)
    sous_total = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    vente = relationship("Vente", back_populates="lignes")
    produit = relationship("Produit", back_populates="lignes_vente")


class Paiement(Base):
    __tablename__ = "paiements"

    id = Column(String(32), primary_key=True, default=generate_id)
    vente_id = Column(String(32), ForeignKey("ventes.id"), nullable=False, index=True)
    montant = Column(Numeric(12, 2), nullable=False)
    methode_paiement = Column(String(20), nullable=False)
    reference = Column(String(100))
    notes = Column(Text)
    date_creation = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    vente = relationship("Vente", back_populates="paiements")
    # Sans cascade : supprimer le paiement seul détache sa recette
    recette = relationship("Transaction", back_populates="paiement", uselist=False)


# =====================================================
# TRÉSORERIE
# =====================================================

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(32), primary_key=True, default=generate_id)
    type = Column(String(20), nullable=False, index=True)
    montant = Column(Numeric(12, 2), nullable=False)
    description = Column(String(500), nullable=False)
    categorie = Column(String(100))
    categorie_depense = Column(String(20))
    paiement_id = Column(String(32), ForeignKey("paiements.id"), index=True)
    boutique_id = Column(String(32), ForeignKey("boutiques.id"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    date_transaction = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    boutique = relationship("Boutique", back_populates="transactions")
    user = relationship("User", back_populates="transactions")
    paiement = relationship("Paiement", back_populates="recette")
