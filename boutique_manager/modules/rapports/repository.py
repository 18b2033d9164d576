from datetime import date
from typing import Any, List

from sqlalchemy import desc, func
from sqlalchemy.orm import contains_eager, joinedload

from boutique_manager.shared.database.models import (
    Categorie, Client, LigneVente, MouvementStock, Produit, Stock, Transaction, Vente
)
from boutique_manager.shared.database.repository import BaseRepository


class RapportsRepository(BaseRepository):
    """Requêtes d'agrégation des rapports, toujours limitées à une boutique"""
    model = Vente

    def _ventes_period(self, query, boutique_id: str, debut: date, fin: date):
        query = query.filter(Vente.boutique_id == boutique_id)
        return self.filter_period(query, Vente.date_vente, debut, fin)

    # ==================== VENTES ====================

    def sales_summary(self, boutique_id: str, debut: date, fin: date):
        query = self.db.query(
            func.count(Vente.id),
            func.coalesce(func.sum(Vente.montant_total), 0),
            func.avg(Vente.montant_total),
        )
        return self._ventes_period(query, boutique_id, debut, fin).one()

    def sales_by_day(self, boutique_id: str, debut: date, fin: date) -> List[Any]:
        jour = func.date(Vente.date_vente).label("jour")
        query = self.db.query(
            jour,
            func.count(Vente.id).label("nombre"),
            func.sum(Vente.montant_total).label("montant"),
        )
        return (
            self._ventes_period(query, boutique_id, debut, fin)
            .group_by(jour)
            .order_by(jour)
            .all()
        )

    def sales_by_status(self, boutique_id: str, debut: date, fin: date) -> List[Any]:
        query = self.db.query(
            Vente.statut,
            func.count(Vente.id).label("nombre"),
            func.sum(Vente.montant_total).label("montant"),
        )
        return self._ventes_period(query, boutique_id, debut, fin).group_by(Vente.statut).all()

    def top_products(
        self, boutique_id: str, debut: date, fin: date, by_amount: bool = False, limit: int = 10
    ) -> List[Any]:
        quantite = func.sum(LigneVente.quantite).label("quantite")
        montant = func.sum(LigneVente.sous_total).label("montant")
        query = (
            self.db.query(
                Produit.id, Produit.nom, Produit.prix_vente,
                Categorie.nom.label("categorie"),
                quantite, montant,
            )
            .join(LigneVente, LigneVente.produit_id == Produit.id)
            .join(Vente, Vente.id == LigneVente.vente_id)
            .outerjoin(Categorie, Categorie.id == Produit.categorie_id)
        )
        return (
            self._ventes_period(query, boutique_id, debut, fin)
            .group_by(Produit.id, Produit.nom, Produit.prix_vente, Categorie.nom)
            .order_by(desc("montant" if by_amount else "quantite"))
            .limit(limit)
            .all()
        )

    def sales_amount(self, boutique_id: str, debut: date, fin: date):
        query = self.db.query(func.coalesce(func.sum(Vente.montant_total), 0))
        return self._ventes_period(query, boutique_id, debut, fin).scalar()

    # ==================== PRODUITS / STOCKS ====================

    def products_summary(self, boutique_id: str):
        return (
            self.db.query(func.count(Produit.id), func.avg(Produit.prix_vente))
            .filter(Produit.boutique_id == boutique_id)
            .one()
        )

    def stocks(self, boutique_id: str) -> List[Stock]:
        return (
            self.db.query(Stock)
            .join(Stock.produit)
            .options(contains_eager(Stock.produit).joinedload(Produit.categorie))
            .filter(Stock.boutique_id == boutique_id)
            .order_by(Produit.nom)
            .all()
        )

    def recent_movements(self, boutique_id: str, limit: int = 20) -> List[MouvementStock]:
        return (
            self.db.query(MouvementStock)
            .join(MouvementStock.stock)
            .options(contains_eager(MouvementStock.stock).joinedload(Stock.produit))
            .filter(Stock.boutique_id == boutique_id)
            .order_by(MouvementStock.created_at.desc())
            .limit(limit)
            .all()
        )

    # ==================== CLIENTS ====================

    def clients(self, boutique_id: str) -> List[Client]:
        return self.db.query(Client).filter(Client.boutique_id == boutique_id).order_by(Client.nom).all()

    def new_clients_count(self, boutique_id: str, debut: date, fin: date) -> int:
        query = self.db.query(Client).filter(Client.boutique_id == boutique_id)
        return self.filter_period(query, Client.created_at, debut, fin).count()

    def top_clients(self, boutique_id: str, debut: date, fin: date, limit: int = 10) -> List[Any]:
        montant = func.sum(Vente.montant_total).label("montant")
        query = (
            self.db.query(Client, func.count(Vente.id).label("nombre"), montant)
            .join(Vente, Vente.client_id == Client.id)
        )
        return (
            self._ventes_period(query, boutique_id, debut, fin)
            .group_by(Client.id)
            .order_by(desc("montant"))
            .limit(limit)
            .all()
        )

    # ==================== TRÉSORERIE ====================

    def transactions(self, boutique_id: str, debut: date, fin: date) -> List[Transaction]:
        query = (
            self.db.query(Transaction)
            .options(joinedload(Transaction.user))
            .filter(Transaction.boutique_id == boutique_id)
        )
        return (
            self.filter_period(query, Transaction.date_transaction, debut, fin)
            .order_by(Transaction.date_transaction.desc())
            .all()
        )

    def transactions_by_type(self, boutique_id: str, debut: date, fin: date) -> List[Any]:
        query = (
            self.db.query(
                Transaction.type,
                func.count(Transaction.id).label("nombre"),
                func.sum(Transaction.montant).label("montant"),
            )
            .filter(Transaction.boutique_id == boutique_id)
        )
        return (
            self.filter_period(query, Transaction.date_transaction, debut, fin)
            .group_by(Transaction.type)
            .all()
        )
