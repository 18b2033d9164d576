# boutique_manager/modules/stocks/repository.py
from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.orm import contains_eager, joinedload

from boutique_manager.core.exceptions import BusinessError
from boutique_manager.shared.database.models import MouvementStock, Produit, Stock
from boutique_manager.shared.database.repository import BaseRepository


class StocksRepository(BaseRepository):
    model = Stock

    def _alerte_condition(self):
        return and_(Produit.seuil_alerte > 0, Stock.quantite <= Produit.seuil_alerte)

    def list_stocks(
        self,
        boutique_id: str,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        alerte: bool = False,
    ) -> Tuple[List[Stock], int]:
        query = (
            self.scoped(boutique_id)
            .join(Stock.produit)
            .options(contains_eager(Stock.produit).joinedload(Produit.categorie))
        )
        if search:
            query = query.filter(Produit.nom.ilike(f"%{search}%"))
        if alerte:
            query = query.filter(self._alerte_condition())
        return self.paginate(query.order_by(Stock.updated_at.desc()), offset, limit)

    def count_alertes(self, boutique_id: str) -> int:
        return self.scoped(boutique_id).join(Stock.produit).filter(self._alerte_condition()).count()

    def get(self, stock_id: str, boutique_id: Optional[str] = None) -> Optional[Stock]:
        return (
            self.scoped(boutique_id)
            .options(joinedload(Stock.produit).joinedload(Produit.categorie))
            .filter(Stock.id == stock_id)
            .first()
        )

    def for_produit(self, produit_id: str, boutique_id: str) -> Optional[Stock]:
        return self.db.query(Stock).filter(
            Stock.produit_id == produit_id,
            Stock.boutique_id == boutique_id
        ).first()

    def list_mouvements(
        self,
        boutique_id: str,
        offset: int,
        limit: int,
        stock_id: Optional[str] = None,
        type: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> Tuple[List[MouvementStock], int]:
        query = (
            self.db.query(MouvementStock)
            .join(MouvementStock.stock)
            .filter(Stock.boutique_id == boutique_id)
        )
        if stock_id:
            query = query.filter(MouvementStock.stock_id == stock_id)
        if type:
            query = query.filter(MouvementStock.type == type)
        query = self.filter_period(query, MouvementStock.created_at, date_debut, date_fin)
        return self.paginate(query.order_by(MouvementStock.created_at.desc()), offset, limit)

    def record_movement(
        self,
        stock: Stock,
        type: str,
        quantite: int,
        motif: str,
        vente_id: Optional[str] = None,
    ) -> MouvementStock:
        """
        Applique un mouvement au stock sans commit.

        L'appelant valide la transaction, ce qui permet de regrouper plusieurs
        mouvements (vente, réception de commande) en une seule écriture.
        """
        now = datetime.now()
        if type == "SORTIE":
            if stock.quantite < quantite:
                raise BusinessError(
                    f"Stock insuffisant. Quantité disponible: {stock.quantite}",
                    details={"stockId": stock.id, "disponible": stock.quantite, "demande": quantite},
                )
            stock.quantite -= quantite
            stock.derniere_sortie = now
        else:
            stock.quantite += quantite
            stock.derniere_entree = now

        mouvement = MouvementStock(
            stock_id=stock.id,
            type=type,
            quantite=quantite,
            motif=motif,
            vente_id=vente_id,
            created_at=now,
        )
        self.db.add(mouvement)
        return mouvement
