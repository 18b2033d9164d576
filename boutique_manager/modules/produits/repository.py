from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import joinedload, selectinload

from boutique_manager.shared.database.models import (
    Categorie, LigneCommande, LigneVente, Produit, Stock
)
from boutique_manager.shared.database.repository import BaseRepository


class ProduitsRepository(BaseRepository):
    model = Produit

    def _with_relations(self, boutique_id: Optional[str]):
        return self.scoped(boutique_id).options(
            joinedload(Produit.categorie), selectinload(Produit.stocks)
        )

    def list_produits(
        self,
        boutique_id: Optional[str],
        offset: int,
        limit: int,
        search: Optional[str] = None,
        categorie_id: Optional[str] = None,
    ) -> Tuple[List[Produit], int]:
        query = self._with_relations(boutique_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Produit.nom.ilike(pattern), Produit.description.ilike(pattern)))
        if categorie_id:
            query = query.filter(Produit.categorie_id == categorie_id)
        return self.paginate(query.order_by(Produit.created_at.desc()), offset, limit)

    def get(self, produit_id: str, boutique_id: Optional[str] = None) -> Optional[Produit]:
        return self._with_relations(boutique_id).filter(Produit.id == produit_id).first()

    def get_categorie(self, categorie_id: str, boutique_id: str) -> Optional[Categorie]:
        return self.db.query(Categorie).filter(
            Categorie.id == categorie_id,
            Categorie.boutique_id == boutique_id
        ).first()

    def create_with_stock(self, produit: Produit) -> Produit:
        """Produit et stock initial dans une seule transaction"""
        self.db.add(produit)
        self.db.flush()
        self.db.add(Stock(produit_id=produit.id, boutique_id=produit.boutique_id, quantite=0))
        self.commit()
        self.db.refresh(produit)
        return produit

    def count_lignes(self, produit_id: str) -> int:
        ventes = self.db.query(LigneVente).filter(LigneVente.produit_id == produit_id).count()
        commandes = self.db.query(LigneCommande).filter(LigneCommande.produit_id == produit_id).count()
        return ventes + commandes
