from typing import List, Optional

from sqlalchemy import func

from boutique_manager.shared.database.models import Categorie, Produit
from boutique_manager.shared.database.repository import BaseRepository


class CategoriesRepository(BaseRepository):
    model = Categorie

    def list_categories(self, boutique_id: Optional[str], search: Optional[str] = None) -> List[Categorie]:
        query = self.scoped(boutique_id)
        if search:
            query = query.filter(Categorie.nom.ilike(f"%{search}%"))
        return query.order_by(Categorie.nom.asc()).all()

    def find_by_nom(self, boutique_id: str, nom: str, exclude_id: Optional[str] = None) -> Optional[Categorie]:
        query = self.db.query(Categorie).filter(
            Categorie.boutique_id == boutique_id,
            Categorie.nom == nom
        )
        if exclude_id:
            query = query.filter(Categorie.id != exclude_id)
        return query.first()

    def count_produits(self, categorie_id: str) -> int:
        return self.db.query(Produit).filter(Produit.categorie_id == categorie_id).count()

    def produit_counts(self, categorie_ids: List[str]) -> dict:
        if not categorie_ids:
            return {}
        rows = (
            self.db.query(Produit.categorie_id, func.count(Produit.id))
            .filter(Produit.categorie_id.in_(categorie_ids))
            .group_by(Produit.categorie_id)
            .all()
        )
        return dict(rows)
