# boutique_manager/modules/boutiques/repository.py
from typing import List, Optional

from sqlalchemy.orm import selectinload

from boutique_manager.shared.database.models import Boutique, Client, Produit, User, Vente
from boutique_manager.shared.database.repository import BaseRepository


class BoutiquesRepository(BaseRepository):
    model = Boutique

    def list_boutiques(self, with_relations: bool = False) -> List[Boutique]:
        query = self.db.query(Boutique)
        if with_relations:
            query = query.options(
                selectinload(Boutique.ventes),
                selectinload(Boutique.users),
                selectinload(Boutique.produits),
                selectinload(Boutique.clients),
            )
        return query.order_by(Boutique.created_at.desc()).all()

    def get(self, boutique_id: str, boutique_scope: Optional[str] = None) -> Optional[Boutique]:
        return self.db.query(Boutique).filter(Boutique.id == boutique_id).first()

    def get_with_users(self, boutique_id: str) -> Optional[Boutique]:
        return (
            self.db.query(Boutique)
            .options(selectinload(Boutique.users))
            .filter(Boutique.id == boutique_id)
            .first()
        )

    def count_related(self, boutique_id: str) -> dict:
        return {
            "produits": self.db.query(Produit).filter(Produit.boutique_id == boutique_id).count(),
            "ventes": self.db.query(Vente).filter(Vente.boutique_id == boutique_id).count(),
            "clients": self.db.query(Client).filter(Client.boutique_id == boutique_id).count(),
        }

    def count_users(self, boutique_id: str) -> int:
        return self.db.query(User).filter(User.boutique_id == boutique_id).count()
