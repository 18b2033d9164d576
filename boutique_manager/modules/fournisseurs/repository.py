from typing import List, Optional, Tuple

from sqlalchemy import func, or_

from boutique_manager.shared.database.models import Commande, Fournisseur
from boutique_manager.shared.database.repository import BaseRepository


class FournisseursRepository(BaseRepository):
    model = Fournisseur

    def list_fournisseurs(
        self, boutique_id: Optional[str], offset: int, limit: int, search: Optional[str] = None
    ) -> Tuple[List[Fournisseur], int]:
        query = self.scoped(boutique_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Fournisseur.nom.ilike(pattern),
                    Fournisseur.prenom.ilike(pattern),
                    Fournisseur.entreprise.ilike(pattern),
                    Fournisseur.email.ilike(pattern),
                    Fournisseur.telephone.ilike(pattern),
                )
            )
        return self.paginate(query.order_by(Fournisseur.created_at.desc()), offset, limit)

    def count_commandes(self, fournisseur_id: str) -> int:
        return self.db.query(Commande).filter(Commande.fournisseur_id == fournisseur_id).count()

    def commande_counts(self, fournisseur_ids: List[str]) -> dict:
        if not fournisseur_ids:
            return {}
        rows = (
            self.db.query(Commande.fournisseur_id, func.count(Commande.id))
            .filter(Commande.fournisseur_id.in_(fournisseur_ids))
            .group_by(Commande.fournisseur_id)
            .all()
        )
        return dict(rows)

    def latest_commandes(self, fournisseur_id: str, limit: int = 10) -> List[Commande]:
        return (
            self.db.query(Commande)
            .filter(Commande.fournisseur_id == fournisseur_id)
            .order_by(Commande.date_commande.desc())
            .limit(limit)
            .all()
        )
