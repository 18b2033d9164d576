import re
from typing import List, Optional, Tuple

from sqlalchemy.orm import joinedload, selectinload

from boutique_manager.shared.database.models import (
    Commande, Fournisseur, LigneCommande, Produit
)
from boutique_manager.shared.database.repository import BaseRepository


class CommandesRepository(BaseRepository):
    model = Commande

    def _with_relations(self, boutique_id: Optional[str]):
        return self.scoped(boutique_id).options(
            joinedload(Commande.fournisseur),
            selectinload(Commande.lignes).joinedload(LigneCommande.produit),
        )

    def list_commandes(
        self,
        boutique_id: Optional[str],
        offset: int,
        limit: int,
        statut: Optional[str] = None,
        fournisseur_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Commande], int]:
        query = self._with_relations(boutique_id)
        if statut:
            query = query.filter(Commande.statut == statut)
        if fournisseur_id:
            query = query.filter(Commande.fournisseur_id == fournisseur_id)
        if search:
            query = query.filter(Commande.numero_commande.ilike(f"%{search}%"))
        return self.paginate(query.order_by(Commande.date_commande.desc()), offset, limit)

    def get(self, commande_id: str, boutique_id: Optional[str] = None) -> Optional[Commande]:
        return self._with_relations(boutique_id).filter(Commande.id == commande_id).first()

    def get_fournisseur(self, fournisseur_id: str, boutique_id: str) -> Optional[Fournisseur]:
        return self.db.query(Fournisseur).filter(
            Fournisseur.id == fournisseur_id,
            Fournisseur.boutique_id == boutique_id
        ).first()

    def get_produits(self, produit_ids: List[str], boutique_id: str) -> dict:
        produits = self.db.query(Produit).filter(
            Produit.id.in_(produit_ids),
            Produit.boutique_id == boutique_id
        ).all()
        return {p.id: p for p in produits}

    def next_numero(self, boutique_id: str) -> str:
        last = (
            self.db.query(Commande.numero_commande)
            .filter(Commande.boutique_id == boutique_id)
            .order_by(Commande.numero_commande.desc())
            .first()
        )
        match = re.search(r"\d+$", last[0]) if last else None
        number = int(match.group()) if match else 0
        return f"CMD-{number + 1:06d}"
