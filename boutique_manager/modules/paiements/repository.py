from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Query, joinedload, selectinload

from boutique_manager.shared.database.models import Paiement, Vente
from boutique_manager.shared.database.repository import BaseRepository


class PaiementsRepository(BaseRepository):
    model = Paiement

    def scoped(self, boutique_id: Optional[str]) -> Query:
        # Le paiement hérite de la boutique de sa vente
        query = self.db.query(Paiement).join(Paiement.vente)
        if boutique_id is not None:
            query = query.filter(Vente.boutique_id == boutique_id)
        return query

    def get(self, paiement_id: str, boutique_id: Optional[str] = None) -> Optional[Paiement]:
        return (
            self.scoped(boutique_id)
            .options(joinedload(Paiement.vente).joinedload(Vente.client))
            .filter(Paiement.id == paiement_id)
            .first()
        )

    def list_creances(
        self,
        boutique_id: str,
        offset: int,
        limit: int,
        statut: Optional[str] = None,
        client_id: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> Tuple[List[Vente], int]:
        query = (
            self.db.query(Vente)
            .options(joinedload(Vente.client), selectinload(Vente.paiements))
            .filter(Vente.boutique_id == boutique_id)
        )
        # Par défaut : uniquement les ventes non soldées
        if statut:
            query = query.filter(Vente.statut == statut)
        else:
            query = query.filter(Vente.statut != "PAYE")
        if client_id:
            query = query.filter(Vente.client_id == client_id)
        query = self.filter_period(query, Vente.date_vente, date_debut, date_fin)
        return self.paginate(query.order_by(Vente.date_vente.desc()), offset, limit)

    def ventes_for_stats(self, boutique_id: str) -> List[Vente]:
        return self.db.query(Vente).filter(Vente.boutique_id == boutique_id).all()

    def get_vente(self, vente_id: str, boutique_id: str) -> Optional[Vente]:
        return self.db.query(Vente).filter(
            Vente.id == vente_id,
            Vente.boutique_id == boutique_id
        ).first()
