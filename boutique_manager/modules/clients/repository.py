from typing import List, Optional, Tuple

from sqlalchemy import func, or_

from boutique_manager.shared.database.models import Client, Vente
from boutique_manager.shared.database.repository import BaseRepository


class ClientsRepository(BaseRepository):
    model = Client

    def list_clients(
        self, boutique_id: Optional[str], offset: int, limit: int, search: Optional[str] = None
    ) -> Tuple[List[Client], int]:
        query = self.scoped(boutique_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Client.nom.ilike(pattern),
                    Client.prenom.ilike(pattern),
                    Client.telephone.ilike(pattern),
                    Client.email.ilike(pattern),
                )
            )
        return self.paginate(query.order_by(Client.created_at.desc()), offset, limit)

    def find_by_email(self, boutique_id: str, email: str, exclude_id: Optional[str] = None) -> Optional[Client]:
        query = self.db.query(Client).filter(
            Client.boutique_id == boutique_id,
            Client.email == email
        )
        if exclude_id:
            query = query.filter(Client.id != exclude_id)
        return query.first()

    def count_ventes(self, client_id: str) -> int:
        return self.db.query(Vente).filter(Vente.client_id == client_id).count()

    def vente_counts(self, client_ids: List[str]) -> dict:
        if not client_ids:
            return {}
        rows = (
            self.db.query(Vente.client_id, func.count(Vente.id))
            .filter(Vente.client_id.in_(client_ids))
            .group_by(Vente.client_id)
            .all()
        )
        return dict(rows)

    def latest_ventes(self, client_id: str, limit: int = 5) -> List[Vente]:
        return (
            self.db.query(Vente)
            .filter(Vente.client_id == client_id)
            .order_by(Vente.date_vente.desc())
            .limit(limit)
            .all()
        )
