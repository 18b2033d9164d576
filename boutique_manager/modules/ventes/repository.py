import re
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import contains_eager, joinedload, selectinload

from boutique_manager.shared.database.models import Client, LigneVente, Produit, Vente
from boutique_manager.shared.database.repository import BaseRepository


class VentesRepository(BaseRepository):
    model = Vente

    def list_ventes(
        self,
        boutique_id: Optional[str],
        offset: int,
        limit: int,
        statut: Optional[str] = None,
        search: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> Tuple[List[Vente], int]:
        query = (
            self.scoped(boutique_id)
            .outerjoin(Vente.client)
            .options(
                contains_eager(Vente.client),
                joinedload(Vente.user),
                selectinload(Vente.lignes).joinedload(LigneVente.produit),
            )
        )
        if statut:
            query = query.filter(Vente.statut == statut)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Vente.numero_vente.ilike(pattern),
                Client.nom.ilike(pattern),
                Client.prenom.ilike(pattern),
            ))
        query = self.filter_period(query, Vente.date_vente, date_debut, date_fin)
        return self.paginate(query.order_by(Vente.date_vente.desc()), offset, limit)

    def get(self, vente_id: str, boutique_id: Optional[str] = None) -> Optional[Vente]:
        return (
            self.scoped(boutique_id)
            .options(
                joinedload(Vente.client),
                joinedload(Vente.user),
                selectinload(Vente.lignes).joinedload(LigneVente.produit),
                selectinload(Vente.paiements),
            )
            .filter(Vente.id == vente_id)
            .first()
        )

    def get_client(self, client_id: str, boutique_id: str) -> Optional[Client]:
        return self.db.query(Client).filter(
            Client.id == client_id,
            Client.boutique_id == boutique_id
        ).first()

    def get_produits(self, produit_ids: List[str], boutique_id: str) -> dict:
        produits = self.db.query(Produit).filter(
            Produit.id.in_(produit_ids),
            Produit.boutique_id == boutique_id
        ).all()
        return {p.id: p for p in produits}

    def next_numero(self, boutique_id: str) -> str:
        """Numéro suivant : V001, V002... (au-delà de 999 le nombre s'allonge)"""
        numeros = self.db.query(Vente.numero_vente).filter(Vente.boutique_id == boutique_id).all()
        last = 0
        for (numero,) in numeros:
            match = re.search(r"\d+$", numero or "")
            if match:
                last = max(last, int(match.group()))
        return f"V{last + 1:03d}"
