from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import joinedload

from boutique_manager.shared.database.models import Boutique, Transaction
from boutique_manager.shared.database.repository import BaseRepository


class TransactionsRepository(BaseRepository):
    model = Transaction

    def list_transactions(
        self,
        boutique_id: str,
        offset: int,
        limit: int,
        type: Optional[str] = None,
        categorie: Optional[str] = None,
        search: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> Tuple[List[Transaction], int]:
        query = self.scoped(boutique_id).options(
            joinedload(Transaction.user), joinedload(Transaction.boutique)
        )
        if type:
            query = query.filter(Transaction.type == type)
        if categorie:
            query = query.filter(Transaction.categorie.ilike(f"%{categorie}%"))
        if search:
            query = query.filter(Transaction.description.ilike(f"%{search}%"))
        query = self.filter_period(query, Transaction.date_transaction, date_debut, date_fin)

        return self.paginate(query.order_by(Transaction.date_transaction.desc()), offset, limit)

    def all_for_boutique(self, boutique_id: str) -> List[Transaction]:
        return self.scoped(boutique_id).all()

    def capital_initial(self, boutique_id: str):
        boutique = self.db.query(Boutique).filter(Boutique.id == boutique_id).first()
        return boutique.capital_initial if boutique else 0

    def injections(self, boutique_id: Optional[str] = None) -> List[Transaction]:
        return (
            self.scoped(boutique_id)
            .options(joinedload(Transaction.boutique))
            .filter(Transaction.type == "INJECTION_CAPITAL")
            .order_by(Transaction.created_at.desc())
            .all()
        )

    def get(self, transaction_id: str, boutique_id: Optional[str] = None) -> Optional[Transaction]:
        return (
            self.scoped(boutique_id)
            .options(joinedload(Transaction.user), joinedload(Transaction.boutique))
            .filter(Transaction.id == transaction_id)
            .first()
        )
