from typing import List, Optional

from sqlalchemy.orm import joinedload

from boutique_manager.shared.database.models import Boutique, Transaction, User, Vente
from boutique_manager.shared.database.repository import BaseRepository


class UtilisateursRepository(BaseRepository):
    model = User

    def list_users(self, role: Optional[str] = None, boutique_id: Optional[str] = None) -> List[User]:
        query = self.db.query(User).options(joinedload(User.boutique))
        if role:
            query = query.filter(User.role == role)
        if boutique_id:
            query = query.filter(User.boutique_id == boutique_id)
        return query.order_by(User.created_at.desc()).all()

    def get(self, user_id: str, boutique_id: Optional[str] = None) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def boutique_exists(self, boutique_id: str) -> bool:
        return self.db.query(Boutique.id).filter(Boutique.id == boutique_id).first() is not None

    def count_activity(self, user_id: str) -> int:
        ventes = self.db.query(Vente).filter(Vente.user_id == user_id).count()
        transactions = self.db.query(Transaction).filter(Transaction.user_id == user_id).count()
        return ventes + transactions
