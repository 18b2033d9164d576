# boutique_manager/modules/capital/service.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import NotFoundError
from boutique_manager.modules.transactions.repository import TransactionsRepository
from boutique_manager.modules.transactions.schemas import TransactionResponse
from boutique_manager.shared.database.models import Boutique, Transaction
from .schemas import InjectionCreate

logger = logging.getLogger(__name__)


class CapitalService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TransactionsRepository(db)

    async def list_injections(self, boutique_id: Optional[str]) -> List[TransactionResponse]:
        return [TransactionResponse.model_validate(t) for t in self.repository.injections(boutique_id)]

    async def inject(self, data: InjectionCreate, ctx: RequestContext) -> TransactionResponse:
        boutique = self.db.query(Boutique).filter(Boutique.id == data.boutique_id).first()
        if not boutique:
            raise NotFoundError("Boutique introuvable")

        transaction = self.repository.add(Transaction(
            type="INJECTION_CAPITAL",
            montant=data.montant,
            description=data.description,
            boutique_id=boutique.id,
            user_id=ctx.user_id,
            date_transaction=datetime.now(),
        ))
        logger.info(f"Injection de {data.montant} dans {boutique.id} par {ctx.user_id}")
        return TransactionResponse.model_validate(transaction)
