# boutique_manager/modules/transactions/service.py
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, NotFoundError, ValidationError
from boutique_manager.shared.database.models import Transaction
from boutique_manager.shared.schemas.common import PageParams
from boutique_manager.shared.services.statistics import transaction_stats
from .repository import TransactionsRepository
from .schemas import (
    TransactionCreate, TransactionListResponse, TransactionResponse,
    TransactionStats, TransactionUpdate
)

logger = logging.getLogger(__name__)

EDITABLE_TYPES = ("RECETTE", "DEPENSE")


def signed_amount(type_: str, montant: Decimal) -> Decimal:
    """Une dépense est stockée en négatif, tout le reste en positif"""
    return -abs(montant) if type_ == "DEPENSE" else abs(montant)


class TransactionsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TransactionsRepository(db)

    async def list_transactions(
        self,
        ctx: RequestContext,
        params: PageParams,
        type: Optional[str] = None,
        categorie: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> TransactionListResponse:
        boutique_id = ctx.require_boutique()
        transactions, total = self.repository.list_transactions(
            boutique_id, params.offset, params.limit,
            type=type, categorie=categorie, search=params.search,
            date_debut=date_debut, date_fin=date_fin,
        )

        stats = transaction_stats(
            self.repository.all_for_boutique(boutique_id),
            capital_initial=self.repository.capital_initial(boutique_id),
        )

        return TransactionListResponse(
            transactions=[TransactionResponse.model_validate(t) for t in transactions],
            pagination=params.pagination(total),
            stats=TransactionStats.model_validate(stats),
        )

    async def get_transaction(self, transaction_id: str, ctx: RequestContext) -> TransactionResponse:
        transaction = self.repository.get(transaction_id, ctx.boutique_id)
        if not transaction:
            raise NotFoundError("Transaction non trouvée")
        return TransactionResponse.model_validate(transaction)

    async def create_transaction(self, data: TransactionCreate, ctx: RequestContext) -> TransactionResponse:
        boutique_id = ctx.require_boutique()

        if data.type.value == "DEPENSE" and not data.categorie_depense:
            raise ValidationError(
                details={"categorieDepense": ["La catégorie de dépense est requise pour les dépenses"]}
            )

        transaction = self.repository.add(Transaction(
            type=data.type.value,
            montant=signed_amount(data.type.value, data.montant),
            description=data.description,
            categorie=data.categorie,
            categorie_depense=data.categorie_depense.value if data.categorie_depense else None,
            date_transaction=data.date_transaction or datetime.now(),
            boutique_id=boutique_id,
            user_id=ctx.user_id,
        ))
        logger.info(f"Transaction {transaction.type} {transaction.id} créée dans {boutique_id} par {ctx.user_id}")
        return TransactionResponse.model_validate(transaction)

    async def update_transaction(
        self, transaction_id: str, data: TransactionUpdate, ctx: RequestContext
    ) -> TransactionResponse:
        transaction = self.repository.get(transaction_id, ctx.boutique_id)
        if not transaction:
            raise NotFoundError("Transaction non trouvée")
        if transaction.type not in EDITABLE_TYPES:
            raise BusinessError("Seules les recettes et dépenses peuvent être modifiées")

        values = data.model_dump(exclude_unset=True)
        new_type = values["type"].value if values.get("type") else transaction.type

        if values.get("montant") is not None:
            transaction.montant = signed_amount(new_type, values["montant"])
        elif new_type != transaction.type:
            transaction.montant = signed_amount(new_type, Decimal(str(transaction.montant)))
        transaction.type = new_type

        if values.get("description"):
            transaction.description = values["description"]
        if "categorie" in values:
            transaction.categorie = values["categorie"]
        if "categorie_depense" in values:
            categorie_depense = values["categorie_depense"]
            transaction.categorie_depense = categorie_depense.value if categorie_depense else None
        if values.get("date_transaction"):
            transaction.date_transaction = values["date_transaction"]

        if transaction.type == "DEPENSE" and not transaction.categorie_depense:
            raise ValidationError(
                details={"categorieDepense": ["La catégorie de dépense est requise pour les dépenses"]}
            )

        self.repository.commit()
        self.db.refresh(transaction)
        return TransactionResponse.model_validate(transaction)

    async def delete_transaction(self, transaction_id: str, ctx: RequestContext) -> dict:
        transaction = self.repository.get(transaction_id, ctx.boutique_id)
        if not transaction:
            raise NotFoundError("Transaction non trouvée")
        if transaction.type not in EDITABLE_TYPES:
            raise BusinessError("Seules les recettes et dépenses peuvent être supprimées")

        self.repository.delete(transaction)
        logger.info(f"Transaction {transaction_id} supprimée par {ctx.user_id}")
        return {"success": True}
