# boutique_manager/modules/paiements/service.py
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, NotFoundError
from boutique_manager.shared.database.models import Paiement, Transaction, Vente
from boutique_manager.shared.schemas.common import PageParams
from boutique_manager.shared.services.statistics import days_overdue, receivable_stats, sale_status
from .repository import PaiementsRepository
from .schemas import (
    CreanceListResponse, CreanceResponse, CreanceStatistiques, PaiementCreate, PaiementResponse
)

logger = logging.getLogger(__name__)


def _apply_amount(vente: Vente, delta: Decimal) -> None:
    """Reporte un encaissement (ou son annulation) sur la vente"""
    montant_paye = Decimal(str(vente.montant_paye)) + delta
    montant_total = Decimal(str(vente.montant_total))
    vente.montant_paye = montant_paye
    vente.montant_restant = montant_total - montant_paye
    vente.statut = sale_status(montant_total, montant_paye)


class PaiementsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = PaiementsRepository(db)

    async def list_creances(
        self,
        ctx: RequestContext,
        params: PageParams,
        statut: Optional[str] = None,
        client_id: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> CreanceListResponse:
        boutique_id = ctx.require_boutique()
        ventes, total = self.repository.list_creances(
            boutique_id, params.offset, params.limit,
            statut=statut, client_id=client_id,
            date_debut=date_debut, date_fin=date_fin,
        )

        now = datetime.now()
        creances = []
        for vente in ventes:
            creance = CreanceResponse.model_validate(vente)
            creance.jours_retard = days_overdue(vente.date_echeance, now)
            creance.en_retard = vente.date_echeance is not None and now > vente.date_echeance
            creances.append(creance)

        stats = receivable_stats(self.repository.ventes_for_stats(boutique_id))
        return CreanceListResponse(
            creances=creances,
            pagination=params.pagination(total),
            statistiques=CreanceStatistiques.model_validate(stats),
        )

    async def get_paiement(self, paiement_id: str, ctx: RequestContext) -> PaiementResponse:
        paiement = self.repository.get(paiement_id, ctx.boutique_id)
        if not paiement:
            raise NotFoundError("Paiement non trouvé")
        return PaiementResponse.model_validate(paiement)

    async def create_paiement(self, data: PaiementCreate, ctx: RequestContext) -> PaiementResponse:
        boutique_id = ctx.require_boutique()

        vente = self.repository.get_vente(data.vente_id, boutique_id)
        if not vente:
            raise NotFoundError("Vente non trouvée")

        if data.montant > Decimal(str(vente.montant_restant)):
            raise BusinessError(
                "Le montant du paiement dépasse le montant restant",
                details={"montantRestant": float(vente.montant_restant)},
            )

        now = datetime.now()
        paiement = Paiement(
            vente_id=vente.id,
            montant=data.montant,
            methode_paiement=data.methode_paiement.value,
            reference=data.reference,
            notes=data.notes,
            date_creation=now,
        )
        self.db.add(paiement)
        _apply_amount(vente, data.montant)

        self.db.add(Transaction(
            type="RECETTE",
            montant=data.montant,
            description=f"Paiement vente #{vente.numero_vente}",
            categorie="Paiements",
            paiement=paiement,
            boutique_id=boutique_id,
            user_id=ctx.user_id,
            date_transaction=now,
        ))

        self.repository.commit()
        logger.info(f"Paiement de {data.montant} sur la vente {vente.numero_vente} ({vente.statut}) par {ctx.user_id}")
        return PaiementResponse.model_validate(self.repository.get(paiement.id, boutique_id))

    async def delete_paiement(self, paiement_id: str, ctx: RequestContext) -> dict:
        paiement = self.repository.get(paiement_id, ctx.boutique_id)
        if not paiement:
            raise NotFoundError("Paiement non trouvé")

        vente = paiement.vente
        montant = Decimal(str(paiement.montant))
        _apply_amount(vente, -montant)

        recette = paiement.recette
        if recette is not None:
            self.db.delete(recette)
        else:
            logger.warning(f"Aucune recette trouvée pour le paiement {paiement_id} de la vente {vente.numero_vente}")

        self.db.delete(paiement)
        self.repository.commit()
        logger.info(f"Paiement {paiement_id} supprimé par {ctx.user_id}")
        return {"success": True}
