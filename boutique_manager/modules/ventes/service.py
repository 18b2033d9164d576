# boutique_manager/modules/ventes/service.py
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import AppError, BusinessError, NotFoundError, ValidationError
from boutique_manager.modules.stocks.repository import StocksRepository
from boutique_manager.shared.database.models import LigneVente, Transaction, Vente
from boutique_manager.shared.schemas.common import PageParams
from boutique_manager.shared.services.statistics import sale_status
from .repository import VentesRepository
from .schemas import VenteCreate, VenteDetail, VenteListResponse, VenteResponse, VenteUpdate

logger = logging.getLogger(__name__)


class VentesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = VentesRepository(db)
        self.stocks = StocksRepository(db)

    async def list_ventes(
        self,
        ctx: RequestContext,
        params: PageParams,
        statut: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> VenteListResponse:
        ventes, total = self.repository.list_ventes(
            ctx.require_boutique(), params.offset, params.limit,
            statut=statut, search=params.search,
            date_debut=date_debut, date_fin=date_fin,
        )
        return VenteListResponse(
            ventes=[VenteResponse.model_validate(v) for v in ventes],
            pagination=params.pagination(total),
        )

    async def get_vente(self, vente_id: str, ctx: RequestContext) -> VenteDetail:
        vente = self.repository.get(vente_id, ctx.boutique_id)
        if not vente:
            raise NotFoundError("Vente non trouvée")
        return VenteDetail.model_validate(vente)

    async def create_vente(self, data: VenteCreate, ctx: RequestContext) -> VenteDetail:
        """
        Enregistre une vente complète en une seule transaction :
        lignes, sorties de stock et recette du montant encaissé.
        """
        boutique_id = ctx.require_boutique()

        if data.client_id and not self.repository.get_client(data.client_id, boutique_id):
            raise NotFoundError("Client non trouvé")

        produits = self.repository.get_produits([l.produit_id for l in data.lignes], boutique_id)
        lignes = []
        for ligne in data.lignes:
            produit = produits.get(ligne.produit_id)
            if produit is None:
                raise NotFoundError(f"Produit non trouvé: {ligne.produit_id}")
            prix = ligne.prix_unitaire if ligne.prix_unitaire is not None else Decimal(str(produit.prix_vente))
            lignes.append(LigneVente(
                produit_id=produit.id,
                quantite=ligne.quantite,
                prix_unitaire=prix,
                sous_total=prix * ligne.quantite,
            ))

        montant_total = sum((l.sous_total for l in lignes), Decimal("0"))
        montant_paye = montant_total if data.montant_paye is None else data.montant_paye
        if montant_paye > montant_total:
            raise ValidationError(details={"montantPaye": ["Le montant payé dépasse le montant total"]})

        try:
            vente = Vente(
                numero_vente=self.repository.next_numero(boutique_id),
                client_id=data.client_id,
                boutique_id=boutique_id,
                user_id=ctx.user_id,
                montant_total=montant_total,
                montant_paye=montant_paye,
                montant_restant=montant_total - montant_paye,
                statut=sale_status(montant_total, montant_paye),
                date_vente=datetime.now(),
                date_echeance=data.date_echeance,
                lignes=lignes,
            )
            self.db.add(vente)
            self.db.flush()

            for ligne in lignes:
                produit = produits[ligne.produit_id]
                stock = self.stocks.for_produit(produit.id, boutique_id)
                disponible = stock.quantite if stock else 0
                if disponible < ligne.quantite:
                    raise BusinessError(
                        f"Stock insuffisant pour {produit.nom}. Disponible: {disponible}, Demandé: {ligne.quantite}",
                        details={"produitId": produit.id, "disponible": disponible, "demande": ligne.quantite},
                    )
                self.stocks.record_movement(
                    stock, "SORTIE", ligne.quantite, f"Vente {vente.numero_vente}", vente_id=vente.id
                )

            if montant_paye > 0:
                self.db.add(Transaction(
                    type="RECETTE",
                    montant=montant_paye,
                    description=f"Vente #{vente.numero_vente}",
                    categorie="Ventes",
                    boutique_id=boutique_id,
                    user_id=ctx.user_id,
                    date_transaction=vente.date_vente,
                ))

            self.repository.commit()
        except AppError:
            self.db.rollback()
            raise

        logger.info(f"Vente {vente.numero_vente} ({vente.statut}) créée dans {boutique_id} par {ctx.user_id}")
        return VenteDetail.model_validate(self.repository.get(vente.id, boutique_id))

    async def update_vente(self, vente_id: str, data: VenteUpdate, ctx: RequestContext) -> VenteDetail:
        vente = self.repository.get(vente_id, ctx.boutique_id)
        if not vente:
            raise NotFoundError("Vente non trouvée")

        values = data.model_dump(exclude_unset=True)
        if "client_id" in values:
            client_id = values["client_id"]
            if client_id and not self.repository.get_client(client_id, vente.boutique_id):
                raise NotFoundError("Client non trouvé")
            vente.client_id = client_id
        if "date_echeance" in values:
            vente.date_echeance = values["date_echeance"]

        self.repository.commit()
        return VenteDetail.model_validate(self.repository.get(vente_id, ctx.boutique_id))

    async def cancel_vente(self, vente_id: str, ctx: RequestContext) -> dict:
        """Annule une vente : le stock est restitué, lignes et paiements supprimés"""
        vente = self.repository.get(vente_id, ctx.boutique_id)
        if not vente:
            raise NotFoundError("Vente non trouvée")

        for ligne in vente.lignes:
            stock = self.stocks.for_produit(ligne.produit_id, vente.boutique_id)
            if stock is not None:
                self.stocks.record_movement(
                    stock, "ENTREE", ligne.quantite, f"Annulation vente {vente.numero_vente}"
                )

        self.repository.delete(vente)
        logger.info(f"Vente {vente.numero_vente} annulée par {ctx.user_id}")
        return {"success": True, "message": "Vente annulée et stock restitué"}
