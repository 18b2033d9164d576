# boutique_manager/modules/commandes/service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import AppError, BusinessError, NotFoundError
from boutique_manager.modules.stocks.repository import StocksRepository
from boutique_manager.shared.database.models import Commande, LigneCommande, Stock, Transaction
from boutique_manager.shared.schemas.common import PageParams
from .repository import CommandesRepository
from .schemas import (
    CommandeCreate, CommandeListResponse, CommandeResponse, CommandeStatut,
    CommandeUpdate, ReceptionCreate, ReceptionResponse
)

logger = logging.getLogger(__name__)

CLOSED_STATUTS = (CommandeStatut.RECUE.value, CommandeStatut.ANNULEE.value)


class CommandesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CommandesRepository(db)
        self.stocks = StocksRepository(db)

    async def list_commandes(
        self,
        ctx: RequestContext,
        params: PageParams,
        statut: Optional[str] = None,
        fournisseur_id: Optional[str] = None,
    ) -> CommandeListResponse:
        commandes, total = self.repository.list_commandes(
            ctx.boutique_id, params.offset, params.limit,
            statut=statut, fournisseur_id=fournisseur_id, search=params.search,
        )
        return CommandeListResponse(
            commandes=[CommandeResponse.model_validate(c) for c in commandes],
            pagination=params.pagination(total),
        )

    async def get_commande(self, commande_id: str, ctx: RequestContext) -> CommandeResponse:
        commande = self.repository.get(commande_id, ctx.boutique_id)
        if not commande:
            raise NotFoundError("Commande non trouvée")
        return CommandeResponse.model_validate(commande)

    async def create_commande(self, data: CommandeCreate, ctx: RequestContext) -> CommandeResponse:
        boutique_id = ctx.require_boutique()

        if not self.repository.get_fournisseur(data.fournisseur_id, boutique_id):
            raise NotFoundError("Fournisseur non trouvé")

        produits = self.repository.get_produits([l.produit_id for l in data.lignes], boutique_id)
        lignes = []
        for ligne in data.lignes:
            if ligne.produit_id not in produits:
                raise NotFoundError(f"Produit {ligne.produit_id} non trouvé")
            lignes.append(LigneCommande(
                produit_id=ligne.produit_id,
                quantite=ligne.quantite,
                prix_unitaire=ligne.prix_unitaire,
                sous_total=ligne.prix_unitaire * ligne.quantite,
            ))

        montant_total = sum((l.sous_total for l in lignes), Decimal("0"))
        commande = self.repository.add(Commande(
            numero_commande=self.repository.next_numero(boutique_id),
            fournisseur_id=data.fournisseur_id,
            boutique_id=boutique_id,
            statut=CommandeStatut.EN_ATTENTE.value,
            montant_total=montant_total,
            montant_paye=Decimal("0"),
            montant_restant=montant_total,
            date_commande=data.date_commande or datetime.now(),
            date_echeance=data.date_echeance,
            notes=data.notes,
            lignes=lignes,
        ))
        logger.info(f"Commande {commande.numero_commande} créée dans {boutique_id} par {ctx.user_id}")
        return CommandeResponse.model_validate(commande)

    async def update_commande(self, commande_id: str, data: CommandeUpdate, ctx: RequestContext) -> CommandeResponse:
        commande = self.repository.get(commande_id, ctx.boutique_id)
        if not commande:
            raise NotFoundError("Commande non trouvée")

        values = data.model_dump(exclude_unset=True)
        statut = values.get("statut")
        if statut and statut.value != commande.statut:
            if commande.statut in CLOSED_STATUTS:
                raise BusinessError("Cette commande a déjà été traitée")
            if statut == CommandeStatut.RECUE:
                raise BusinessError("Utilisez la réception pour marquer une commande comme reçue")
            commande.statut = statut.value

        if "date_echeance" in values:
            commande.date_echeance = values["date_echeance"]
        if "notes" in values:
            commande.notes = values["notes"]

        self.repository.commit()
        self.db.refresh(commande)
        return CommandeResponse.model_validate(commande)

    async def delete_commande(self, commande_id: str, ctx: RequestContext) -> dict:
        commande = self.repository.get(commande_id, ctx.boutique_id)
        if not commande:
            raise NotFoundError("Commande non trouvée")

        if commande.statut == CommandeStatut.RECUE.value or any(l.quantite_recue > 0 for l in commande.lignes):
            raise BusinessError("Impossible de supprimer une commande reçue")

        self.repository.delete(commande)
        logger.info(f"Commande {commande_id} supprimée par {ctx.user_id}")
        return {"success": True}

    async def receive_commande(
        self, commande_id: str, data: ReceptionCreate, ctx: RequestContext
    ) -> ReceptionResponse:
        """
        Réception de marchandises.

        Les entrées en stock, la mise à jour de la commande et l'écriture
        d'achat sont validées ensemble ou pas du tout.
        """
        commande = self.repository.get(commande_id, ctx.boutique_id)
        if not commande:
            raise NotFoundError("Commande non trouvée")

        if commande.statut in CLOSED_STATUTS:
            raise BusinessError("Cette commande a déjà été traitée")

        try:
            montant_recu = self._apply_reception(commande, data)
            complete = data.annuler_reste or all(l.quantite_recue >= l.quantite for l in commande.lignes)

            montant_paye = data.montant_paye or Decimal("0")
            # Un total réduit par annulerReste peut passer sous le déjà-payé : reste 0
            restant = max(Decimal(str(commande.montant_total)) - Decimal(str(commande.montant_paye)), Decimal("0"))
            if montant_paye > restant:
                raise BusinessError("Le montant payé dépasse le montant restant")

            commande.montant_paye = Decimal(str(commande.montant_paye)) + montant_paye
            commande.montant_restant = restant - montant_paye
            commande.statut = CommandeStatut.RECUE.value if complete else CommandeStatut.EN_COURS.value
            commande.date_reception = datetime.now() if complete else None
            if data.notes:
                commande.notes = data.notes

            if montant_paye > 0:
                self.db.add(Transaction(
                    type="ACHAT",
                    montant=montant_paye,
                    description=f"Paiement {'final' if complete else 'partiel'} commande #{commande.numero_commande}",
                    categorie_depense="MARCHANDISES",
                    boutique_id=commande.boutique_id,
                    user_id=ctx.user_id,
                    date_transaction=datetime.now(),
                ))

            self.repository.commit()
        except AppError:
            self.db.rollback()
            raise

        logger.info(f"Commande {commande.numero_commande} réceptionnée ({commande.statut}) par {ctx.user_id}")
        commande = self.repository.get(commande_id, ctx.boutique_id)
        return ReceptionResponse(
            commande=CommandeResponse.model_validate(commande),
            montant_total_recu=montant_recu,
            lignes_traitees=len(data.lignes_recues),
            statut_final=commande.statut,
        )

    def _apply_reception(self, commande: Commande, data: ReceptionCreate) -> Decimal:
        lignes = {ligne.id: ligne for ligne in commande.lignes}
        montant_recu = Decimal("0")

        for recue in data.lignes_recues:
            ligne = lignes.get(recue.ligne_id)
            if ligne is None:
                raise NotFoundError(f"Ligne de commande {recue.ligne_id} non trouvée")

            nouvelle_quantite = ligne.quantite_recue + recue.quantite_recue
            if nouvelle_quantite > ligne.quantite:
                raise BusinessError(
                    f"Quantité reçue ({nouvelle_quantite}) dépasse la quantité commandée "
                    f"({ligne.quantite}) pour le produit {ligne.produit.nom}"
                )
            ligne.quantite_recue = nouvelle_quantite

            if recue.quantite_recue > 0:
                stock = self.stocks.for_produit(ligne.produit_id, commande.boutique_id)
                if stock is None:
                    stock = Stock(produit_id=ligne.produit_id, boutique_id=commande.boutique_id, quantite=0)
                    self.db.add(stock)
                    self.db.flush()
                self.stocks.record_movement(
                    stock, "ENTREE", recue.quantite_recue,
                    f"Réception commande {commande.numero_commande} - {ligne.produit.nom}",
                )
                montant_recu += Decimal(str(ligne.prix_unitaire)) * recue.quantite_recue

        if data.annuler_reste:
            # La quantité commandée est ramenée à la quantité reçue
            for ligne in commande.lignes:
                ligne.quantite = ligne.quantite_recue
                ligne.sous_total = Decimal(str(ligne.prix_unitaire)) * ligne.quantite
            commande.montant_total = sum(
                (Decimal(str(l.sous_total)) for l in commande.lignes), Decimal("0")
            )

        return montant_recu
