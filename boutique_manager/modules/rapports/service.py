# boutique_manager/modules/rapports/service.py
import logging
from datetime import date, datetime, time
from typing import Any, Dict, Optional, Tuple

from dateutil.relativedelta import SU, relativedelta
from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import ValidationError
from boutique_manager.modules.transactions.schemas import TransactionResponse
from boutique_manager.shared.services.statistics import stock_levels, stock_value
from .repository import RapportsRepository
from .schemas import Periode, RapportType

logger = logging.getLogger(__name__)

# Début de période relatif au jour courant; la semaine commence le dimanche
PERIOD_STARTS = {
    Periode.JOUR: relativedelta(),
    Periode.SEMAINE: relativedelta(weekday=SU(-1)),
    Periode.MOIS: relativedelta(day=1),
    Periode.ANNEE: relativedelta(month=1, day=1),
}


def period_bounds(
    periode: Optional[Periode],
    date_debut: Optional[date] = None,
    date_fin: Optional[date] = None,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Bornes inclusives du rapport.

    Des dates explicites (les deux) priment sur la période; sans période,
    le mois en cours est utilisé.
    """
    if date_debut and date_fin:
        if date_debut > date_fin:
            raise ValidationError(details={"dateDebut": ["La date de début doit précéder la date de fin"]})
        return date_debut, date_fin

    today = today or date.today()
    if periode == Periode.TRIMESTRE:
        debut = today + relativedelta(month=(today.month - 1) // 3 * 3 + 1, day=1)
    else:
        debut = today + PERIOD_STARTS[periode or Periode.MOIS]
    return debut, today


def _float(value: Any) -> float:
    return float(value) if value is not None else 0.0


def _produit_ref(stock) -> Dict[str, Any]:
    return {
        "nom": stock.produit.nom,
        "prixVente": _float(stock.produit.prix_vente),
        "seuilAlerte": stock.produit.seuil_alerte,
        "quantite": stock.quantite,
        "categorie": stock.produit.categorie.nom if stock.produit.categorie else None,
    }


def _client_ref(client) -> Dict[str, Any]:
    return {
        "id": client.id,
        "nom": client.nom,
        "prenom": client.prenom or "",
        "email": client.email,
        "telephone": client.telephone,
    }


class RapportsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = RapportsRepository(db)

    async def generate(
        self,
        type: RapportType,
        ctx: RequestContext,
        periode: Optional[Periode] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> Dict[str, Any]:
        boutique_id = ctx.require_boutique()
        debut, fin = period_bounds(periode, date_debut, date_fin)

        builders = {
            RapportType.VENTES: self._ventes,
            RapportType.PRODUITS: self._produits,
            RapportType.CLIENTS: self._clients,
            RapportType.STOCKS: self._stocks,
            RapportType.FINANCIER: self._financier,
        }
        rapport = builders[type](boutique_id, debut, fin)
        logger.info(f"Rapport {type.value} généré pour {boutique_id} ({debut} - {fin}) par {ctx.user_id}")

        return {
            "type": type.value,
            **rapport,
            "periode": {
                "debut": datetime.combine(debut, time.min),
                "fin": datetime.combine(fin, time.max),
                "type": periode.value if periode else "personnalisee",
            },
        }

    def _ventes(self, boutique_id: str, debut: date, fin: date) -> Dict[str, Any]:
        nombre, montant, moyenne = self.repository.sales_summary(boutique_id, debut, fin)
        par_jour = [
            {"date": str(row.jour), "nombre": row.nombre, "montant": _float(row.montant)}
            for row in self.repository.sales_by_day(boutique_id, debut, fin)
        ]
        produits = self.repository.top_products(boutique_id, debut, fin)

        return {
            "resume": {
                "totalVentes": nombre or 0,
                "chiffreAffaires": _float(montant),
                "panierMoyen": _float(moyenne),
                "ventesParJour": par_jour,
            },
            "produitsVendus": [
                {
                    "produit": {"id": row.id, "nom": row.nom, "prixVente": _float(row.prix_vente)},
                    "quantite": int(row.quantite or 0),
                    "montant": _float(row.montant),
                }
                for row in produits
            ],
            "statutsVente": [
                {"statut": row.statut, "nombre": row.nombre, "montant": _float(row.montant)}
                for row in self.repository.sales_by_status(boutique_id, debut, fin)
            ],
        }

    def _produits(self, boutique_id: str, debut: date, fin: date) -> Dict[str, Any]:
        total, prix_moyen = self.repository.products_summary(boutique_id)
        levels = stock_levels(self.repository.stocks(boutique_id))

        return {
            "resume": {
                "totalProduits": total or 0,
                "prixMoyen": _float(prix_moyen),
            },
            "produitsPopulaires": [
                {
                    "nom": row.nom,
                    "prixVente": _float(row.prix_vente),
                    "categorie": {"nom": row.categorie or "Sans catégorie"},
                    "quantite": int(row.quantite or 0),
                    "montant": _float(row.montant),
                }
                for row in self.repository.top_products(boutique_id, debut, fin, by_amount=True)
            ],
            "stocksAnalyse": {key: len(stocks) for key, stocks in levels.items()},
        }

    def _clients(self, boutique_id: str, debut: date, fin: date) -> Dict[str, Any]:
        clients = self.repository.clients(boutique_id)
        actifs = self.repository.top_clients(boutique_id, debut, fin)

        return {
            "resume": {
                "totalClients": len(clients),
                "clientsActifs": len(actifs),
                "nouveauxClients": self.repository.new_clients_count(boutique_id, debut, fin),
            },
            "clientsDetails": [_client_ref(c) for c in clients],
            "clientsActifs": [
                {**_client_ref(client), "nombreAchats": nombre, "montantAchats": _float(montant)}
                for client, nombre, montant in actifs
            ],
        }

    def _stocks(self, boutique_id: str, debut: date, fin: date) -> Dict[str, Any]:
        stocks = self.repository.stocks(boutique_id)
        levels = stock_levels(stocks)
        valeur = stock_value(stocks)

        return {
            "resume": {
                "totalProduits": len(stocks),
                "valeurTotaleStock": valeur,
                "enRupture": len(levels["enRupture"]),
                "stockFaible": len(levels["stockFaible"]),
            },
            "analyse": {
                **{key: [{"produit": _produit_ref(s)} for s in items] for key, items in levels.items()},
                "valeurTotale": valeur,
            },
            "mouvementsRecents": [
                {
                    "type": m.type,
                    "quantite": m.quantite,
                    "motif": m.motif or "",
                    "produit": {"nom": m.stock.produit.nom},
                    "createdAt": m.created_at,
                }
                for m in self.repository.recent_movements(boutique_id)
            ],
        }

    def _financier(self, boutique_id: str, debut: date, fin: date) -> Dict[str, Any]:
        par_type = self.repository.transactions_by_type(boutique_id, debut, fin)
        chiffre_affaires = _float(self.repository.sales_amount(boutique_id, debut, fin))

        # Les dépenses sont stockées en négatif
        recettes = sum(abs(_float(row.montant)) for row in par_type if row.type == "RECETTE")
        depenses = sum(abs(_float(row.montant)) for row in par_type if row.type == "DEPENSE")

        return {
            "resume": {
                "chiffreAffaires": chiffre_affaires,
                "recettes": recettes,
                "depenses": depenses,
                "benefice": chiffre_affaires - depenses,
                "solde": recettes - depenses,
            },
            "transactionsParType": [
                {"type": row.type, "montant": _float(row.montant), "nombre": row.nombre}
                for row in par_type
            ],
            "transactions": [
                TransactionResponse.model_validate(t).model_dump(by_alias=True)
                for t in self.repository.transactions(boutique_id, debut, fin)
            ],
        }
