# boutique_manager/shared/services/statistics.py
"""
Agrégations calculées à la lecture sur des enregistrements déjà chargés.

Fonctions pures : aucune requête, aucun état. Une boutique sans
enregistrement lié obtient des zéros, jamais None.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional


def _sum(values: Iterable[Any]) -> float:
    total = Decimal("0")
    for value in values:
        if value is not None:
            total += Decimal(str(value))
    return float(total)


def boutique_stats(boutique) -> Dict[str, Any]:
    ventes = list(boutique.ventes or [])
    return {
        "totalVentes": _sum(v.montant_total for v in ventes),
        "totalImpayes": _sum(v.montant_restant for v in ventes),
        "nombreUsers": len(boutique.users or []),
        "nombreProduits": len(boutique.produits or []),
        "nombreVentes": len(ventes),
        "nombreClients": len(boutique.clients or []),
    }


def transaction_stats(
    transactions: Iterable[Any],
    capital_initial: Any = 0,
    now: Optional[datetime] = None,
) -> Dict[str, float]:
    """
    Recettes et dépenses du mois courant, solde global.

    Les DEPENSE sont stockées en négatif : on compare sur la valeur absolue.
    """
    now = now or datetime.now()
    recettes_mois = Decimal("0")
    depenses_mois = Decimal("0")
    injections = Decimal("0")
    recettes = Decimal("0")
    depenses = Decimal("0")

    for t in transactions:
        montant = abs(Decimal(str(t.montant or 0)))
        date = t.date_transaction
        this_month = date is not None and date.year == now.year and date.month == now.month

        if t.type == "RECETTE":
            recettes += montant
            if this_month:
                recettes_mois += montant
        elif t.type == "DEPENSE":
            depenses += montant
            if this_month:
                depenses_mois += montant
        elif t.type == "INJECTION_CAPITAL":
            injections += montant

    solde = Decimal(str(capital_initial or 0)) + injections + recettes - depenses
    return {
        "recettesMois": float(recettes_mois),
        "depensesMois": float(depenses_mois),
        "beneficeMois": float(recettes_mois - depenses_mois),
        "solde": float(solde),
    }


def receivable_stats(ventes: Iterable[Any]) -> Dict[str, Any]:
    """Statistiques des créances sur toutes les ventes de la boutique"""
    ventes = list(ventes)
    repartition: Dict[str, Dict[str, Any]] = {}
    for v in ventes:
        entry = repartition.setdefault(v.statut, {"statut": v.statut, "montant": Decimal("0"), "nombre": 0})
        entry["montant"] += Decimal(str(v.montant_total or 0))
        entry["nombre"] += 1

    return {
        "montantTotalCreances": _sum(v.montant_total for v in ventes),
        "montantTotalPaye": _sum(v.montant_paye for v in ventes),
        "montantTotalRestant": _sum(v.montant_restant for v in ventes),
        "nombreCreances": len(ventes),
        "repartitionStatuts": [
            {**entry, "montant": float(entry["montant"])} for entry in repartition.values()
        ],
    }


def days_overdue(date_echeance: Optional[datetime], now: Optional[datetime] = None) -> int:
    if date_echeance is None:
        return 0
    now = now or datetime.now()
    return max(0, (now - date_echeance).days)


def sale_status(montant_total: Decimal, montant_paye: Decimal) -> str:
    """Statut d'une vente selon le montant réglé"""
    if montant_paye <= 0:
        return "IMPAYE"
    if montant_paye < montant_total:
        return "PARTIEL"
    return "PAYE"


def stock_levels(stocks: Iterable[Any]) -> Dict[str, list]:
    """Répartit les stocks en rupture, faibles (sous le seuil) et normaux"""
    levels: Dict[str, list] = {"enRupture": [], "stockFaible": [], "stockNormal": []}
    for s in stocks:
        seuil = s.produit.seuil_alerte or 0
        if s.quantite <= 0:
            levels["enRupture"].append(s)
        elif s.quantite <= seuil:
            levels["stockFaible"].append(s)
        else:
            levels["stockNormal"].append(s)
    return levels


def stock_value(stocks: Iterable[Any]) -> float:
    """Valeur du stock au prix de vente"""
    return _sum(s.quantite * Decimal(str(s.produit.prix_vente or 0)) for s in stocks)
