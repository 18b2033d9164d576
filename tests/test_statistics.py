from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from boutique_manager.shared.services.statistics import (
    boutique_stats, days_overdue, receivable_stats, sale_status, transaction_stats
)

NOW = datetime(2026, 3, 15, 12, 0)


def _transaction(type_, montant, date=NOW):
    return SimpleNamespace(type=type_, montant=Decimal(str(montant)), date_transaction=date)


def _vente(total, paye, statut):
    return SimpleNamespace(
        montant_total=Decimal(str(total)),
        montant_paye=Decimal(str(paye)),
        montant_restant=Decimal(str(total - paye)),
        statut=statut,
    )


def test_boutique_without_records_has_zero_stats():
    boutique = SimpleNamespace(ventes=[], users=[], produits=[], clients=[])
    assert boutique_stats(boutique) == {
        "totalVentes": 0,
        "totalImpayes": 0,
        "nombreUsers": 0,
        "nombreProduits": 0,
        "nombreVentes": 0,
        "nombreClients": 0,
    }


def test_boutique_stats_sums_sales():
    boutique = SimpleNamespace(
        ventes=[_vente(100, 100, "PAYE"), _vente(80, 30, "PARTIEL")],
        users=[object()],
        produits=[object(), object()],
        clients=[],
    )
    stats = boutique_stats(boutique)
    assert stats["totalVentes"] == 180.0
    assert stats["totalImpayes"] == 50.0
    assert stats["nombreVentes"] == 2
    assert stats["nombreProduits"] == 2


def test_transaction_stats_month_and_balance():
    transactions = [
        _transaction("RECETTE", 100),
        _transaction("DEPENSE", -40),
        _transaction("RECETTE", 50, datetime(2026, 2, 10)),
        _transaction("INJECTION_CAPITAL", 500, datetime(2026, 1, 1)),
        _transaction("ACHAT", 30),
    ]
    stats = transaction_stats(transactions, capital_initial=Decimal("1000"), now=NOW)
    assert stats == {
        "recettesMois": 100.0,
        "depensesMois": 40.0,
        "beneficeMois": 60.0,
        "solde": 1610.0,
    }


def test_transaction_stats_empty():
    assert transaction_stats([], now=NOW)["solde"] == 0


def test_receivable_stats():
    stats = receivable_stats([
        _vente(100, 100, "PAYE"),
        _vente(80, 30, "PARTIEL"),
        _vente(20, 0, "IMPAYE"),
        _vente(40, 10, "PARTIEL"),
    ])
    assert stats["montantTotalCreances"] == 240.0
    assert stats["montantTotalPaye"] == 140.0
    assert stats["montantTotalRestant"] == 100.0
    assert stats["nombreCreances"] == 4
    repartition = {entry["statut"]: entry for entry in stats["repartitionStatuts"]}
    assert repartition["PARTIEL"] == {"statut": "PARTIEL", "montant": 120.0, "nombre": 2}


def test_sale_status():
    assert sale_status(Decimal("100"), Decimal("0")) == "IMPAYE"
    assert sale_status(Decimal("100"), Decimal("40")) == "PARTIEL"
    assert sale_status(Decimal("100"), Decimal("100")) == "PAYE"


def test_days_overdue():
    assert days_overdue(None, NOW) == 0
    assert days_overdue(datetime(2026, 3, 10, 12, 0), NOW) == 5
    assert days_overdue(datetime(2026, 4, 1), NOW) == 0
