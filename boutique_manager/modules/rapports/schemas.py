from enum import Enum


class RapportType(str, Enum):
    VENTES = "ventes"
    PRODUITS = "produits"
    CLIENTS = "clients"
    STOCKS = "stocks"
    FINANCIER = "financier"


class Periode(str, Enum):
    JOUR = "jour"
    SEMAINE = "semaine"
    MOIS = "mois"
    TRIMESTRE = "trimestre"
    ANNEE = "annee"
