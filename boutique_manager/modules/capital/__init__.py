"""
Module Capital - Injections de capital (administrateurs uniquement)
"""

from .router import router
from .service import CapitalService

__all__ = [
    "router",
    "CapitalService"
]
