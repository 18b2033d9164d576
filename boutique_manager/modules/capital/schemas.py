from decimal import Decimal

from pydantic import Field

from boutique_manager.shared.schemas.common import InputModel


class InjectionCreate(InputModel):
    boutique_id: str = Field(..., min_length=1, description="Boutique bénéficiaire")
    montant: Decimal = Field(..., gt=0, description="Le montant doit être positif")
    description: str = Field(..., min_length=1, max_length=500)
