from datetime import datetime
from typing import Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, CountSummary, InputModel


class CategorieCreate(InputModel):
    nom: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CategorieUpdate(InputModel):
    nom: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None


class CategorieResponse(CamelModel):
    id: str
    nom: str
    description: Optional[str] = None
    boutique_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    count: Optional[CountSummary] = Field(None, alias="_count")
