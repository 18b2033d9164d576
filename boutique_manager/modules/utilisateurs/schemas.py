from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from boutique_manager.core.auth.tenancy import Role
from boutique_manager.shared.schemas.common import CamelModel, InputModel


class UtilisateurCreate(InputModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Au moins 6 caractères")
    role: Role
    boutique_id: Optional[str] = None


class UtilisateurUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[Role] = None
    boutique_id: Optional[str] = None


class BoutiqueRef(CamelModel):
    id: str
    nom: str


class UtilisateurResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    boutique_id: Optional[str] = None
    boutique: Optional[BoutiqueRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
