from pydantic import BaseModel, Field
from typing import Optional

from boutique_manager.shared.schemas.common import CamelModel


class UserLogin(BaseModel):
    """Schéma de connexion"""
    email: str = Field(..., description="Email de l'utilisateur")
    password: str = Field(..., min_length=1, description="Mot de passe")

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "admin@boutique.com",
                "password": "admin123"
            }
        }
    }


class UserResponse(CamelModel):
    """Utilisateur connecté"""
    id: str
    name: str
    email: str
    role: str
    boutique_id: Optional[str] = None
    boutique_nom: Optional[str] = None


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
