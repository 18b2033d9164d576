# boutique_manager/modules/utilisateurs/service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.service import AuthService
from boutique_manager.core.auth.tenancy import RequestContext, Role
from boutique_manager.core.exceptions import (
    BusinessError, ConflictError, NotFoundError, ValidationError
)
from boutique_manager.shared.database.models import User
from .repository import UtilisateursRepository
from .schemas import UtilisateurCreate, UtilisateurResponse, UtilisateurUpdate

logger = logging.getLogger(__name__)


class UtilisateursService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = UtilisateursRepository(db)

    async def list_users(self, role: Optional[str], boutique_id: Optional[str]) -> List[UtilisateurResponse]:
        users = self.repository.list_users(role, boutique_id)
        return [UtilisateurResponse.model_validate(user) for user in users]

    async def get_user(self, user_id: str) -> UtilisateurResponse:
        user = self.repository.get(user_id)
        if not user:
            raise NotFoundError("Utilisateur non trouvé")
        return UtilisateurResponse.model_validate(user)

    async def create_user(self, data: UtilisateurCreate, ctx: RequestContext) -> UtilisateurResponse:
        if self.repository.get_by_email(data.email):
            raise ConflictError("Cet email est déjà utilisé", field="email")

        boutique_id = None
        if data.role == Role.GESTIONNAIRE:
            if not data.boutique_id:
                raise ValidationError(
                    details={"boutiqueId": ["Une boutique est requise pour un gestionnaire"]}
                )
            if not self.repository.boutique_exists(data.boutique_id):
                raise NotFoundError("Boutique non trouvée")
            boutique_id = data.boutique_id

        user = self.repository.add(User(
            name=data.name,
            email=data.email,
            password_hash=AuthService.get_password_hash(data.password),
            role=data.role.value,
            boutique_id=boutique_id,
        ))
        logger.info(f"Utilisateur {user.id} ({user.role}) créé par {ctx.user_id}")
        return UtilisateurResponse.model_validate(user)

    async def update_user(self, user_id: str, data: UtilisateurUpdate) -> UtilisateurResponse:
        user = self.repository.get(user_id)
        if not user:
            raise NotFoundError("Utilisateur non trouvé")

        values = data.model_dump(exclude_unset=True)

        email = values.get("email")
        if email and email != user.email and self.repository.get_by_email(email):
            raise ConflictError("Cet email est déjà utilisé", field="email")

        if values.get("name"):
            user.name = values["name"]
        if email:
            user.email = email
        if values.get("password"):
            user.password_hash = AuthService.get_password_hash(values["password"])
        if values.get("role"):
            user.role = values["role"].value

        if "boutique_id" in values:
            if values["boutique_id"] and not self.repository.boutique_exists(values["boutique_id"]):
                raise NotFoundError("Boutique non trouvée")
            user.boutique_id = values["boutique_id"]

        if user.role == Role.ADMIN.value:
            user.boutique_id = None
        elif not user.boutique_id:
            raise ValidationError(
                details={"boutiqueId": ["Une boutique est requise pour un gestionnaire"]}
            )

        self.repository.commit()
        self.db.refresh(user)
        return UtilisateurResponse.model_validate(user)

    async def delete_user(self, user_id: str, ctx: RequestContext) -> dict:
        if user_id == ctx.user_id:
            raise BusinessError("Vous ne pouvez pas supprimer votre propre compte")

        user = self.repository.get(user_id)
        if not user:
            raise NotFoundError("Utilisateur non trouvé")

        if self.repository.count_activity(user_id) > 0:
            raise BusinessError("Impossible de supprimer un utilisateur avec des ventes ou transactions")

        self.repository.delete(user)
        logger.info(f"Utilisateur {user_id} supprimé par {ctx.user_id}")
        return {"success": True}
