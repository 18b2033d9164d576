# boutique_manager/api/v1/auth.py
import logging

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session, selectinload

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import get_current_user, own_boutique
from boutique_manager.core.auth.schemas import TokenResponse, UserLogin, UserResponse
from boutique_manager.core.auth.service import AuthService
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import AuthenticationError, NotFoundError
from boutique_manager.modules.boutiques.schemas import BoutiqueResponse, BoutiqueStats
from boutique_manager.shared.database.models import Boutique, User
from boutique_manager.shared.services.statistics import boutique_stats

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        boutique_id=user.boutique_id,
        boutique_nom=user.boutique.nom if user.boutique else None,
    )


def _authenticate(db: Session, email: str, password: str) -> TokenResponse:
    user = db.query(User).filter(User.email == email.strip()).first()

    if not user or not AuthService.verify_password(password, user.password_hash):
        logger.warning(f"Échec de connexion pour {email}")
        raise AuthenticationError("Email ou mot de passe incorrects")

    logger.info(f"Connexion de {user.email} ({user.role})")
    return TokenResponse(
        access_token=AuthService.token_for_user(user),
        token_type="bearer",
        user=_user_response(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Connexion (formulaire OAuth2) pour obtenir un token d'accès

    **Paramètres :**
    - **username**: email de l'utilisateur
    - **password**: mot de passe
    """
    return _authenticate(db, form_data.username, form_data.password)


@router.post("/login-json", response_model=TokenResponse)
async def login_json(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Connexion alternative acceptant du JSON

    **Body:**
    ```json
        {
            "email": "admin@boutique.com",
            "password": "admin123"
        }
    ```
    """
    return _authenticate(db, user_login.email, user_login.password)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Informations de l'utilisateur courant

    **Headers requis :**
    - Authorization: Bearer {token}
    """
    return _user_response(current_user)


@router.get("/boutique", response_model=BoutiqueResponse)
async def get_my_boutique(
    ctx: RequestContext = Depends(own_boutique),
    db: Session = Depends(get_db)
):
    """Boutique de la session avec ses statistiques; `boutiqueId` est ignoré"""
    boutique = (
        db.query(Boutique)
        .options(
            selectinload(Boutique.users),
            selectinload(Boutique.produits),
            selectinload(Boutique.ventes),
            selectinload(Boutique.clients),
        )
        .filter(Boutique.id == ctx.boutique_id)
        .first()
    )
    if boutique is None:
        raise NotFoundError("Boutique non trouvée")

    response = BoutiqueResponse.model_validate(boutique)
    response.stats = BoutiqueStats.model_validate(boutique_stats(boutique))
    return response
