# boutique_manager/modules/clients/service.py
import logging

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, ConflictError, NotFoundError
from boutique_manager.shared.database.models import Client
from boutique_manager.shared.schemas.common import CountSummary, PageParams
from .repository import ClientsRepository
from .schemas import (
    ClientCreate, ClientDetail, ClientListResponse, ClientResponse, ClientUpdate, VenteSummary
)

logger = logging.getLogger(__name__)


class ClientsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ClientsRepository(db)

    async def list_clients(self, ctx: RequestContext, params: PageParams) -> ClientListResponse:
        clients, total = self.repository.list_clients(
            ctx.boutique_id, params.offset, params.limit, params.search
        )
        counts = self.repository.vente_counts([c.id for c in clients])

        items = []
        for client in clients:
            item = ClientResponse.model_validate(client)
            item.count = CountSummary(ventes=counts.get(client.id, 0))
            items.append(item)

        return ClientListResponse(clients=items, pagination=params.pagination(total))

    async def get_client(self, client_id: str, ctx: RequestContext) -> ClientDetail:
        client = self.repository.get(client_id, ctx.boutique_id)
        if not client:
            raise NotFoundError("Client non trouvé")

        detail = ClientDetail(
            **ClientResponse.model_validate(client).model_dump(),
            ventes=[VenteSummary.model_validate(v) for v in self.repository.latest_ventes(client.id)],
        )
        detail.count = CountSummary(ventes=self.repository.count_ventes(client.id))
        return detail

    def _check_email(self, boutique_id: str, email, exclude_id=None) -> None:
        # Un email vide est normalisé à None et n'est jamais comparé
        if email and self.repository.find_by_email(boutique_id, email, exclude_id=exclude_id):
            raise ConflictError("Un client avec cet email existe déjà", field="email")

    async def create_client(self, data: ClientCreate, ctx: RequestContext) -> ClientResponse:
        boutique_id = ctx.require_boutique()
        self._check_email(boutique_id, data.email)

        client = self.repository.add(Client(**data.model_dump(), boutique_id=boutique_id))
        logger.info(f"Client {client.id} créé dans {boutique_id} par {ctx.user_id}")

        response = ClientResponse.model_validate(client)
        response.count = CountSummary(ventes=0)
        return response

    async def update_client(self, client_id: str, data: ClientUpdate, ctx: RequestContext) -> ClientResponse:
        client = self.repository.get(client_id, ctx.boutique_id)
        if not client:
            raise NotFoundError("Client non trouvé")

        values = data.model_dump(exclude_unset=True)
        self._check_email(client.boutique_id, values.get("email"), exclude_id=client.id)

        for field, value in values.items():
            if field == "nom" and not value:
                continue
            setattr(client, field, value)

        self.repository.commit()
        self.db.refresh(client)

        response = ClientResponse.model_validate(client)
        response.count = CountSummary(ventes=self.repository.count_ventes(client.id))
        return response

    async def delete_client(self, client_id: str, ctx: RequestContext) -> dict:
        client = self.repository.get(client_id, ctx.boutique_id)
        if not client:
            raise NotFoundError("Client non trouvé")

        ventes = self.repository.count_ventes(client.id)
        if ventes > 0:
            raise BusinessError(
                "Impossible de supprimer ce client car il a des ventes associées",
                details={"ventes": ventes},
            )

        self.repository.delete(client)
        logger.info(f"Client {client_id} supprimé par {ctx.user_id}")
        return {"success": True}
