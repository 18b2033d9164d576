# boutique_manager/shared/schemas/common.py
import math
from typing import Annotated, Any, Dict, Optional

from fastapi import Query
from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, ValidationInfo, field_validator, model_serializer
)
from pydantic.alias_generators import to_camel

from boutique_manager.config.settings import settings


def _to_float(value):
    if value is None:
        return None
    return float(value)


# Les colonnes Numeric remontent en Decimal, le JSON attend des nombres
Money = Annotated[float, BeforeValidator(_to_float)]


class CamelModel(BaseModel):
    """Base des schémas : JSON en camelCase, snake_case accepté en entrée"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InputModel(CamelModel):
    """Base des payloads d'écriture"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def empty_optional_to_none(cls, value: Any, info: ValidationInfo) -> Any:
        # Une chaîne vide sur un champ optionnel vaut absence de valeur
        if isinstance(value, str) and not value.strip():
            field = cls.model_fields.get(info.field_name)
            if field is not None and not field.is_required():
                return None
        return value


class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Dict[str, Any]] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if limit else 0)


class PageParams:
    """Paramètres de liste partagés : page, limit, search"""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
        search: Optional[str] = Query(None),
    ):
        self.page = page
        self.limit = limit
        self.search = search.strip() if search and search.strip() else None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pagination(self, total: int) -> Pagination:
        return Pagination.build(self.page, self.limit, total)


class CountSummary(CamelModel):
    """Projection ``_count`` des relations"""
    users: Optional[int] = None
    produits: Optional[int] = None
    ventes: Optional[int] = None
    clients: Optional[int] = None
    commandes: Optional[int] = None

    @model_serializer(mode="wrap")
    def _only_counted(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}

