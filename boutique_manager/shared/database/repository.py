# boutique_manager/shared/database/repository.py
import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic.alias_generators import to_camel
from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from boutique_manager.core.exceptions import ConflictError
from boutique_manager.shared.database.models import Base

logger = logging.getLogger(__name__)


def _unique_fields() -> Dict[str, str]:
    """
    Champ en conflit par contrainte d'unicité.

    Indexé par nom de contrainte (PostgreSQL) et par liste de colonnes
    ``table.colonne`` (SQLite); boutique_id n'est jamais le champ fautif.
    """
    fields: Dict[str, str] = {}
    for table in Base.metadata.tables.values():
        uniques = [c for c in table.constraints if isinstance(c, UniqueConstraint)]
        uniques += [index for index in table.indexes if index.unique]
        for unique in uniques:
            columns = list(unique.columns)
            names = [col.name for col in columns if col.name != "boutique_id"]
            if not names:
                continue
            field = to_camel(names[-1])
            if unique.name:
                fields[unique.name] = field
            fields[", ".join(f"{table.name}.{col.name}" for col in columns)] = field
    # Les clés les plus longues d'abord
    return dict(sorted(fields.items(), key=lambda item: -len(item[0])))


UNIQUE_FIELDS = _unique_fields()


def conflict_field(error: IntegrityError) -> Optional[str]:
    message = str(error.orig)
    for key, field in UNIQUE_FIELDS.items():
        if key in message:
            return field
    return None


def conflict_from_integrity(error: IntegrityError) -> ConflictError:
    return ConflictError("Cette ressource existe déjà", field=conflict_field(error))


class BaseRepository:
    """Accès aux données commun à toutes les ressources d'une boutique"""
    model: Type[Any] = None

    def __init__(self, db: Session):
        self.db = db

    def scoped(self, boutique_id: Optional[str]) -> Query:
        """Requête filtrée par boutique; None signifie toutes les boutiques"""
        query = self.db.query(self.model)
        if boutique_id is not None:
            query = query.filter(self.model.boutique_id == boutique_id)
        return query

    def get(self, entity_id: str, boutique_id: Optional[str] = None):
        return self.scoped(boutique_id).filter(self.model.id == entity_id).first()

    def paginate(self, query: Query, offset: int, limit: int) -> Tuple[List[Any], int]:
        total = query.order_by(None).count()
        items = query.offset(offset).limit(limit).all()
        return items, total

    @staticmethod
    def filter_period(query: Query, column, date_debut: Optional[date], date_fin: Optional[date]) -> Query:
        """Période inclusive : la date de fin couvre toute la journée"""
        if date_debut:
            query = query.filter(column >= datetime.combine(date_debut, time.min))
        if date_fin:
            query = query.filter(column <= datetime.combine(date_fin, time.max))
        return query

    def add(self, entity):
        self.db.add(entity)
        self.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity) -> None:
        self.db.delete(entity)
        self.commit()

    def commit(self) -> None:
        """Commit unique; une violation de contrainte devient un conflit"""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Violation de contrainte: {e.orig}")
            raise conflict_from_integrity(e) from e
        except Exception:
            self.db.rollback()
            raise
