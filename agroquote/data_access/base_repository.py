# agroquote/data_access/base_repository.py

import logging
from dataclasses import fields, MISSING, Field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Generic, TypeVar, Type, List, Optional, Dict, Any, Tuple, Union, TYPE_CHECKING

from agroquote.data_access.database_manager import DatabaseManager

if TYPE_CHECKING:
    from ..business_logic.entities.base_entity import BaseEntity

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='BaseEntity')


def _unwrap_optional(field_type: Any) -> Tuple[Any, bool]:
    """Optional[X] -> (X, True); anything else -> (type, False)."""
    if getattr(field_type, '__origin__', None) is Union:
        args = [arg for arg in field_type.__args__ if arg is not type(None)]
        if args:
            return args[0], len(args) < len(field_type.__args__)
    return field_type, False


def _restore(target_type: Any, raw: Any) -> Any:
    """Turns a value as SQLite stores it back into the dataclass field's type."""
    if isinstance(target_type, type) and issubclass(target_type, Enum):
        return target_type(raw)
    if target_type is Decimal:
        return Decimal(str(raw))
    if target_type is datetime and isinstance(raw, str):
        return datetime.fromisoformat(raw)
    if target_type is date and isinstance(raw, str):
        return date.fromisoformat(raw[:10])
    if target_type is bool and isinstance(raw, int):
        return bool(raw)
    return raw


class BaseRepository(Generic[T]):
    """
    Table-per-dataclass persistence. Only init fields are columns; non-init
    fields (resolved relations) are filled by the concrete repositories.
    """

    def __init__(self, db_manager: DatabaseManager, model_type: Type[T], table_name: str):
        self.db_manager = db_manager
        self.model_type = model_type
        self._table_name = table_name
        self._column_fields: List[Field] = [f for f in fields(model_type) if f.init]
        self._db_columns = [f.name for f in self._column_fields]
        logger.debug(f"{type(self).__name__} on '{table_name}' with columns {self._db_columns}")

    # --- Reads ---

    def get_by_id(self, entity_id: int) -> Optional[T]:
        row = self.db_manager.fetch_one(f"SELECT * FROM {self._table_name} WHERE id = ?", (entity_id,))
        return self._entity_from_row(dict(row)) if row else None

    def get_all(self, order_by: Optional[str] = None) -> List[T]:
        return self.find_by_criteria({}, order_by=order_by)

    def find_by_criteria(self, criteria: Dict[str, Any], order_by: Optional[str] = None) -> List[T]:
        """
        Finds entities matching a dict of criteria.
        A value may be a plain value (equality) or an (operator, value) tuple,
        e.g. {"quote_date": ("BETWEEN", (start, end))}.
        """
        where, params = self._where_clause(criteria)
        query = f"SELECT * FROM {self._table_name}{where}"
        if order_by:
            query += f" ORDER BY {order_by}"
        logger.debug(f"find_by_criteria on {self._table_name}: {query} {params}")
        return [self._entity_from_row(dict(row)) for row in self.db_manager.fetch_all(query, params)]

    def count_by_criteria(self, criteria: Dict[str, Any]) -> int:
        where, params = self._where_clause(criteria)
        row = self.db_manager.fetch_one(f"SELECT COUNT(*) FROM {self._table_name}{where}", params)
        return int(row[0]) if row else 0

    def _where_clause(self, criteria: Dict[str, Any]) -> Tuple[str, tuple]:
        conditions: List[str] = []
        params: List[Any] = []
        for column, value in (criteria or {}).items():
            operator, operand = value if isinstance(value, tuple) and len(value) == 2 else ("=", value)
            operator = str(operator).upper()
            if operator == "BETWEEN":
                low, high = operand
                conditions.append(f"{column} BETWEEN ? AND ?")
                params.extend((self._to_db_value(low), self._to_db_value(high)))
            else:
                conditions.append(f"{column} {operator} ?")
                params.append(self._to_db_value(operand))
        where = " WHERE " + " AND ".join(conditions) if conditions else ""
        return where, tuple(params)

    # --- Writes ---

    @staticmethod
    def _to_db_value(value: Any) -> Any:
        if isinstance(value, Decimal): return float(value)
        if isinstance(value, Enum): return value.value
        if isinstance(value, bool): return int(value)
        if isinstance(value, (datetime, date)): return value.isoformat()
        return value

    def _entity_to_dict_for_db(self, entity: T) -> Dict[str, Any]:
        """Column name -> DB-ready value, without the id."""
        return {name: self._to_db_value(getattr(entity, name, None))
                for name in self._db_columns if name != 'id'}

    def add(self, entity: T) -> Optional[T]:
        values = self._entity_to_dict_for_db(entity)
        query = (f"INSERT INTO {self._table_name} ({', '.join(values)}) "
                 f"VALUES ({', '.join('?' for _ in values)})")
        try:
            cursor = self.db_manager.execute_query(query, tuple(values.values()))
        except Exception as e:
            logger.error(f"Insert into {self._table_name} failed for {entity}: {e}", exc_info=True)
            return None

        if cursor.lastrowid is None:
            logger.warning(f"Insert into {self._table_name} returned no row id.")
            return None
        entity.id = cursor.lastrowid
        logger.debug(f"Inserted {type(entity).__name__} #{entity.id} into {self._table_name}.")
        return entity

    def update(self, entity: T) -> Optional[T]:
        if getattr(entity, 'id', None) is None:
            logger.error(f"Cannot update {type(entity).__name__} without an id.")
            return None

        values = self._entity_to_dict_for_db(entity)
        assignments = ', '.join(f"{name} = ?" for name in values)
        query = f"UPDATE {self._table_name} SET {assignments} WHERE id = ?"
        try:
            self.db_manager.execute_query(query, tuple(values.values()) + (entity.id,))
        except Exception as e:
            logger.error(f"Update of {self._table_name} #{entity.id} failed: {e}", exc_info=True)
            return None
        logger.info(f"Updated {self._table_name} #{entity.id}.")
        return entity

    def delete(self, entity_id: int) -> bool:
        try:
            cursor = self.db_manager.execute_query(f"DELETE FROM {self._table_name} WHERE id = ?", (entity_id,))
        except Exception as e:
            logger.error(f"Delete of {self._table_name} #{entity_id} failed: {e}", exc_info=True)
            return False
        if cursor.rowcount > 0:
            logger.info(f"Deleted {self._table_name} #{entity_id}.")
            return True
        return False

    # --- Mapping ---

    def _entity_from_row(self, row: Dict[str, Any]) -> T:
        """Builds the dataclass from a row dict; extra (joined) columns are ignored."""
        kwargs: Dict[str, Any] = {}
        for f in self._column_fields:
            raw = row.get(f.name)
            target_type, optional = _unwrap_optional(f.type)
            if raw is None:
                has_default = f.default is not MISSING or f.default_factory is not MISSING
                if not (has_default or optional):
                    raise ValueError(f"NULL in required column '{f.name}' of '{self._table_name}': {row}")
                continue
            try:
                kwargs[f.name] = _restore(target_type, raw)
            except (ValueError, TypeError, InvalidOperation) as e:
                logger.warning(f"Could not restore {self._table_name}.{f.name} from {raw!r}: {e}")
                kwargs[f.name] = None
        return self.model_type(**kwargs)
