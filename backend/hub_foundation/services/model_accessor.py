"""
Hub Foundation: Model Accessor (Lookup & Pagination Contract)
==============================================================

What:  The collaborator a ResourceController uses to fetch domain records.
Why:   The controller only knows "find these ids" and "give me page N of
       size L". How a resource type is stored, joined or filtered lives here.
How:   `ModelAccessor` is the abstract interface; `SqlAlchemyModelAccessor`
       implements it over one declarative model with async SQLAlchemy.
Who:   Constructed once per resource type in hub_foundation.resources and
       injected into that type's controller.

Scopes:
    A scope is a named, reusable query transform (`Select -> Select`).
    Each accessor carries an explicit registry populated at construction:

        SqlAlchemyModelAccessor(
            Artwork,
            scopes={"onView": lambda q: q.where(Artwork.is_on_view.is_(True))},
        )

    `scoped("onView")` returns a new accessor with the transform applied to
    every query it issues. Scopes compose: `scoped("a").scoped("b")`.
    Asking for an unregistered scope raises ScopeNotFoundError (a
    configuration error).

Query plans:
    find(id):        SELECT ... WHERE pk = :id
    find([ids]):     SELECT ... WHERE pk IN (:ids) ORDER BY pk
    paginate(L, p):  SELECT count(*) FROM (<scoped query>)
                     SELECT ... ORDER BY pk LIMIT :L OFFSET (p - 1) * L
    Ids the key column cannot hold (e.g. "1.5", "3000000000" for int4) skip
    the query and count as missing.
"""

import copy
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy import BigInteger, Select, SmallInteger, func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hub_foundation.exceptions import DatabaseError, ScopeNotFoundError

logger = logging.getLogger(__name__)

ScopeFn = Callable[[Select], Select]

# Exclusive magnitude bound of an integer key column, by column type
_KEY_BOUNDS = ((SmallInteger, 2 ** 15), (BigInteger, 2 ** 63))
_DEFAULT_KEY_BOUND = 2 ** 31


@dataclass
class Page:
    """
    One page of records returned by `paginate`.

    Plain dataclass: accessors should not know about response serialization.
    Transformer.collection() turns it into the pagination block.
    """
    items: List[Any] = field(default_factory=list)
    total: int = 0
    limit: int = 12
    current_page: int = 1

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit > 0 else 0

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class ModelAccessor(ABC):
    """
    Abstract interface for looking up and listing one type of domain record.

    Contract:
        - find() accepts a single id or a sequence of ids. A single id returns
          the record or None; a sequence returns a (possibly empty) list.
        - paginate() returns a Page of at most `limit` records.
        - Scope lookup goes through has_scope()/scoped() only; there is no
          reflective method-name dispatch.
        - Implementations must hold no per-request state: one instance is
          shared by every concurrent request.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Name of the underlying record type, used in messages and logs."""
        ...

    @abstractmethod
    async def find(
        self, db: AsyncSession, ids: Union[Any, Sequence[Any]]
    ) -> Union[Optional[Any], List[Any]]:
        """Fetch one record by id, or every record whose id is in `ids`."""
        ...

    @abstractmethod
    async def paginate(self, db: AsyncSession, limit: int, page: int = 1) -> Page:
        """Fetch page `page` (1-based) of `limit` records."""
        ...

    @property
    @abstractmethod
    def scope_names(self) -> List[str]:
        """Names of the registered scopes."""
        ...

    def has_scope(self, name: str) -> bool:
        return name in self.scope_names

    @abstractmethod
    def scoped(self, name: str) -> "ModelAccessor":
        """
        Return an accessor whose queries have scope `name` applied.

        Raises:
            ScopeNotFoundError: `name` is not registered on this accessor.
        """
        ...


class SqlAlchemyModelAccessor(ModelAccessor):
    """
    ModelAccessor over a single SQLAlchemy declarative model.

    Override `base_query()` when records need eager loading or a standing
    filter; the override is inherited by find, paginate and every scope.
    """

    def __init__(self, model: type, scopes: Optional[Mapping[str, ScopeFn]] = None):
        self.model = model
        self._scopes: Dict[str, ScopeFn] = dict(scopes or {})
        self._applied: Tuple[ScopeFn, ...] = ()

        mapper = inspect(model)
        if len(mapper.primary_key) != 1:
            raise ValueError(
                f"{model.__name__} must have exactly one primary key column "
                f"to be served by {type(self).__name__}"
            )
        self._pk = mapper.primary_key[0]
        self._key_bound = next(
            (bound for type_, bound in _KEY_BOUNDS if isinstance(self._pk.type, type_)),
            _DEFAULT_KEY_BOUND,
        )

    # ── Scope registry ────────────────────────────────────────────────────

    @property
    def model_name(self) -> str:
        return self.model.__name__

    @property
    def scope_names(self) -> List[str]:
        return sorted(self._scopes)

    def register_scope(self, name: str, fn: ScopeFn) -> None:
        """Add a scope after construction (e.g. from a plugin module)."""
        self._scopes[name] = fn

    def scoped(self, name: str) -> "SqlAlchemyModelAccessor":
        if name not in self._scopes:
            raise ScopeNotFoundError(model=self.model_name, scope=name)
        return self.filtered(self._scopes[name])

    def filtered(self, fn: ScopeFn) -> "SqlAlchemyModelAccessor":
        """
        Return an accessor with an ad-hoc transform applied.

        For per-request criteria that cannot be a registered scope, such as
        "artworks whose artist_id is the route id".
        """
        clone = copy.copy(self)
        clone._applied = self._applied + (fn,)
        return clone

    # ── Query building ────────────────────────────────────────────────────

    def base_query(self) -> Select:
        return select(self.model)

    def query(self) -> Select:
        """base_query() with every applied scope, in application order."""
        query = self.base_query()
        for scope in self._applied:
            query = scope(query)
        return query

    def coerce_id(self, value: Any) -> Optional[Any]:
        """
        Convert a validated identifier to the primary key's Python type.

        For integer keys "7", "7.0" and "7e0" all become 7. Values no row can
        carry (fractions such as "1.5", or numbers outside the key column's
        range) return None, which find() treats as "no match".
        """
        try:
            python_type = self._pk.type.python_type
        except NotImplementedError:
            return value

        if python_type is not int:
            if isinstance(value, python_type):
                return value
            try:
                return python_type(value)
            except (ValueError, TypeError):
                return None

        if isinstance(value, bool):
            return None
        try:
            number = Decimal(value) if isinstance(value, int) else Decimal(str(value).strip())
        except InvalidOperation:
            return None

        if not number.is_finite() or number != number.to_integral_value():
            return None
        # Compared as Decimal so "1e999999" never becomes a huge int
        if not -self._key_bound <= number < self._key_bound:
            return None
        return int(number)

    # ── Lookups ───────────────────────────────────────────────────────────

    async def find(
        self, db: AsyncSession, ids: Union[Any, Sequence[Any]]
    ) -> Union[Optional[Any], List[Any]]:
        many = isinstance(ids, (list, tuple, set, frozenset))
        if many:
            # Ids no row can carry are dropped, like ids with no row
            keys = [key for key in (self.coerce_id(i) for i in ids) if key is not None]
            if not keys:
                return []
            query = self.query().where(self._pk.in_(keys)).order_by(self._pk)
        else:
            key = self.coerce_id(ids)
            if key is None:
                return None
            query = self.query().where(self._pk == key)

        try:
            result = await db.execute(query)
            scalars = result.scalars().unique()
            return list(scalars.all()) if many else scalars.one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error finding %s %s: %s", self.model_name, ids, str(e))
            raise DatabaseError(
                message="Could not retrieve the requested resources. Please try again.",
                context={"model": self.model_name, "error_type": type(e).__name__},
            )

    async def paginate(self, db: AsyncSession, limit: int, page: int = 1) -> Page:
        page = max(page, 1)
        query = self.query()
        count_query = select(func.count()).select_from(query.order_by(None).subquery())

        try:
            total = (await db.execute(count_query)).scalar() or 0
            result = await db.execute(
                query.order_by(self._pk).limit(limit).offset((page - 1) * limit)
            )
            items = list(result.scalars().unique().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing %s: %s", self.model_name, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the requested resources. Please try again.",
                context={"model": self.model_name, "error_type": type(e).__name__},
            )

        logger.debug(
            "Paginated %s: page=%d limit=%d returned=%d total=%d",
            self.model_name, page, limit, len(items), total,
        )
        return Page(items=items, total=total, limit=limit, current_page=page)
