"""
Hub Foundation: Resource Controller (Generic Read Path)
========================================================

What:  Reusable base for read-only REST resource controllers.
Why:   Every resource type answers the same three questions: show one
       record, list a page of records, show several records by id. The
       validation, limits and id-list fan-out are identical for all of them.
How:   A controller is constructed with a ModelAccessor (how to look records
       up) and a Transformer class (how to render them). The four public
       operations validate the request, call the accessor, check the result
       and render it.
Who:   Instantiated once per resource type in hub_foundation.resources;
       called by route handlers with an explicit RequestContext.

Request Flow:
    show / show_scope ──▶ select()  ──▶ validate_id ──▶ find ──▶ item()
    index / index_scope ─▶ collect() ─┬▶ ?ids= ──▶ show_multiple() ──▶ collection()
                                      └▶ ?limit= ──▶ paginate ──▶ collection()

Failure Modes (raised at the point of detection, never caught here):
    Non-GET request                     → MethodNotAllowedError
    Id fails validate_id                → InvalidSyntaxError
    Single lookup returns nothing       → ItemNotFoundError
    ?limit= above LIMIT_MAX             → BigLimitError
    ?ids= longer than LIMIT_MAX         → TooManyIdsError
    Route names an unregistered scope   → ScopeNotFoundError (configuration)

Extension Points:
    find_by_id(request, ids)  – custom lookup (joins, filters)
    paginate(request, limit)  – custom listing
    validate_id(id)           – different id policy (e.g. UUIDs)
"""

import logging
import math
import re
from decimal import Decimal
from typing import Any, Awaitable, Callable, List, Optional, Type

from hub_foundation.config import settings
from hub_foundation.exceptions import (
    BigLimitError,
    InvalidSyntaxError,
    ItemNotFoundError,
    MethodNotAllowedError,
    ScopeNotFoundError,
    TooManyIdsError,
)
from hub_foundation.request_context import RequestContext
from hub_foundation.schemas.envelope import CollectionResponse, ItemResponse
from hub_foundation.services.model_accessor import ModelAccessor
from hub_foundation.services.transformer import Transformer

logger = logging.getLogger(__name__)

LookupCallback = Callable[[Any], Awaitable[Any]]
ListCallback = Callable[[int, Optional[Any]], Awaitable[Any]]

# Numeric strings in the permissive sense: optional sign, decimals,
# exponent, surrounding whitespace ("12", " 12", "12.0", "1e3")
_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def scope_name(segment: str) -> str:
    """
    Normalize a path segment to a scope name.

    Hyphen-separated words become PascalCase, then the first letter is
    lowered: "by-author" → "byAuthor", "on-view" → "onView".
    """
    words = segment.replace("-", " ").split(" ")
    pascal = "".join(word[:1].upper() + word[1:] for word in words)
    return pascal[:1].lower() + pascal[1:]


def scope_method_name(segment: str) -> str:
    """Conventional method name for a scope: "by-author" → "scopeByAuthor"."""
    name = scope_name(segment)
    return "scope" + name[:1].upper() + name[1:]


class ResourceController:
    """
    Base class for read-only resource controllers.

    Attributes:
        LIMIT_MAX:      Ceiling for ?limit= and for the length of ?ids=
        LIMIT_DEFAULT:  Page size when ?limit= is absent, empty or zero

    The controller holds no per-request state. One instance serves every
    concurrent request; a fresh Transformer is built for each response.
    """

    LIMIT_MAX: int = settings.limit_max
    LIMIT_DEFAULT: int = settings.limit_default

    def __init__(self, model: ModelAccessor, transformer: Type[Transformer]):
        self._model = model
        self._transformer = transformer

    @property
    def model(self) -> ModelAccessor:
        return self._model

    @property
    def transformer(self) -> Type[Transformer]:
        return self._transformer

    # ══════════════════════════════════════════════════════════════════════
    # Public operations (bound to GET routes)
    # ══════════════════════════════════════════════════════════════════════

    async def show(self, request: RequestContext, id: Any = None) -> ItemResponse:
        """Display the specified resource."""
        return await self.select(request, lambda id: self.find_by_id(request, id), id)

    async def index(self, request: RequestContext) -> CollectionResponse:
        """Display a page of the resource, or the records listed in ?ids=."""
        return await self.collect(request, lambda limit, id: self.paginate(request, limit))

    async def show_scope(self, request: RequestContext, id: Any = None) -> ItemResponse:
        """
        Display the specified resource through the scope named by the route.

        The scope comes from the second-to-last path segment:
        /artworks/on-view/12 applies scope "onView" before the lookup.
        """
        scoped = self.model.scoped(self.resolve_scope(request, -2))
        return await self.select(request, lambda id: scoped.find(request.db, id), id)

    async def index_scope(self, request: RequestContext) -> CollectionResponse:
        """
        Display a page of the resource through the scope named by the route.

        The scope comes from the last path segment: /artworks/on-view lists
        through scope "onView".
        """
        scoped = self.model.scoped(self.resolve_scope(request, -1))
        return await self.collect(
            request,
            lambda limit, id: scoped.paginate(request.db, limit, self.current_page(request)),
        )

    # ══════════════════════════════════════════════════════════════════════
    # Read paths
    # ══════════════════════════════════════════════════════════════════════

    def resolve_scope(self, request: RequestContext, offset: int) -> str:
        """
        Extract the scope name from the path segment at `offset`.

        Raises:
            ScopeNotFoundError: the accessor has no scope by that name. This
                is a wiring mistake (a route pointing at a scope nobody
                registered), so it maps to a 500, not a 404.
        """
        segment = request.segment(offset) or ""
        name = scope_name(segment)

        if not self.model.has_scope(name):
            raise ScopeNotFoundError(
                model=self.model.model_name,
                scope=name,
                context={"segment": segment, "method": scope_method_name(segment)},
            )

        logger.debug("Resolved scope %s on %s from '%s'", name, self.model.model_name, segment)
        return name

    async def select(
        self, request: RequestContext, callback: LookupCallback, id: Any = None
    ) -> ItemResponse:
        """
        Return a single resource. Not meant to be bound to routes directly.

        `callback` receives the validated id and returns a record or None.
        The id comes from the route's `id` parameter unless given explicitly.
        """
        self.ensure_read(request)

        if id is None:
            id = request.route("id")

        if not self.validate_id(id):
            raise InvalidSyntaxError(value=id)

        item = await callback(id)

        if not item:
            raise ItemNotFoundError(resource=self.model.model_name, resource_id=id)

        fields = request.input("fields")

        return self.transformer(fields).item(item)

    async def collect(self, request: RequestContext, callback: ListCallback) -> CollectionResponse:
        """
        Return a list of resources. Not meant to be bound to routes directly.

        `callback` receives (limit, id) where id is the route's optional `id`
        parameter, set for sub-resource listings such as /artists/{id}/artworks.
        """
        self.ensure_read(request)

        # ?ids= wins over pagination entirely
        ids = request.input("ids")

        if ids:
            return await self.show_multiple(request, ids)

        limit = self.parse_limit(request.input("limit"))

        if limit > self.LIMIT_MAX:
            raise BigLimitError(limit=limit, limit_max=self.LIMIT_MAX)

        id = request.route("id")

        all = await callback(limit, id)

        fields = request.input("fields")

        return self.transformer(fields).collection(all, url=request.url)

    async def show_multiple(self, request: RequestContext, ids: str = "") -> CollectionResponse:
        """
        Display the resources listed in a comma-separated id string.

        Always renders a collection, even for a single id, and never paginates.
        The count check runs before any id is validated; validation is
        left-to-right and stops at the first bad id.
        """
        id_list: List[str] = ids.split(",")

        if len(id_list) > self.LIMIT_MAX:
            raise TooManyIdsError(count=len(id_list), limit_max=self.LIMIT_MAX)

        for id in id_list:
            if not self.validate_id(id):
                raise InvalidSyntaxError(value=id)

        logger.debug("Fetching %d %s records by id", len(id_list), self.model.model_name)

        all = await self.find_by_id(request, id_list)

        fields = request.input("fields")

        return self.transformer(fields).collection(all)

    # ══════════════════════════════════════════════════════════════════════
    # Overridable lookups and policies
    # ══════════════════════════════════════════════════════════════════════

    async def find_by_id(self, request: RequestContext, ids: Any) -> Any:
        """
        Find specific id(s). Override when a lookup is more complex than a
        primary-key match on the accessor.
        """
        return await self.model.find(request.db, ids)

    async def paginate(self, request: RequestContext, limit: int) -> Any:
        """
        Get a page of records. Override when a listing is more complex than
        the accessor's default pagination.
        """
        return await self.model.paginate(request.db, limit, self.current_page(request))

    def validate_id(self, id: Any) -> bool:
        """
        Validate an `id` route or query-string value.

        By default only numeric ids whose integer part is greater than zero
        are accepted. Override in subclasses for other policies (e.g. UUID).
        """
        if id is None or isinstance(id, bool):
            return False

        if isinstance(id, int):
            return id > 0

        if isinstance(id, float):
            return math.isfinite(id) and id >= 1

        if isinstance(id, str) and _NUMERIC_RE.match(id):
            # int(x) > 0 is the same as x >= 1 and never builds a huge integer
            return Decimal(id.strip()) >= 1

        return False

    # ══════════════════════════════════════════════════════════════════════
    # Helpers
    # ══════════════════════════════════════════════════════════════════════

    def ensure_read(self, request: RequestContext) -> None:
        # Routes only bind GET, so this should never trigger
        if request.method != "GET":
            raise MethodNotAllowedError(method=request.method)

    def parse_limit(self, raw: Optional[str]) -> int:
        """
        Effective page size for a ?limit= value.

        Absent, empty or zero means LIMIT_DEFAULT. Anything that is not a
        non-negative integer is an InvalidSyntaxError.
        """
        if raw is None or not raw.strip():
            return self.LIMIT_DEFAULT

        try:
            limit = int(raw.strip())
        except ValueError:
            raise InvalidSyntaxError(
                message="The limit must be a positive integer.", value=raw
            )

        if limit < 0:
            raise InvalidSyntaxError(message="The limit must be a positive integer.", value=raw)

        return limit or self.LIMIT_DEFAULT

    def current_page(self, request: RequestContext) -> int:
        """?page= as an integer >= 1; anything else falls back to page 1."""
        raw = request.input("page")
        try:
            page = int(raw) if raw is not None else 1
        except ValueError:
            return 1
        return page if page >= 1 else 1
