"""
Hub Foundation — Resource Controller Unit Tests
================================================

What:  Tests for the generic read path (show, index, scopes, ?ids=, limits).
How:   The controller is built over a mocked ModelAccessor and a plain-dict
       transformer, so no database is involved.

What we test:
    ✅ validate_id accepts numeric ids >= 1 and rejects everything else
    ✅ show renders exactly the record the lookup returned
    ✅ invalid ids are rejected before any lookup runs
    ✅ ?limit= defaults, ceiling and malformed values
    ✅ ?ids= wins over pagination and never paginates
    ✅ the ?ids= count check runs before any id is validated
    ✅ scopes resolve from path segments; unknown scopes are configuration errors
"""

from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID

import pytest

from hub_foundation.exceptions import (
    BigLimitError,
    ConfigurationError,
    ErrorKind,
    InvalidSyntaxError,
    ItemNotFoundError,
    MethodNotAllowedError,
    ScopeNotFoundError,
    TooManyIdsError,
)
from hub_foundation.resources.artworks import (
    ArtistArtworksController,
    ArtworkTransformer,
    artwork_accessor,
)
from hub_foundation.schemas.envelope import CollectionResponse, ItemResponse
from hub_foundation.services.model_accessor import ModelAccessor, Page
from hub_foundation.services.resource_controller import (
    ResourceController,
    scope_method_name,
    scope_name,
)
from hub_foundation.services.transformer import Transformer


class DictTransformer(Transformer):
    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return dict(record)


def make_accessor(records=None, scopes=()):
    """Mocked accessor: find() returns `records`, paginate() a page of them."""
    records = records if records is not None else [{"id": 1, "title": "One"}]
    accessor = MagicMock(spec=ModelAccessor)
    accessor.model_name = "Thing"
    accessor.find = AsyncMock(return_value=records[0] if records else None)
    accessor.paginate = AsyncMock(
        return_value=Page(items=records, total=len(records), limit=12, current_page=1)
    )
    accessor.has_scope.side_effect = lambda name: name in scopes
    return accessor


# ══════════════════════════════════════════════════════════════════════════
# Id validation
# ══════════════════════════════════════════════════════════════════════════

class TestValidateId:
    """Tests for the default numeric id policy."""

    def setup_method(self):
        self.controller = ResourceController(make_accessor(), DictTransformer)

    @pytest.mark.parametrize(
        "value",
        [1, 42, "1", "27992", " 7", "7.0", "1e3", "+3", "1.5", 2.5],
    )
    def test_accepts_numeric_ids_of_at_least_one(self, value):
        assert self.controller.validate_id(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            None, True, False, 0, -1, "0", "-1", "0.5", "", "   ", "abc",
            "12abc", "1,2", "0x1A", "nan", "inf", float("nan"), float("inf"),
            ["1"], {"id": 1},
        ],
    )
    def test_rejects_everything_else(self, value):
        assert self.controller.validate_id(value) is False

    def test_subclass_can_replace_the_policy(self):
        class UuidController(ResourceController):
            def validate_id(self, id):
                try:
                    UUID(str(id))
                except ValueError:
                    return False
                return True

        controller = UuidController(make_accessor(), DictTransformer)
        assert controller.validate_id("3f2a9c1b-0000-4000-8000-000000000000") is True
        assert controller.validate_id("12") is False


# ══════════════════════════════════════════════════════════════════════════
# show / select
# ══════════════════════════════════════════════════════════════════════════

class TestShow:
    """Tests for single-record retrieval."""

    def setup_method(self):
        self.record = {"id": 5, "title": "Five", "medium": "Oil"}
        self.accessor = make_accessor([self.record])
        self.controller = ResourceController(self.accessor, DictTransformer)

    @pytest.mark.asyncio
    async def test_renders_the_record_the_lookup_returned(self, make_context):
        ctx = make_context("/api/v1/things/5")

        result = await self.controller.show(ctx, "5")

        assert isinstance(result, ItemResponse)
        assert result == DictTransformer().item(self.record)
        self.accessor.find.assert_awaited_once_with(ctx.db, "5")

    @pytest.mark.asyncio
    async def test_id_defaults_to_route_parameter(self, make_context):
        ctx = make_context("/api/v1/things/5", route={"id": "5"})

        await self.controller.show(ctx)

        self.accessor.find.assert_awaited_once_with(ctx.db, "5")

    @pytest.mark.asyncio
    async def test_repeated_show_is_stable(self, make_context):
        ctx = make_context("/api/v1/things/5")

        first = await self.controller.show(ctx, "5")
        second = await self.controller.show(ctx, "5")

        assert first == second

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["abc", "0", "-3", None])
    async def test_invalid_id_never_reaches_the_lookup(self, make_context, bad_id):
        ctx = make_context("/api/v1/things/x")

        with pytest.raises(InvalidSyntaxError) as exc_info:
            await self.controller.show(ctx, bad_id)

        assert exc_info.value.kind is ErrorKind.INVALID_SYNTAX
        self.accessor.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_record_raises_not_found(self, make_context):
        self.accessor.find.return_value = None

        with pytest.raises(ItemNotFoundError) as exc_info:
            await self.controller.show(make_context("/api/v1/things/999"), "999")

        assert exc_info.value.message == "The item you requested cannot be found."
        assert exc_info.value.context["resource"] == "Thing"

    @pytest.mark.asyncio
    async def test_non_get_is_rejected(self, make_context):
        ctx = make_context("/api/v1/things/5", method="POST")

        with pytest.raises(MethodNotAllowedError):
            await self.controller.show(ctx, "5")

        self.accessor.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fields_are_passed_to_the_transformer(self, make_context):
        ctx = make_context("/api/v1/things/5", query={"fields": "id,title"})

        result = await self.controller.show(ctx, "5")

        assert result.data == {"id": 5, "title": "Five"}


# ══════════════════════════════════════════════════════════════════════════
# index / collect
# ══════════════════════════════════════════════════════════════════════════

class TestIndex:
    """Tests for paginated listings and their query parameters."""

    def setup_method(self):
        self.records = [{"id": i, "title": f"T{i}"} for i in range(1, 4)]
        self.accessor = make_accessor(self.records)
        self.controller = ResourceController(self.accessor, DictTransformer)

    @pytest.mark.asyncio
    async def test_default_limit_and_page(self, make_context):
        ctx = make_context()

        result = await self.controller.index(ctx)

        self.accessor.paginate.assert_awaited_once_with(ctx.db, 12, 1)
        assert isinstance(result, CollectionResponse)
        assert [item["id"] for item in result.data] == [1, 2, 3]
        assert result.pagination is not None
        assert result.pagination.total == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw, expected", [("0", 12), ("", 12), (" ", 12), ("50", 50), ("1000", 1000)])
    async def test_limit_values(self, make_context, raw, expected):
        ctx = make_context(query={"limit": raw})

        await self.controller.index(ctx)

        self.accessor.paginate.assert_awaited_once_with(ctx.db, expected, 1)

    @pytest.mark.asyncio
    async def test_limit_above_max_is_refused_before_the_query(self, make_context):
        ctx = make_context(query={"limit": "1001"})

        with pytest.raises(BigLimitError) as exc_info:
            await self.controller.index(ctx)

        assert exc_info.value.context == {"limit": 1001, "limit_max": 1000}
        self.accessor.paginate.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["abc", "-5", "2.5"])
    async def test_malformed_limit_is_invalid_syntax(self, make_context, raw):
        with pytest.raises(InvalidSyntaxError):
            await self.controller.index(make_context(query={"limit": raw}))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw, expected", [("3", 3), ("abc", 1), ("0", 1), ("-2", 1)])
    async def test_page_parameter(self, make_context, raw, expected):
        ctx = make_context(query={"page": raw})

        await self.controller.index(ctx)

        self.accessor.paginate.assert_awaited_once_with(ctx.db, 12, expected)

    @pytest.mark.asyncio
    async def test_pagination_links_use_the_request_url(self, make_context):
        self.accessor.paginate.return_value = Page(
            items=self.records, total=30, limit=3, current_page=2
        )
        ctx = make_context(query={"limit": "3", "page": "2"})

        result = await self.controller.index(ctx)

        assert result.pagination.prev_url == "http://test/api/v1/things?limit=3&page=1"
        assert result.pagination.next_url == "http://test/api/v1/things?limit=3&page=3"

    @pytest.mark.asyncio
    async def test_route_id_reaches_the_list_callback(self, make_context):
        callback = AsyncMock(return_value=Page(items=[], total=0))
        ctx = make_context("/api/v1/people/4/things", route={"id": "4"})

        await self.controller.collect(ctx, callback)

        callback.assert_awaited_once_with(12, "4")

    @pytest.mark.asyncio
    async def test_non_get_is_rejected(self, make_context):
        with pytest.raises(MethodNotAllowedError):
            await self.controller.index(make_context(method="DELETE"))


# ══════════════════════════════════════════════════════════════════════════
# ?ids= / show_multiple
# ══════════════════════════════════════════════════════════════════════════

class TestShowMultiple:
    """Tests for comma-separated id lookups."""

    def setup_method(self):
        self.records = [{"id": 1, "title": "One"}, {"id": 2, "title": "Two"}]
        self.accessor = make_accessor(self.records)
        self.accessor.find = AsyncMock(return_value=self.records)
        self.controller = ResourceController(self.accessor, DictTransformer)

    @pytest.mark.asyncio
    async def test_ids_win_over_pagination_and_limit(self, make_context):
        ctx = make_context(query={"ids": "1,2", "limit": "5000", "page": "9"})

        result = await self.controller.index(ctx)

        self.accessor.find.assert_awaited_once_with(ctx.db, ["1", "2"])
        self.accessor.paginate.assert_not_awaited()
        assert result == await self.controller.show_multiple(ctx, "1,2")

    @pytest.mark.asyncio
    async def test_single_id_is_still_a_collection(self, make_context):
        self.accessor.find.return_value = [self.records[0]]

        result = await self.controller.index(make_context(query={"ids": "1"}))

        assert isinstance(result, CollectionResponse)
        assert result.pagination is None
        assert result.data == [{"id": 1, "title": "One"}]
        assert "pagination" not in result.model_dump()

    @pytest.mark.asyncio
    async def test_missing_ids_are_simply_absent(self, make_context):
        self.accessor.find.return_value = []

        result = await self.controller.show_multiple(make_context(), "998,999")

        assert result.data == []

    @pytest.mark.asyncio
    async def test_count_limit_is_checked_before_validation(self, make_context):
        ids = ",".join(["x"] * 1001)

        with pytest.raises(TooManyIdsError) as exc_info:
            await self.controller.show_multiple(make_context(), ids)

        assert exc_info.value.context["count"] == 1001
        self.accessor.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exactly_limit_max_ids_are_allowed(self, make_context):
        ids = ",".join(str(i) for i in range(1, 1001))

        await self.controller.show_multiple(make_context(), ids)

        self.accessor.find.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_validation_stops_at_the_first_bad_id(self, make_context):
        with patch.object(
            self.controller, "validate_id", wraps=self.controller.validate_id
        ) as spy:
            with pytest.raises(InvalidSyntaxError) as exc_info:
                await self.controller.show_multiple(make_context(), "1,abc,def")

        assert [call.args[0] for call in spy.call_args_list] == ["1", "abc"]
        assert exc_info.value.context["value"] == "abc"
        self.accessor.find.assert_not_awaited()


# ══════════════════════════════════════════════════════════════════════════
# Scopes
# ══════════════════════════════════════════════════════════════════════════

class TestScopes:
    """Tests for scope resolution from path segments."""

    def setup_method(self):
        self.record = {"id": 5, "title": "Five"}
        self.scoped = make_accessor([self.record])
        self.accessor = make_accessor([self.record], scopes=("byAuthor",))
        self.accessor.scoped.return_value = self.scoped
        self.controller = ResourceController(self.accessor, DictTransformer)

    @pytest.mark.parametrize(
        "segment, name, method",
        [
            ("by-author", "byAuthor", "scopeByAuthor"),
            ("on-view", "onView", "scopeOnView"),
            ("public-domain-works", "publicDomainWorks", "scopePublicDomainWorks"),
            ("artists", "artists", "scopeArtists"),
        ],
    )
    def test_segment_normalization(self, segment, name, method):
        assert scope_name(segment) == name
        assert scope_method_name(segment) == method

    @pytest.mark.asyncio
    async def test_index_scope_uses_last_segment(self, make_context):
        ctx = make_context("/api/v1/things/by-author", query={"page": "2"})

        await self.controller.index_scope(ctx)

        self.accessor.scoped.assert_called_once_with("byAuthor")
        self.scoped.paginate.assert_awaited_once_with(ctx.db, 12, 2)
        self.accessor.paginate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_index_scope_enforces_the_limit_ceiling(self, make_context):
        ctx = make_context("/api/v1/things/by-author", query={"limit": "1001"})

        with pytest.raises(BigLimitError):
            await self.controller.index_scope(ctx)

        self.scoped.paginate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_show_scope_uses_second_to_last_segment(self, make_context):
        ctx = make_context("/api/v1/things/by-author/5")

        result = await self.controller.show_scope(ctx, "5")

        self.accessor.scoped.assert_called_once_with("byAuthor")
        self.scoped.find.assert_awaited_once_with(ctx.db, "5")
        assert result.data == self.record

    @pytest.mark.asyncio
    async def test_show_scope_miss_is_not_found(self, make_context):
        self.scoped.find.return_value = None

        with pytest.raises(ItemNotFoundError):
            await self.controller.show_scope(make_context("/api/v1/things/by-author/6"), "6")

    @pytest.mark.asyncio
    async def test_unknown_scope_is_a_configuration_error(self, make_context):
        ctx = make_context("/api/v1/things/by-colour")

        with pytest.raises(ScopeNotFoundError) as exc_info:
            await self.controller.index_scope(ctx)

        error = exc_info.value
        assert isinstance(error, ConfigurationError)
        assert error.kind is ErrorKind.CONFIGURATION
        assert error.status_code == 500
        assert error.message == "Class Thing has no scope named `byColour`"
        assert error.context["method"] == "scopeByColour"
        self.accessor.scoped.assert_not_called()


class TestArtistArtworksController:
    """Tests for the artist-filtered artwork listing."""

    def test_needs_a_sql_accessor(self):
        with pytest.raises(TypeError) as exc_info:
            ArtistArtworksController(make_accessor(), ArtworkTransformer)

        assert "SqlAlchemyModelAccessor" in str(exc_info.value)

    def test_model_is_the_sql_accessor(self):
        controller = ArtistArtworksController(artwork_accessor, ArtworkTransformer)
        assert controller.model is artwork_accessor

    @pytest.mark.asyncio
    async def test_artist_id_no_row_can_have_is_an_empty_page(self, make_context):
        db = AsyncMock()
        controller = ArtistArtworksController(artwork_accessor, ArtworkTransformer)

        page = await controller.paginate_for_artist(make_context(db=db), 12, "1.5")

        assert page.items == []
        assert page.total == 0
        db.execute.assert_not_awaited()
