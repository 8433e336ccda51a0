"""
Hub Foundation: Response Transformer
=====================================

What:  Turns domain records into response payloads.
How:   A transformer is constructed per request with the raw ?fields= string.
       `transform()` renders one record to a dict (by default through the
       subclass's Pydantic `schema`); `item()` and `collection()` wrap the
       rendered records in the response envelopes.
Who:   Subclassed once per resource type; instantiated by ResourceController.

Sparse fieldsets:
    ?fields=id,title keeps only those keys in every rendered record.
    Unknown names are ignored, so an unknown-only selection renders {}.
    The controller passes the string through untouched; only the
    transformer interprets it.
"""

from typing import Any, Dict, Iterable, List, Optional, Type, Union

from pydantic import BaseModel
from starlette.datastructures import URL

from hub_foundation.exceptions import ConfigurationError
from hub_foundation.schemas.envelope import CollectionResponse, ItemResponse, Pagination
from hub_foundation.services.model_accessor import Page


def parse_fields(fields: Optional[str]) -> Optional[List[str]]:
    """Split a ?fields= value into names; None when no selection was made."""
    if not fields:
        return None
    names = [name.strip() for name in fields.split(",") if name.strip()]
    return names or None


def build_pagination(page: Page, url: Optional[str] = None) -> Pagination:
    """
    Build the pagination block for `page`.

    prev_url/next_url keep every query parameter of `url` and replace `page`.
    Without a URL both links are null.
    """
    prev_url = next_url = None
    if url is not None:
        base = URL(url)
        if page.has_previous:
            prev_url = str(base.include_query_params(page=page.current_page - 1))
        if page.has_next:
            next_url = str(base.include_query_params(page=page.current_page + 1))

    return Pagination(
        total=page.total,
        limit=page.limit,
        offset=page.offset,
        total_pages=page.total_pages,
        current_page=page.current_page,
        prev_url=prev_url,
        next_url=next_url,
    )


class Transformer:
    """
    Base class for resource transformers.

    Subclasses either set `schema` to a Pydantic model with
    `from_attributes` enabled, or override `transform()` outright.
    """

    schema: Optional[Type[BaseModel]] = None

    def __init__(self, fields: Optional[str] = None):
        self.fields = parse_fields(fields)

    def transform(self, record: Any) -> Dict[str, Any]:
        if self.schema is None:
            raise ConfigurationError(
                message=f"{type(self).__name__} must set `schema` or override transform()",
                context={"transformer": type(self).__name__},
            )
        return self.schema.model_validate(record).model_dump(mode="json")

    def select_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if self.fields is None:
            return data
        return {key: value for key, value in data.items() if key in self.fields}

    def render(self, record: Any) -> Dict[str, Any]:
        return self.select_fields(self.transform(record))

    def item(self, record: Any) -> ItemResponse:
        """Render a single record as {"data": {...}}."""
        return ItemResponse(data=self.render(record))

    def collection(
        self, records: Union[Page, Iterable[Any]], url: Optional[str] = None
    ) -> CollectionResponse:
        """
        Render records as {"data": [...]}.

        A Page also gets a pagination block; a plain iterable (the ?ids= path)
        does not.
        """
        data = [self.render(record) for record in records]
        pagination = build_pagination(records, url) if isinstance(records, Page) else None
        return CollectionResponse(pagination=pagination, data=data)
