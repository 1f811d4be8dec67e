from __future__ import annotations

from typing import Any

from itemmeta.codec.handlers.base import MetaHandler
from itemmeta.codec.type_utils import cast_as_list
from itemmeta.models.meta import BookMeta, MetaKind, VariantMeta
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class BookHandler(MetaHandler):
    """Title, author and JSON text pages of written and writable books."""

    kind = MetaKind.BOOK
    variant_name = "book"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, BookMeta):
            return
        if meta.title is not None:
            item_data["title"] = meta.title
        if meta.author is not None:
            item_data["author"] = meta.author
        if meta.pages:
            item_data["pages"] = [self.text.serialize(page) for page in meta.pages]

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, BookMeta):
            return
        if isinstance(item_data.get("title"), str):
            meta.title = item_data["title"]
        if isinstance(item_data.get("author"), str):
            meta.author = item_data["author"]
        if "pages" not in item_data:
            return

        raw_pages = item_data["pages"]
        pages = cast_as_list(raw_pages, logger, item_type=str)
        if pages is None:
            raise ValueError(f"Invalid pages data: {raw_pages!r}")
        for number, page in enumerate(pages, start=1):
            try:
                meta.pages.append(self.text.deserialize_lenient(page))
            except ValueError as exc:
                logger.warning("Skipping unreadable book page", page=number, error=str(exc))
