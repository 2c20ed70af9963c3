"""
Alternative URL exporter.

Walks the catalog like the generator, but serializes each visited entity's
current alternative URL records to a sink instead of regenerating them.

A sink has two methods:
    write(record: dict) -> None
    flush() -> None
The caller flushes the sink once when the run ends, successful or not.
"""

import json
import logging
from typing import Any, Dict, List, Optional, TextIO

from catalog.models import (
    Category,
    EntityContentType,
    EntityKind,
    Product,
    content_links,
)
from catalog.services.stats import TraversalStats
from catalog.services.traversal import CatalogTraverser, GenerationConfig

logger = logging.getLogger(__name__)


class JsonLinesSink:
    """Writes one JSON object per line to a text stream."""

    def __init__(self, stream: TextIO, line_prefix: str = ""):
        self.stream = stream
        self.line_prefix = line_prefix or ""
        self.records_written = 0

    def write(self, record: Dict[str, Any]) -> None:
        self.stream.write(self.line_prefix + json.dumps(record, sort_keys=True, default=str) + "\n")
        self.records_written += 1

    def flush(self) -> None:
        self.stream.flush()


class ListSink:
    """Collects records in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []
        self.flush_count = 0

    def write(self, record: Dict[str, Any]) -> None:
        self.records.append(record)

    def flush(self) -> None:
        self.flush_count += 1


def _content_record(content) -> Dict[str, Any]:
    return {
        "content_id": content.pk,
        "locale": content.locale,
        "text": content.require_text(),
    }


def serialize_alt_urls(kind: str, entity_id: str, moment=None) -> Optional[Dict[str, Any]]:
    """
    Serialize the current alternative URL records of one entity.

    Returns:
        Record dict, or None when the entity has no alternative URLs

    Raises:
        AltUrlValidationError: a stored record has no text body
    """
    link = content_links(kind, entity_id, EntityContentType.ALTERNATIVE_URL, moment).first()
    if link is None:
        return None

    main_content = link.content
    record = {
        "kind": str(kind),
        "id": entity_id,
        "from_date": link.from_date.isoformat(),
        "main": _content_record(main_content),
        "alternates": [
            _content_record(assoc.content_to)
            for assoc in main_content.alternate_locale_assocs(moment)
        ],
    }
    return record


class AltUrlExporter(CatalogTraverser):
    """Traversal that writes existing alternative URLs to a sink."""

    def __init__(self, config: GenerationConfig, sink):
        super().__init__(config)
        self.sink = sink

    def visit_product(self, product: Product) -> TraversalStats:
        return self.export_entity(EntityKind.PRODUCT, product)

    def visit_category(self, category: Category) -> TraversalStats:
        return self.export_entity(EntityKind.CATEGORY, category)

    def export_entity(self, kind: str, entity) -> TraversalStats:
        record = serialize_alt_urls(kind, entity.pk, self.config.moment)
        if record is None:
            logger.debug(f"{kind} {entity.pk} has no alternative URLs to export")
            return TraversalStats(num_skipped=1)

        self.sink.write(record)
        return TraversalStats(num_updated=1)
