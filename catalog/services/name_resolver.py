"""
Localized name resolution for catalog entities.

Collects the locale -> name texts and the default name of a product or
category, the inputs of alternative URL generation.

Resolution rules:
1. The primary NAME content current at the moment supplies the default locale
   (which may be empty) and, with its ALTERNATE_LOCALE associations, the
   locale text map.
2. A variant product without its own NAME content falls back to its parent
   product's NAME content. Only one level is followed.
3. Default name: the entity's own name field, then the text for the default
   locale, then the primary content's raw body, then the entity id.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from catalog.models import (
    Content,
    EntityContentType,
    EntityKind,
    ProductVariantAssoc,
    content_links,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolvedName:
    """
    Names of one entity.

    Attributes:
        default_name: Name used for the main alternative URL record
        default_locale: Locale of the primary name content, may be None
        locale_text_map: locale -> name text
    """

    default_name: str
    default_locale: Optional[str] = None
    locale_text_map: Dict[str, str] = field(default_factory=dict)


def get_parent_product_id(product_id: str, moment=None) -> Optional[str]:
    """Look up the id of the virtual product a variant belongs to."""
    return (
        ProductVariantAssoc.objects.current(moment)
        .filter(variant_id=product_id)
        .order_by("from_date", "id")
        .values_list("product_id", flat=True)
        .first()
    )


def get_primary_name_content(kind: str, entity, moment=None) -> Optional[Content]:
    """
    Find the primary NAME content of an entity.

    Variant products with no NAME content of their own use their parent's.
    """
    link = content_links(kind, entity.pk, EntityContentType.NAME, moment).first()

    if link is None and kind == EntityKind.PRODUCT and entity.is_variant:
        parent_id = get_parent_product_id(entity.pk, moment)
        if parent_id is not None:
            logger.debug(f"Variant {entity.pk} has no name content, using parent {parent_id}")
            link = content_links(kind, parent_id, EntityContentType.NAME, moment).first()

    return link.content if link is not None else None


def get_texts_by_locale(main_content: Content, moment=None) -> Dict[str, str]:
    """
    Build the locale -> text map of a name content record.

    Includes the main record's own text when it is locale-tagged, plus
    every current alternate-locale text.
    """
    locale_text_map = {}

    if main_content.locale:
        text = main_content.require_text()
        if text:
            locale_text_map[main_content.locale] = text

    for assoc in main_content.alternate_locale_assocs(moment):
        content = assoc.content_to
        if content.locale and content.text_data:
            locale_text_map[content.locale] = content.text_data

    return locale_text_map


def determine_default_name(
    entity_id: str,
    entity_name: Optional[str],
    default_locale: Optional[str],
    main_content: Optional[Content],
    locale_text_map: Dict[str, str],
) -> str:
    """Pick the default name; the first non-empty candidate wins."""
    if entity_name:
        return entity_name

    if default_locale:
        name = locale_text_map.get(default_locale)
        if name:
            return name

    if main_content is not None:
        name = main_content.require_text()
        if name:
            return name

    return entity_id


def resolve_name(
    kind: str, entity, moment=None, memo: Optional[Dict[Tuple[str, str], ResolvedName]] = None
) -> ResolvedName:
    """
    Resolve the default name, default locale and locale texts of an entity.

    Args:
        kind: EntityKind value
        entity: Product or Category instance
        moment: Timestamp deciding which content is current
        memo: Per-run dict keyed by (kind, entity id); when given, a name
            resolved earlier in the same run is reused

    Returns:
        ResolvedName for the entity

    Raises:
        AltUrlValidationError: a name content record has no text body
    """
    memo_key = (kind, entity.pk)
    if memo is not None and memo_key in memo:
        return memo[memo_key]

    main_content = get_primary_name_content(kind, entity, moment)

    default_locale = None
    locale_text_map = {}
    if main_content is not None:
        locale_text_map = get_texts_by_locale(main_content, moment)
        default_locale = main_content.locale or None

    resolved = ResolvedName(
        default_name=determine_default_name(
            entity.pk, entity.name, default_locale, main_content, locale_text_map
        ),
        default_locale=default_locale,
        locale_text_map=locale_text_map,
    )

    if memo is not None:
        memo[memo_key] = resolved

    return resolved
