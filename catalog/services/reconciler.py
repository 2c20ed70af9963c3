"""
Alternative URL content reconciliation.

Diffs a desired locale -> slug map against the stored alternative URL
content graph of one entity and applies the minimal set of writes:

- one main content record holds the slug for the default locale;
- each further locale lives in its own content record, linked to the main
  record by a dated ALTERNATE_LOCALE association.

Precedence: when the desired map has an entry for the default locale, that
slug becomes the main record's text and the locale is dropped from the
remaining set BEFORE the existing alternate records are examined. An
alternate record carrying the default locale is therefore stale and never
duplicates the main record.

This module owns no transaction; writes already issued before a failure are
left to the caller's unit of work.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.db import DatabaseError
from django.utils import timezone

from catalog.exceptions import AltUrlStorageError
from catalog.models import Content, ContentAssoc, ContentAssocType

logger = logging.getLogger(__name__)

ALT_URL_DESCRIPTION = "Alternative URL"


@dataclass
class ReconcileResult:
    """
    Outcome of reconciling one entity's alternative URL records.

    Attributes:
        main_content: The (possibly new) main content record
        created: IDs of created content records
        updated: IDs of content records whose text or locale changed
        deleted: IDs of deleted alternate-locale records
    """

    main_content: Content
    created: List[int] = field(default_factory=list)
    updated: List[int] = field(default_factory=list)
    deleted: List[int] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.created or self.updated or self.deleted)


@contextmanager
def _storage_errors(action: str):
    try:
        yield
    except DatabaseError as e:
        raise AltUrlStorageError(f"Cannot {action}: {e}") from e


def create_alt_url_content(locale: Optional[str], text_data: str) -> Content:
    """Create a simple-text content record holding an alternative URL."""
    with _storage_errors(f"create alternative URL content for locale '{locale}'"):
        return Content.objects.create(
            locale=locale or None,
            text_data=text_data,
            description=ALT_URL_DESCRIPTION,
        )


def update_alt_url_content(content: Content, text_data: str, **changes) -> bool:
    """
    Update the text (and optionally the locale) of a content record in place.

    Returns True if anything was written.

    Raises:
        AltUrlValidationError: the record has no text body to update
    """
    content.require_text()

    update_fields = []
    if content.text_data != text_data:
        content.text_data = text_data
        update_fields.append("text_data")
    if "locale" in changes:
        locale = changes["locale"] or None
        if content.locale != locale:
            content.locale = locale
            update_fields.append("locale")

    if not update_fields:
        return False

    with _storage_errors(f"update content '{content.pk}'"):
        content.save(update_fields=update_fields + ["updated_at"])
    return True


def delete_alt_url_content(content: Content) -> None:
    """Delete a content record together with its associations."""
    with _storage_errors(f"remove alternate locale content '{content.pk}'"):
        content.delete()


def reconcile(
    main_content: Optional[Content],
    default_locale: Optional[str],
    default_slug: str,
    locale_slug_map: Dict[str, str],
    remove_old_locales: bool = True,
    moment=None,
) -> ReconcileResult:
    """
    Bring an entity's alternative URL records in line with the desired slugs.

    Args:
        main_content: Existing main record, or None if the entity has none yet
        default_locale: Locale the main record is anchored to (may be None)
        default_slug: Slug of the default name
        locale_slug_map: Desired locale -> slug map
        remove_old_locales: Delete alternate records whose locale is no
            longer desired (otherwise they are left untouched)
        moment: Timestamp deciding which associations are current and
            stamped on new associations

    Returns:
        ReconcileResult describing the writes

    Raises:
        AltUrlValidationError: an existing record has no text body
        AltUrlStorageError: a write failed
    """
    if moment is None:
        moment = timezone.now()

    remaining = dict(locale_slug_map)

    # The main record always follows the current default locale
    main_locale = default_locale or None
    main_text = remaining.pop(main_locale, None) if main_locale else None
    if not main_text:
        main_text = default_slug

    if main_content is None:
        main_content = create_alt_url_content(main_locale, main_text)
        result = ReconcileResult(main_content=main_content, created=[main_content.pk])
    else:
        result = ReconcileResult(main_content=main_content)
        if update_alt_url_content(main_content, main_text, locale=main_locale):
            result.updated.append(main_content.pk)

    for assoc in main_content.alternate_locale_assocs(moment):
        content = assoc.content_to
        text_data = remaining.pop(content.locale, None) if content.locale else None

        if text_data:
            if update_alt_url_content(content, text_data):
                result.updated.append(content.pk)
        elif remove_old_locales:
            logger.debug(
                f"Removing alternate locale '{content.locale}' content {content.pk} "
                f"of main content {main_content.pk}"
            )
            result.deleted.append(content.pk)
            delete_alt_url_content(content)

    for locale, text_data in remaining.items():
        if not text_data:
            continue
        content = create_alt_url_content(locale, text_data)
        with _storage_errors(f"associate content '{content.pk}' with '{main_content.pk}'"):
            ContentAssoc.objects.create(
                content=main_content,
                content_to=content,
                assoc_type=ContentAssocType.ALTERNATE_LOCALE,
                from_date=moment,
            )
        result.created.append(content.pk)

    return result
