"""
Alternative URL sanitizer.

Turns entity names into URL-safe slugs for storage as alternative URLs.
The character-set rules come from Django's slugify; this module only adds
per-deployment options (unicode handling, maximum length) and the
locale-map convenience used by the generator.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from django.conf import settings
from django.utils.text import slugify


@dataclass(frozen=True)
class SanitizerOptions:
    """
    Immutable sanitizer configuration.

    Attributes:
        allow_unicode: Keep non-ASCII letters instead of dropping them
        max_length: Maximum slug length (None = unlimited)
        max_length_by_kind: Per-entity-kind overrides of max_length, as
            (kind, length) pairs; a dict is accepted and converted
    """

    allow_unicode: bool = False
    max_length: Optional[int] = 150
    max_length_by_kind: Tuple[Tuple[str, int], ...] = ()

    def __post_init__(self):
        if self.max_length is not None and self.max_length <= 0:
            raise ValueError("max_length must be positive")
        object.__setattr__(
            self, "max_length_by_kind", tuple(sorted(dict(self.max_length_by_kind).items()))
        )

    def max_length_for(self, url_kind: Optional[str]) -> Optional[int]:
        """Effective maximum length for the given entity kind."""
        return dict(self.max_length_by_kind).get(url_kind, self.max_length)

    @classmethod
    def from_settings(cls) -> "SanitizerOptions":
        """Build options from the ALT_URL_SANITIZER setting."""
        conf = getattr(settings, "ALT_URL_SANITIZER", {}) or {}
        return cls(
            allow_unicode=bool(conf.get("ALLOW_UNICODE", False)),
            max_length=conf.get("MAX_LENGTH", 150),
            max_length_by_kind=conf.get("MAX_LENGTH_BY_KIND") or {},
        )


class AltUrlSanitizer:
    """Converts names into alternative URL slugs."""

    def __init__(self, options: Optional[SanitizerOptions] = None):
        self.options = options or SanitizerOptions()

    def slug(self, name: str, locale: Optional[str] = None, url_kind: Optional[str] = None) -> str:
        """
        Convert a single name into a slug.

        Args:
            name: The display name
            locale: Locale of the name (accepted for callers that track it;
                the current rules are locale-independent)
            url_kind: EntityKind value the slug is for

        Returns:
            URL-safe slug, possibly empty when the name has no usable characters
        """
        if not name:
            return ""

        result = slugify(name, allow_unicode=self.options.allow_unicode)

        max_length = self.options.max_length_for(url_kind)
        if max_length is not None and len(result) > max_length:
            result = result[:max_length].rstrip("-_")

        return result

    def slugs(self, locale_text_map: Dict[str, str], url_kind: Optional[str] = None) -> Dict[str, str]:
        """Convert a locale -> name map into a locale -> slug map."""
        return {
            locale: self.slug(text, locale, url_kind)
            for locale, text in locale_text_map.items()
        }


def get_alt_url_sanitizer() -> AltUrlSanitizer:
    """Factory function to get an AltUrlSanitizer configured from settings."""
    return AltUrlSanitizer(SanitizerOptions.from_settings())
