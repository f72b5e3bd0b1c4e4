from film_essays_site.config import Settings, load_settings
from film_essays_site.errors import ContentError, DuplicateSlugError, MissingTranslation, SchemaViolation
from film_essays_site.i18n import Localization, resolve, string_for
from film_essays_site.index import ContentIndex
from film_essays_site.models import Document, DocumentType, Language, ScoredDocument, TagGroup
from film_essays_site.reading_time import estimate
from film_essays_site.related import rank, rank_scored
from film_essays_site.theme import Theme, ThemePreference
from film_essays_site.validation import validate_documents, validate_front_matter

__all__ = [
    "__version__",
    "ContentError",
    "ContentIndex",
    "Document",
    "DocumentType",
    "DuplicateSlugError",
    "Language",
    "Localization",
    "MissingTranslation",
    "SchemaViolation",
    "ScoredDocument",
    "Settings",
    "TagGroup",
    "Theme",
    "ThemePreference",
    "estimate",
    "load_settings",
    "rank",
    "rank_scored",
    "resolve",
    "string_for",
    "validate_documents",
    "validate_front_matter",
]

__version__ = "0.1.0"
