"""Schema rules for post documents.

Used by the store on insert and update so that no post can be persisted
without a non-empty title and markdown body.  Rules live here so they are
testable without a database.
"""

import uuid

TITLE_REQUIRED = "A post must have a title."
CONTENT_REQUIRED = "A post must have content."
AUTHOR_NOT_TEXT = "Author must be text."


def normalize_post_id(raw: str) -> str | None:
    """Return the canonical 32-hex form of *raw*, or ``None`` if malformed.

    Accepts any spelling :class:`uuid.UUID` understands (hyphenated, braced,
    ``urn:uuid:`` prefixed, upper case).
    """
    try:
        return uuid.UUID(raw.strip()).hex
    except (ValueError, AttributeError):
        return None


def clean_post_fields(fields: dict[str, object]) -> dict[str, object]:
    """Apply storage-side normalization (the title is stored trimmed)."""
    cleaned = dict(fields)
    title = cleaned.get("title")
    if isinstance(title, str):
        cleaned["title"] = title.strip()
    return cleaned


def check_post_fields(
    fields: dict[str, object],
    *,
    partial: bool = False,
) -> list[str]:
    """Return ``field: reason`` messages for every rule *fields* breaks.

    With ``partial=True`` only the keys present are checked, which is enough
    for updates because the stored document already satisfies every rule.
    """
    errors: list[str] = []

    if not partial or "title" in fields:
        title = fields.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append(f"title: {TITLE_REQUIRED}")

    if not partial or "markdown_content" in fields:
        content = fields.get("markdown_content")
        if not isinstance(content, str) or not content:
            errors.append(f"markdownContent: {CONTENT_REQUIRED}")

    if "author" in fields and not isinstance(fields["author"], str):
        errors.append(f"author: {AUTHOR_NOT_TEXT}")

    return errors


def format_validation_errors(errors: list[str]) -> str:
    """Join rule violations into a single message."""
    return "Post validation failed: " + ", ".join(errors)
