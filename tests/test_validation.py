"""Tests for post schema rules and identifier parsing."""

import uuid

import pytest
from blog_backend.app.services.validation import (
    CONTENT_REQUIRED,
    TITLE_REQUIRED,
    check_post_fields,
    clean_post_fields,
    format_validation_errors,
    normalize_post_id,
)

# --- normalize_post_id ---


def test_hex_id_accepted() -> None:
    raw = uuid.uuid4().hex
    assert normalize_post_id(raw) == raw


def test_hyphenated_id_normalized() -> None:
    value = uuid.uuid4()
    assert normalize_post_id(str(value)) == value.hex


def test_upper_case_id_normalized() -> None:
    raw = uuid.uuid4().hex
    assert normalize_post_id(raw.upper()) == raw


@pytest.mark.parametrize("raw", ["", "abc", "123", "not-an-id", "g" * 32, "a" * 31])
def test_malformed_ids_rejected(raw: str) -> None:
    assert normalize_post_id(raw) is None


# --- clean_post_fields ---


def test_title_trimmed() -> None:
    assert clean_post_fields({"title": "  Hi  "}) == {"title": "Hi"}


def test_content_untouched() -> None:
    fields = {"markdown_content": "  # x\n"}
    assert clean_post_fields(fields) == fields


def test_clean_does_not_mutate_input() -> None:
    fields = {"title": " a "}
    clean_post_fields(fields)
    assert fields == {"title": " a "}


# --- check_post_fields ---


def test_complete_document_valid() -> None:
    assert check_post_fields(
        {"title": "T", "markdown_content": "C", "author": "Admin"}
    ) == []


def test_missing_title_and_content() -> None:
    errors = check_post_fields({})
    assert errors == [f"title: {TITLE_REQUIRED}", f"markdownContent: {CONTENT_REQUIRED}"]


def test_blank_title_rejected() -> None:
    assert check_post_fields({"title": "   ", "markdown_content": "C"}) == [
        f"title: {TITLE_REQUIRED}"
    ]


def test_non_text_author_rejected() -> None:
    errors = check_post_fields({"title": "T", "markdown_content": "C", "author": None})
    assert len(errors) == 1
    assert errors[0].startswith("author:")


def test_empty_author_allowed() -> None:
    assert check_post_fields({"title": "T", "markdown_content": "C", "author": ""}) == []


def test_partial_checks_only_present_keys() -> None:
    assert check_post_fields({"author": "Grace"}, partial=True) == []
    assert check_post_fields({"title": ""}, partial=True) == [f"title: {TITLE_REQUIRED}"]


# --- format_validation_errors ---


def test_format_joins_errors() -> None:
    message = format_validation_errors(["title: a", "markdownContent: b"])
    assert message == "Post validation failed: title: a, markdownContent: b"
