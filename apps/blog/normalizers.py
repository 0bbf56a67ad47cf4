"""
Normalization of loosely-typed blog payload fields.

Blog payloads arrive either as JSON bodies or as multipart form fields, and
form fields carry arrays and objects as JSON strings (or CSV, or the
"[object Object]" artifact of a browser stringifying an object). Every
structured field goes through `decode_field` once and then through a
shape-specific normalizer. None of the normalizers raise, except
`normalize_sections` for an undecodable string, which the update path
reports back to the client.
"""

import json
from typing import Any

from django.conf import settings

STRINGIFIED_OBJECT = "[object Object]"

_ABSENT = object()


def decode_field(raw: Any) -> Any:
    """Decode one raw payload value.

    Returns `_ABSENT` for missing/empty input and the stringified-object
    marker, the decoded value for JSON strings, and the value itself
    otherwise (including strings that are not JSON).
    """
    if raw is None:
        return _ABSENT
    if isinstance(raw, str):
        text = raw.strip()
        if not text or text == STRINGIFIED_OBJECT:
            return _ABSENT
        try:
            return json.loads(text)
        except ValueError:
            return raw
    return raw


def is_absent(value: Any) -> bool:
    return value is _ABSENT


def normalize_string_array(raw: Any) -> list[str]:
    """Coerce anything into an ordered list of unique, trimmed, non-empty strings.

    Strings are used as JSON only when they decode to a list; any other
    string is split on commas as written.
    """
    items: list[Any]
    if isinstance(raw, str):
        value = decode_field(raw)
        if is_absent(value):
            items = []
        elif isinstance(value, list):
            items = value
        else:
            items = raw.split(",")
    elif raw is None:
        items = []
    elif isinstance(raw, (list, tuple, set)):
        items = list(raw)
    elif isinstance(raw, dict):
        items = list(raw.values())
    else:
        items = [raw]

    result: list[str] = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in result:
            result.append(text)
    return result


def default_author() -> dict[str, str]:
    return dict(settings.BLOG_DEFAULT_AUTHOR)


def normalize_author(raw: Any, base: dict[str, str] | None = None) -> dict[str, str]:
    """Return {name, email, image}, backfilling missing fields from `base` or the defaults."""
    author = default_author()
    author.update({key: val for key, val in (base or {}).items() if val})
    value = decode_field(raw)

    if is_absent(value):
        return author

    if isinstance(value, dict):
        for field in ("name", "email", "image"):
            field_value = value.get(field)
            if field_value is not None and str(field_value).strip():
                author[field] = str(field_value).strip()
        return author

    # Plain string (or a JSON scalar) is taken as the author's name
    if isinstance(value, str):
        name = value.strip()
    elif isinstance(raw, str):
        name = raw.strip()
    else:
        name = str(value).strip()
    if name:
        author["name"] = name
    return author


def normalize_seo(raw: Any) -> dict[str, Any] | None:
    """Return {metaTitle, metaDescription, keywords}, or None when unusable."""
    value = decode_field(raw)

    if is_absent(value) or not isinstance(value, dict):
        return None

    return {
        "metaTitle": str(value.get("metaTitle") or "").strip(),
        "metaDescription": str(value.get("metaDescription") or "").strip(),
        "keywords": normalize_string_array(value.get("keywords")),
    }


def empty_seo() -> dict[str, Any]:
    return {"metaTitle": "", "metaDescription": "", "keywords": []}


def normalize_sections(raw: Any) -> list[dict[str, str]]:
    """Return a list of {heading, content, image} sections.

    Raises ValueError when given a string that is not valid JSON.
    """
    if isinstance(raw, str) and raw.strip() and raw.strip() != STRINGIFIED_OBJECT:
        try:
            value = json.loads(raw)
        except ValueError:
            raise ValueError("Invalid sections format")
    else:
        value = decode_field(raw)

    if is_absent(value):
        return []
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise ValueError("Invalid sections format")

    sections = []
    for item in value:
        if not isinstance(item, dict):
            continue
        sections.append(
            {
                "heading": str(item.get("heading") or ""),
                "content": str(item.get("content") or ""),
                "image": str(item.get("image") or ""),
            }
        )
    return sections


def parse_bool(raw: Any) -> bool | None:
    """Parse booleans sent as JSON or form strings. None means not provided."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    text = str(raw).strip().lower()
    if text == "":
        return None
    return text in ("true", "1", "yes", "on")
