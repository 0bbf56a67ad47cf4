"""
Request payload reading for endpoints that accept JSON or form data.
"""

import json
from typing import Any

from django.http import HttpRequest, QueryDict
from django.utils.datastructures import MultiValueDict
from ninja.errors import HttpError


def _flatten(data: QueryDict) -> dict[str, Any]:
    """Collapse a QueryDict; repeated keys and `key[]` keys become lists."""
    flat: dict[str, Any] = {}
    for key, values in data.lists():
        if key.endswith("[]"):
            flat[key[:-2]] = list(values)
        elif len(values) > 1:
            flat[key] = list(values)
        else:
            flat[key] = values[0]
    return flat


def read_payload(request: HttpRequest) -> tuple[dict[str, Any], MultiValueDict]:
    """Return (fields, files) from a JSON, urlencoded or multipart request."""
    content_type = request.content_type or ""

    if content_type.startswith("multipart/form-data"):
        if request.method == "POST":
            return _flatten(request.POST), request.FILES
        # Django only parses form bodies for POST
        data, files = request.parse_file_upload(request.META, request)
        return _flatten(data), files

    if content_type == "application/x-www-form-urlencoded":
        if request.method == "POST":
            return _flatten(request.POST), MultiValueDict()
        return _flatten(QueryDict(request.body)), MultiValueDict()

    if not request.body:
        return {}, MultiValueDict()

    try:
        body = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise HttpError(400, "Malformed JSON body")

    if not isinstance(body, dict):
        raise HttpError(400, "Request body must be a JSON object")

    return body, MultiValueDict()
