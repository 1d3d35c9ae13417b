"""Title extraction from stored drawing content."""
from __future__ import annotations

from drawing_lib.errors import ContentFormatError, MissingTitleError, TitleTypeError
from drawing_lib.serializer import JSONSerializer, Serializer

TITLE_FIELD = "title"

_json: Serializer = JSONSerializer()


def extract_title(content: bytes) -> str:
    """Parse `content` as a JSON object and return its string `title`.

    Raises:
        ContentFormatError: content does not decode to a JSON object
        MissingTitleError: the object has no `title`
        TitleTypeError: `title` is present but not a string
    """
    try:
        document = _json.load(content)
    except ValueError as e:
        raise ContentFormatError(f"content is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise ContentFormatError(f"expected a JSON object, got {type(document).__name__}")

    if TITLE_FIELD not in document:
        raise MissingTitleError(f"drawing has no {TITLE_FIELD!r} field")
    title = document[TITLE_FIELD]
    if not isinstance(title, str):
        raise TitleTypeError(f"{TITLE_FIELD!r} is not a string: {type(title).__name__}")
    return title
