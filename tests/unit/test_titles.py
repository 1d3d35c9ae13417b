import json

import pytest

from drawing_lib.errors import ContentFormatError, MissingTitleError, SchemaError, TitleTypeError
from drawing_lib.titles import extract_title


def test_extract_title_returns_string():
    content = json.dumps({'title': 'Floor plan', 'elements': [1, 2]}).encode('utf-8')
    assert extract_title(content) == 'Floor plan'


def test_extract_title_allows_empty_string():
    assert extract_title(b'{"title": ""}') == ''


def test_extract_title_unicode():
    assert extract_title('{"title": "Grundriß"}'.encode('utf-8')) == 'Grundriß'


@pytest.mark.parametrize('content', [b'', b'not json', b'{"title": "x"', b'\xff\xfe\x00'])
def test_unparseable_content_is_format_error(content):
    with pytest.raises(ContentFormatError):
        extract_title(content)


@pytest.mark.parametrize('content', [b'[]', b'"title"', b'42', b'null', b'[{"title": "x"}]'])
def test_non_object_content_is_format_error(content):
    with pytest.raises(ContentFormatError):
        extract_title(content)


def test_missing_title_is_schema_error():
    with pytest.raises(MissingTitleError) as ei:
        extract_title(b'{"name": "x"}')
    assert isinstance(ei.value, SchemaError)
    assert ei.value.reason == 'missing'


@pytest.mark.parametrize('value', ['1', 'null', 'true', '["a"]', '{"t": "a"}'])
def test_non_string_title_is_schema_error(value):
    with pytest.raises(TitleTypeError) as ei:
        extract_title(('{"title": %s}' % value).encode('utf-8'))
    assert isinstance(ei.value, SchemaError)
    assert ei.value.reason == 'wrong_type'


def test_error_kinds_are_distinct():
    assert not issubclass(ContentFormatError, SchemaError)
    assert not issubclass(MissingTitleError, TitleTypeError)
    assert not issubclass(TitleTypeError, MissingTitleError)
