"""Tests for the document JSON codec."""

import pytest
from hypothesis import given, strategies as st

from tabletcontrol.core.json import JSONParseError, dumps_document, loads_document


@pytest.mark.unit
def test_dumps_indented():
    result = dumps_document({"name": "Demo", "pages": ["Main"]})

    assert result.endswith(b"\n")
    assert b'\n  "name"' in result


@pytest.mark.unit
def test_dumps_compact():
    assert dumps_document({"a": 1}, indent=False) == b'{"a":1}\n'


@pytest.mark.unit
@pytest.mark.parametrize("data", [b"", b"   ", "null", b"null\n"])
def test_loads_empty_content(data):
    assert loads_document(data) is None


@pytest.mark.unit
@pytest.mark.parametrize("data", [b"{broken", b"[1, 2]", b'"text"', b"42"])
def test_loads_rejects_non_objects(data):
    with pytest.raises(JSONParseError):
        loads_document(data)


@pytest.mark.unit
def test_loads_text():
    assert loads_document('{"name": "Démo"}') == {"name": "Démo"}


keys = st.text(alphabet=st.characters(exclude_categories=("Cs",)), min_size=1)


@pytest.mark.unit
@given(st.dictionaries(keys, st.integers(min_value=-(2**63), max_value=2**63 - 1)))
def test_document_roundtrip(data):
    """Property test: encode then decode."""
    assert loads_document(dumps_document(data)) == data
