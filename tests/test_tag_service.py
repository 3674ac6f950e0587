import asyncio

import pytest

from capsulify_api.app.core.errors import ValidationError
from capsulify_api.app.services.tag_service import TagService


def test_resolve_keeps_input_order(database, tag_ids):
    service = TagService(database)
    resolved = asyncio.run(service.resolve(["Casual", "Work", "Chic"]))
    assert resolved == [tag_ids["Casual"], tag_ids["Work"], tag_ids["Chic"]]


def test_resolve_collapses_duplicates(database, tag_ids):
    service = TagService(database)
    resolved = asyncio.run(service.resolve(["Work", " Work", "Chic"]))
    assert resolved == [tag_ids["Work"], tag_ids["Chic"]]


def test_resolve_rejects_unknown_names(database, tag_ids):
    service = TagService(database)
    with pytest.raises(ValidationError, match="One or more invalid tags"):
        asyncio.run(service.resolve(["Work", "Gala"]))


def test_resolve_rejects_non_string_names(database, tag_ids):
    service = TagService(database)
    with pytest.raises(ValidationError):
        asyncio.run(service.resolve(["Work", 3]))


@pytest.mark.parametrize("names", [None, []])
def test_resolve_without_names_is_empty(database, tag_ids, names):
    assert asyncio.run(TagService(database).resolve(names)) == []


@pytest.mark.parametrize("names", ["Work", {"name": "Work"}, 3])
def test_resolve_rejects_non_list_input(database, tag_ids, names):
    with pytest.raises(ValidationError, match="One or more invalid tags"):
        asyncio.run(TagService(database).resolve(names))
