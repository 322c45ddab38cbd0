import pytest

from core.exceptions import InvalidPathError
from core.services.path_resolver import PathResolver


@pytest.mark.parametrize("raw, expected", [
    ("/users/42/", "users/42"),
    ("users", "users"),
    ("", ""),
    ("/", ""),
    ("users//42", "users/42"),
    (None, ""),
])
def test_normalize(raw, expected):
    assert PathResolver.normalize(raw) == expected


def test_decomposes_nested_path():
    path = "/users/42/profile/address/city"
    assert PathResolver.collection_of(path) == "users"
    assert PathResolver.document_id_of(path) == "42"
    assert PathResolver.nested_fields_of(path) == ["profile", "address", "city"]


def test_empty_path_has_no_parts():
    assert PathResolver.collection_of("") == ""
    assert PathResolver.document_id_of("") is None
    assert PathResolver.nested_fields_of("") == []


def test_collection_only_path():
    assert PathResolver.collection_of("users") == "users"
    assert PathResolver.document_id_of("users") is None


def test_resolve_depth():
    assert PathResolver.depth_of("users/42/a") == 3
    assert PathResolver.resolve("").depth == 0
    assert PathResolver.resolve("users").depth == 1
    assert PathResolver.resolve("users/42").depth == 2
    address = PathResolver.resolve("users/42/a/b")
    assert address.depth == 4
    assert address.is_nested
    assert address.dotted_path == "a.b"


def test_join_and_parent():
    assert PathResolver.join("", "users") == "users"
    assert PathResolver.join("users", "/42/") == "users/42"
    assert PathResolver.parent_of("users/42") == "users"
    assert PathResolver.parent_of("users") == ""
    assert PathResolver.parent_of("") is None


def test_is_within():
    assert PathResolver.is_within("users/42", "users")
    assert PathResolver.is_within("users", "users")
    assert not PathResolver.is_within("users_archive", "users")
    assert PathResolver.is_within("anything", "")


@pytest.mark.parametrize("path, message", [
    ("", "collection name is required"),
    ("users", "document ID is required"),
])
def test_require_document(path, message):
    with pytest.raises(InvalidPathError, match=message):
        PathResolver.resolve(path).require_document("set")
