"""Tests for the cache key builder."""

import itertools

import pytest

from quill_commons.platform.cache.application.services.key_builder import KeyBuilder, encode_param_value
from quill_commons.platform.cache.core.exceptions import (
    CacheKeyInvalid, UnknownNamespace, UnserializableParam
)
from quill_commons.platform.cache.core.value_objects import CacheKey, InvalidationPattern


class TestKeyBuilder:
    """Test key construction for registered namespaces."""

    def test_list_key_sorts_params(self, key_builder):
        """Test list keys carry params sorted by name."""
        key = key_builder.build_key("articles", {"page": 1, "limit": 10})

        assert key == "articles:limit=10:page=1"

    def test_key_is_identical_for_every_param_order(self, key_builder):
        """Test determinism across parameter permutations."""
        params = [("page", 2), ("limit", 20), ("tag", "python"), ("search", "async io")]

        keys = {
            key_builder.build_key("articles", dict(order))
            for order in itertools.permutations(params)
        }

        assert keys == {"articles:limit=20:page=2:search=async%20io:tag=python"}

    def test_namespace_without_params(self, key_builder):
        """Test a parameterless key still ends with the namespace separator."""
        assert key_builder.build_key("tags") == "tags:"
        assert key_builder.build_key("tags", {}) == "tags:"

    def test_scope_params_come_first(self, key_builder):
        """Test scope parameters precede sorted parameters."""
        key = key_builder.build_key("user-articles", {"page": 2, "wallet": "0xAB", "limit": 5})

        assert key == "user-articles:wallet=0xAB:limit=5:page=2"

    def test_singleton_key_ends_with_scope_terminator(self, key_builder):
        """Test a key made only of its scope is terminated like a scoped prefix."""
        key = key_builder.build_key("article", {"slug": "hello-world"})

        assert key == "article:slug=hello-world:"
        assert key_builder.scope_pattern("article", {"slug": "hello-world"}).matches(key)
        assert not key_builder.scope_pattern("article", {"slug": "hello"}).matches(key)

    def test_missing_declared_param_renders_placeholder(self, key_builder):
        """Test declared params that are absent keep the key shape."""
        assert key_builder.build_key("article") == "article:slug=:"
        assert key_builder.build_key("user-profile", {"wallet": None}) == "user-profile:wallet=:"

    def test_none_value_renders_placeholder(self, key_builder):
        """Test None values normalize to an empty value."""
        key = key_builder.build_key("articles", {"page": 1, "tag": None})

        assert key == "articles:page=1:tag="

    def test_values_are_escaped(self, key_builder):
        """Test separator and wildcard characters never appear raw in values."""
        key = key_builder.build_key("articles", {"search": "a:b=c*d%e"})

        assert key == "articles:search=a%3Ab%3Dc%2Ad%25e"
        assert "*" not in key

    def test_primitive_rendering(self, key_builder):
        """Test bool, int and float rendering."""
        key = key_builder.build_key("articles", {"featured": True, "draft": False, "page": 3, "score": 1.5})

        assert key == "articles:draft=false:featured=true:page=3:score=1.5"

    def test_bool_and_int_do_not_collide(self, key_builder):
        """Test True and 1 render differently."""
        assert key_builder.build_key("articles", {"page": True}) != key_builder.build_key("articles", {"page": 1})

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}, object(), (1,), b"bytes"])
    def test_non_primitive_value_rejected(self, key_builder, value):
        """Test nested and object values raise UnserializableParam."""
        with pytest.raises(UnserializableParam) as exc_info:
            key_builder.build_key("articles", {"filter": value})

        assert exc_info.value.name == "filter"

    def test_unknown_namespace_rejected(self, key_builder):
        """Test strict mode rejects unregistered namespaces."""
        with pytest.raises(UnknownNamespace) as exc_info:
            key_builder.build_key("bookmarks", {"page": 1})

        assert exc_info.value.namespace == "bookmarks"
        assert "articles" in exc_info.value.details["registered"]

    def test_undeclared_param_rejected(self, key_builder):
        """Test namespaces with a declared shape reject other params."""
        with pytest.raises(CacheKeyInvalid) as exc_info:
            key_builder.build_key("article", {"slug": "a", "page": 1})

        assert exc_info.value.error_code == "CACHE_KEY_UNEXPECTED_PARAM"

    @pytest.mark.parametrize("name", ["bad-name", "1page", "with space", ""])
    def test_invalid_param_name_rejected(self, key_builder, name):
        """Test parameter names must be identifiers."""
        with pytest.raises(CacheKeyInvalid):
            key_builder.build_key("articles", {name: 1})

    def test_long_key_hashes_tail(self, key_builder):
        """Test oversized keys keep namespace and scope and hash the rest."""
        key = key_builder.build_key("user-articles", {"wallet": "0xab", "search": "x" * 400})

        assert len(key) <= CacheKey.MAX_LENGTH
        assert key.startswith("user-articles:wallet=0xab:h=")
        assert key_builder.scope_pattern("user-articles", {"wallet": "0xab"}).matches(key)

    def test_long_keys_stay_distinct_and_deterministic(self, key_builder):
        """Test hashed keys differ by content and repeat for equal params."""
        first = key_builder.build_key("articles", {"search": "a" * 300})
        second = key_builder.build_key("articles", {"search": "b" * 300})

        assert first != second
        assert first == key_builder.build_key("articles", {"search": "a" * 300})
        assert first.startswith("articles:h=")


class TestPermissiveKeyBuilder:
    """Test ad hoc namespaces in permissive mode."""

    def test_adhoc_namespace_accepted(self, registry):
        """Test permissive mode builds keys for valid unregistered namespaces."""
        builder = KeyBuilder(registry, strict=False)

        assert builder.build_key("search-index", {"q": "rust", "page": 1}) == "search-index:page=1:q=rust"

    @pytest.mark.parametrize("namespace", ["Bad", "has:colon", "", "with space", "-lead"])
    def test_invalid_namespace_rejected(self, registry, namespace):
        """Test namespace identifiers are validated."""
        builder = KeyBuilder(registry, strict=False)

        with pytest.raises(CacheKeyInvalid):
            builder.build_key(namespace, {"page": 1})


class TestScopePattern:
    """Test scoped invalidation patterns."""

    def test_scope_pattern(self, key_builder):
        """Test scope pattern renders the escaped scope prefix."""
        pattern = key_builder.scope_pattern("user-articles", {"wallet": "0x:ab"})

        assert pattern == InvalidationPattern("user-articles:wallet=0x%3Aab:")

    def test_missing_scope_value(self, key_builder):
        """Test a missing or None scope value yields no scoped pattern."""
        assert key_builder.scope_pattern("user-articles", {}) is None
        assert key_builder.scope_pattern("user-articles", {"wallet": None}) is None

    def test_unscoped_namespace(self, key_builder):
        """Test unscoped namespaces have no scoped pattern."""
        assert key_builder.scope_pattern("articles", {"page": 1}) is None

    def test_scope_does_not_match_sibling_scope(self, key_builder):
        """Test one wallet's pattern leaves a wallet sharing its prefix alone."""
        pattern = key_builder.scope_pattern("user-articles", {"wallet": "0xab"})

        assert pattern.matches(key_builder.build_key("user-articles", {"wallet": "0xab", "page": 1}))
        assert not pattern.matches(key_builder.build_key("user-articles", {"wallet": "0xabc", "page": 1}))


class TestEncodeParamValue:
    """Test primitive value encoding."""

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (-1, "-1"),
        (0.1, "0.1"),
        ("hello world", "hello%20world"),
        ("ünï", "%C3%BCn%C3%AF"),
        ("a/b", "a%2Fb"),
    ])
    def test_encoding(self, value, expected):
        """Test each primitive renders as expected."""
        assert encode_param_value("p", value) == expected
