"""Tests for type registries."""

import pytest

from spilib.core.registry.registry import (
    ChainedTypeRegistry,
    ProviderTypeRegistry,
    TypeRegistry,
    provider_type_registry,
    qualified_name,
    register_provider,
)
from spilib.tests.sample_providers import GZIP, NESTED, Codec, Container, GzipCodec, TcpTransport, ZstdCodec


class TestQualifiedName:

    def test_top_level_class(self):
        assert qualified_name(GzipCodec) == GZIP

    def test_nested_class(self):
        assert qualified_name(Container.NestedCodec) == NESTED

    def test_builtin_class(self):
        assert qualified_name(dict) == "builtins.dict"


class TestProviderTypeRegistry:
    """Test explicit registration."""

    @pytest.fixture
    def registry(self):
        return ProviderTypeRegistry()

    def test_register_and_resolve(self, registry):
        registry.register("codecs.gzip", GzipCodec)

        assert registry.try_resolve("codecs.gzip") is GzipCodec
        assert registry.contains("codecs.gzip")
        assert registry.try_resolve("codecs.zstd") is None
        assert not registry.contains("codecs.zstd")

    def test_register_same_class_twice_is_allowed(self, registry):
        registry.register("codecs.gzip", GzipCodec)
        registry.register("codecs.gzip", GzipCodec)

        assert registry.list() == ["codecs.gzip"]

    def test_register_conflicting_class_fails(self, registry):
        registry.register("codecs.gzip", GzipCodec)

        with pytest.raises(ValueError, match="already registered"):
            registry.register("codecs.gzip", ZstdCodec)

    def test_register_non_class_fails(self, registry):
        with pytest.raises(TypeError, match="Only classes"):
            registry.register("codecs.gzip", GzipCodec())

    def test_update_replaces(self, registry):
        assert registry.update("codecs.default", GzipCodec) is False
        assert registry.update("codecs.default", ZstdCodec) is True

        assert registry.try_resolve("codecs.default") is ZstdCodec

    def test_get_with_expected_type(self, registry):
        registry.register("tcp", TcpTransport)

        assert registry.get("tcp") is TcpTransport
        with pytest.raises(TypeError, match="not a subclass"):
            registry.get("tcp", expected_type=Codec)
        with pytest.raises(KeyError):
            registry.get("missing")

    def test_list_with_filter(self, registry):
        registry.register("gzip", GzipCodec, family="compression")
        registry.register("zstd", ZstdCodec, family="compression")
        registry.register("tcp", TcpTransport, family="transport")

        assert registry.list() == ["gzip", "zstd", "tcp"]
        assert registry.list({"family": "compression"}) == ["gzip", "zstd"]
        assert registry.get_metadata("tcp") == {"family": "transport"}

    def test_remove_and_clear(self, registry):
        registry.register("gzip", GzipCodec)
        registry.register("zstd", ZstdCodec)

        assert registry.remove("gzip") is True
        assert registry.remove("gzip") is False
        assert registry.list() == ["zstd"]

        registry.clear()
        assert registry.list() == []


class TestChainedTypeRegistry:

    def test_first_hit_wins(self):
        first = ProviderTypeRegistry()
        second = ProviderTypeRegistry()
        first.register("codec", GzipCodec)
        second.register("codec", ZstdCodec)
        second.register("transport", TcpTransport)

        chained = ChainedTypeRegistry(first, second)

        assert chained.try_resolve("codec") is GzipCodec
        assert chained.try_resolve("transport") is TcpTransport
        assert chained.try_resolve("missing") is None
        assert chained.registries == (first, second)

    def test_is_a_type_registry(self):
        assert isinstance(ChainedTypeRegistry(), TypeRegistry)


class TestRegisterProvider:
    """Test the registration decorator."""

    def test_bare_decorator_uses_global_registry(self):
        @register_provider
        class LocalCodec(Codec):
            def encode(self, data: bytes) -> bytes:
                return data

        name = qualified_name(LocalCodec)
        try:
            assert provider_type_registry.try_resolve(name) is LocalCodec
        finally:
            provider_type_registry.remove(name)

    def test_named_registration_into_custom_registry(self):
        registry = ProviderTypeRegistry()

        @register_provider("codecs.local", registry=registry, family="compression")
        class LocalCodec(Codec):
            def encode(self, data: bytes) -> bytes:
                return data

        assert registry.try_resolve("codecs.local") is LocalCodec
        assert registry.get_metadata("codecs.local") == {"family": "compression"}
        assert not provider_type_registry.contains("codecs.local")

    def test_call_without_name_uses_qualified_name(self):
        registry = ProviderTypeRegistry()

        @register_provider(registry=registry)
        class LocalCodec(Codec):
            def encode(self, data: bytes) -> bytes:
                return data

        assert registry.list() == [qualified_name(LocalCodec)]
