"""Unit tests for the capability registry and URI templates."""

import pytest

from mcp_runtime.models import CapabilityKind, HandlerDescriptor, ParamSpec
from mcp_runtime.protocol.errors import DuplicateCapability, RegistryFrozenError
from mcp_runtime.server.uri_template import UriTemplate, split_uri


def _noop(**kwargs):
    return kwargs


def _tool(name: str) -> HandlerDescriptor:
    return HandlerDescriptor.tool(name, f"{name} tool", [ParamSpec(name="a", type="number")])


def _resource(template: str) -> HandlerDescriptor:
    return HandlerDescriptor.resource(template, template, "")


class TestRegistration:
    """Tests for register/lookup."""

    def test_register_and_lookup(self, registry):
        """Test registering a tool and looking it up."""
        entry = registry.register(_tool("add"), _noop)

        assert registry.lookup(CapabilityKind.TOOL, "add") is entry
        assert registry.has(CapabilityKind.TOOL, "add")
        assert registry.lookup(CapabilityKind.TOOL, "missing") is None
        assert len(registry) == 1

    def test_duplicate_name_is_fatal(self, registry):
        """Test that registering the same tool name twice fails."""
        registry.register(_tool("add"), _noop)

        with pytest.raises(DuplicateCapability, match="add"):
            registry.register(_tool("add"), _noop)
        assert len(registry) == 1

    def test_same_name_different_kind(self, registry):
        """Test that names are scoped per kind."""
        registry.register(_tool("echo"), _noop)
        registry.register(HandlerDescriptor.prompt("echo", "echo prompt"), _noop)

        assert registry.has(CapabilityKind.TOOL, "echo")
        assert registry.has(CapabilityKind.PROMPT, "echo")

    def test_frozen_registry_rejects_registration(self, registry):
        """Test that registration is closed once frozen."""
        registry.freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(_tool("add"), _noop)

    def test_callback_must_be_callable(self, registry):
        """Test that a non-callable callback is rejected."""
        with pytest.raises(ValueError, match="not callable"):
            registry.register(_tool("add"), "not a function")

    def test_list_descriptors_in_registration_order(self, registry):
        """Test listing all descriptors and filtering by kind."""
        registry.register(_tool("b"), _noop)
        registry.register(_resource("status://server"), _noop)
        registry.register(_tool("a"), _noop)

        assert [d.name for d in registry.list_descriptors()] == ["b", "status://server", "a"]
        assert [d.name for d in registry.list_descriptors(CapabilityKind.TOOL)] == ["b", "a"]
        assert registry.list_descriptors(CapabilityKind.PROMPT) == []


class TestResourceMatching:
    """Tests for resolving concrete URIs against templates."""

    def test_match_binds_placeholder(self, registry):
        """Test that a template binds its placeholder segment."""
        registry.register(_resource("document://{id}"), _noop)

        entry, bound = registry.match_uri("document://readme")

        assert entry.descriptor.name == "document://{id}"
        assert bound == {"id": "readme"}

    def test_literal_resource(self, registry):
        """Test that a template without placeholders matches only itself."""
        registry.register(_resource("status://server"), _noop)

        entry, bound = registry.match_uri("status://server")
        assert bound == {}
        assert registry.match_uri("status://client") is None

    @pytest.mark.parametrize(
        "uri",
        ["other://readme", "document://a/b", "document://", "no-scheme"],
    )
    def test_no_match(self, registry, uri):
        """Test scheme, segment count, and empty segment mismatches."""
        registry.register(_resource("document://{id}"), _noop)

        assert registry.match_uri(uri) is None

    def test_most_specific_template_wins(self, registry):
        """Test that more literal segments beat earlier registration."""
        registry.register(_resource("files://{dir}/{name}"), _noop)
        registry.register(_resource("files://docs/{name}"), _noop)

        entry, bound = registry.match_uri("files://docs/intro")
        assert entry.descriptor.name == "files://docs/{name}"
        assert bound == {"name": "intro"}

        entry, bound = registry.match_uri("files://src/main")
        assert entry.descriptor.name == "files://{dir}/{name}"
        assert bound == {"dir": "src", "name": "main"}

    def test_equally_specific_first_registered_wins(self, registry):
        """Test that ties go to the template registered first."""
        registry.register(_resource("grid://{x}/b"), _noop)
        registry.register(_resource("grid://a/{y}"), _noop)

        entry, bound = registry.match_uri("grid://a/b")
        assert entry.descriptor.name == "grid://{x}/b"
        assert bound == {"x": "a"}

    def test_same_shape_is_duplicate(self, registry):
        """Test that templates matching the same URIs are rejected."""
        registry.register(_resource("document://{id}"), _noop)

        with pytest.raises(DuplicateCapability, match="same URIs"):
            registry.register(_resource("document://{name}"), _noop)

    def test_percent_decoding(self, registry):
        """Test that bound values are percent-decoded."""
        registry.register(_resource("echo://{message}"), _noop)

        _, bound = registry.match_uri("echo://hello%20world")
        assert bound == {"message": "hello world"}


class TestUriTemplate:
    """Tests for UriTemplate parsing."""

    def test_parse(self):
        """Test parsing placeholders and literals."""
        template = UriTemplate("files://docs/{name}")

        assert template.scheme == "files"
        assert template.placeholders == [None, "name"]
        assert template.literal_count == 1

    def test_partial_segment_placeholder(self):
        """Test that placeholders must span a whole segment."""
        with pytest.raises(ValueError, match="whole segment"):
            UriTemplate("document://doc-{id}")

    def test_repeated_placeholder(self):
        """Test that a placeholder name may appear only once."""
        with pytest.raises(ValueError, match="Repeated"):
            UriTemplate("pair://{id}/{id}")

    def test_scheme_is_case_insensitive(self):
        """Test that schemes compare case-insensitively."""
        assert UriTemplate("document://{id}").match("DOCUMENT://readme") == {"id": "readme"}

    def test_split_uri_requires_scheme(self):
        """Test that a URI without a scheme is rejected."""
        with pytest.raises(ValueError, match="no scheme"):
            split_uri("readme")
