"""Tests for module manifests: ensure all modules have valid tool definitions.

These tests import each module's manifest and verify structural correctness:
tool names follow conventions, required fields are present, parameter types
are valid, and every advertised parameter matches the argument model the
registry validates against.
"""

from __future__ import annotations

import importlib
import re

import pytest

# All modules that have a manifest.py with a MANIFEST object.
MODULE_MANIFESTS = [
    "modules.github_mcp.manifest",
]

VALID_PARAM_TYPES = {"string", "integer", "number", "boolean", "array", "object"}
TOOL_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")


def _load_manifest(module_path: str):
    """Import a module and return its MANIFEST."""
    mod = importlib.import_module(module_path)
    return mod.MANIFEST


def _all_manifests():
    return [(path, _load_manifest(path)) for path in MODULE_MANIFESTS]


# ===================================================================
# Parametrized tests
# ===================================================================


@pytest.mark.parametrize(
    "module_path,manifest",
    _all_manifests(),
    ids=MODULE_MANIFESTS,
)
class TestManifestStructure:
    """Structural validation for module manifests."""

    def test_module_name_is_set(self, module_path, manifest):
        """Manifest must have a non-empty module_name."""
        assert manifest.module_name, f"{module_path}: module_name is empty"

    def test_has_description(self, module_path, manifest):
        """Manifest must have a description."""
        assert manifest.description, f"{module_path}: description is empty"

    def test_has_tools(self, module_path, manifest):
        """Manifest must define at least one tool."""
        assert len(manifest.tools) > 0, f"{module_path}: no tools defined"

    def test_tool_names_are_bare_snake_case(self, module_path, manifest):
        """MCP tool names carry no module prefix."""
        for tool in manifest.tools:
            assert TOOL_NAME_RE.match(tool.name), (
                f"{module_path}: tool '{tool.name}' is not bare snake_case"
            )

    def test_tool_names_are_unique(self, module_path, manifest):
        names = [tool.name for tool in manifest.tools]
        assert len(names) == len(set(names)), f"{module_path}: duplicate tool names"

    def test_tools_have_descriptions(self, module_path, manifest):
        """Each tool must have a description."""
        for tool in manifest.tools:
            assert tool.description, (
                f"{module_path}: tool '{tool.name}' has empty description"
            )

    def test_parameter_types_are_valid(self, module_path, manifest):
        """Tool parameters must use valid type strings."""
        for tool in manifest.tools:
            for param in tool.parameters:
                assert param.type in VALID_PARAM_TYPES, (
                    f"{module_path}: tool '{tool.name}' param '{param.name}' "
                    f"has invalid type '{param.type}', expected one of "
                    f"{VALID_PARAM_TYPES}"
                )

    def test_parameters_have_descriptions(self, module_path, manifest):
        """Each parameter must have a description."""
        for tool in manifest.tools:
            for param in tool.parameters:
                assert param.description, (
                    f"{module_path}: tool '{tool.name}' param "
                    f"'{param.name}' has empty description"
                )

    def test_optional_parameters_are_not_required_in_schema(self, module_path, manifest):
        for tool in manifest.tools:
            schema = tool.input_schema()
            optional = {p.name for p in tool.parameters if not p.required}
            assert not optional & set(schema["required"]), tool.name


# ===================================================================
# Manifest <-> argument model agreement
# ===================================================================


def test_github_manifest_matches_argument_models():
    """Every advertised parameter exists on the model, with the same optionality."""
    from modules.github_mcp.manifest import MANIFEST
    from modules.github_mcp.tools import ARGUMENT_MODELS

    assert [t.name for t in MANIFEST.tools] == list(ARGUMENT_MODELS)
    for tool in MANIFEST.tools:
        fields = ARGUMENT_MODELS[tool.name].model_fields
        assert {p.name for p in tool.parameters} == set(fields), tool.name
        for param in tool.parameters:
            assert fields[param.name].is_required() == param.required, f"{tool.name}.{param.name}"
