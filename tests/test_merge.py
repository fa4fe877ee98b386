"""
Tests for hcl2json.merge module.

Tests multi-document merging including:
- Shallow (top-level) overwrite
- Deep (recursive) union
- List replacement in both modes
- Fold order and determinism
- Root type checks
"""

from __future__ import annotations

import pytest

from hcl2json.exceptions import TypeMismatchError
from hcl2json.merge import merge_documents, merge_mappings
from hcl2json.values import Mapping, from_native, to_native


@pytest.fixture
def team_tags():
    return from_native({"tags": {"Team": "backend"}})


@pytest.fixture
def env_tags():
    return from_native({"tags": {"Environment": "prod"}})


class TestShallowMerge:
    """Tests for shallow merge mode."""

    def test_later_document_replaces_top_level_value(self, team_tags, env_tags):
        """Test that the first tags object is discarded entirely."""
        merged = merge_documents([team_tags, env_tags], "shallow")
        assert merged == from_native({"tags": {"Environment": "prod"}})

    def test_default_mode_is_shallow(self, team_tags, env_tags):
        """Test that omitting the mode means shallow."""
        assert merge_documents([team_tags, env_tags]) == merge_documents(
            [team_tags, env_tags], "shallow"
        )

    def test_disjoint_keys_pass_through(self):
        """Test that keys defined once survive unchanged."""
        merged = merge_documents(
            [from_native({"region": "us-east-1"}), from_native({"size": 3})]
        )
        assert to_native(merged) == {"region": "us-east-1", "size": 3}


class TestDeepMerge:
    """Tests for deep merge mode."""

    def test_nested_objects_are_unioned(self, team_tags, env_tags):
        """Test that nested keys from both documents are kept."""
        merged = merge_documents([team_tags, env_tags], "deep")
        assert merged == from_native(
            {"tags": {"Team": "backend", "Environment": "prod"}}
        )

    def test_conflicting_nested_scalar_last_wins(self):
        """Test that a nested scalar conflict takes the later value."""
        first = from_native({"db": {"engine": "mysql", "opts": {"ssl": False}}})
        second = from_native({"db": {"opts": {"ssl": True}}})

        merged = merge_documents([first, second], "deep")

        assert to_native(merged) == {"db": {"engine": "mysql", "opts": {"ssl": True}}}

    def test_object_replaced_by_scalar(self):
        """Test that a non-object value replaces an object."""
        first = from_native({"db": {"engine": "mysql"}})
        second = from_native({"db": "external"})
        assert to_native(merge_documents([first, second], "deep")) == {"db": "external"}

    def test_scalar_replaced_by_object(self):
        """Test that an object replaces an earlier scalar."""
        first = from_native({"db": None})
        second = from_native({"db": {"engine": "mysql"}})
        assert to_native(merge_documents([first, second], "deep")) == {
            "db": {"engine": "mysql"}
        }


class TestListReplacement:
    """Tests that lists are never concatenated."""

    @pytest.mark.parametrize("mode", ["shallow", "deep"])
    def test_list_replaced(self, mode):
        """Test that a later list fully replaces an earlier one."""
        first = from_native({"zones": ["a", "b"], "nested": {"ids": [1, 2]}})
        second = from_native({"zones": ["c"], "nested": {"ids": [3]}})

        merged = to_native(merge_documents([first, second], mode))

        assert merged["zones"] == ["c"]
        assert merged["nested"]["ids"] == [3]


class TestFoldProperties:
    """Tests for fold order, determinism and purity."""

    @pytest.mark.parametrize("mode", ["shallow", "deep"])
    def test_fold_is_associative_over_prefix(self, mode):
        """Test merge([a, b, c]) == merge([merge([a, b]), c])."""
        a = from_native({"x": {"p": 1, "q": [1]}, "y": 1})
        b = from_native({"x": {"q": [2], "r": {"s": 1}}, "z": True})
        c = from_native({"x": {"r": {"t": 2}}, "y": "late"})

        assert merge_documents([a, b, c], mode) == merge_documents(
            [merge_documents([a, b], mode), c], mode
        )

    def test_deterministic(self, team_tags, env_tags):
        """Test that identical inputs give equal outputs."""
        assert merge_documents([team_tags, env_tags], "deep") == merge_documents(
            [team_tags, env_tags], "deep"
        )

    def test_inputs_not_mutated(self, team_tags, env_tags):
        """Test that merging leaves the input documents unchanged."""
        before = to_native(team_tags)
        merge_documents([team_tags, env_tags], "deep")
        assert to_native(team_tags) == before

    def test_existing_keys_keep_position(self):
        """Test that overwritten keys keep their first position."""
        first = from_native({"a": 1, "b": 2})
        second = from_native({"c": 3, "a": 4})
        assert merge_documents([first, second]).keys() == ["a", "b", "c"]

    def test_empty_input_yields_empty_mapping(self):
        """Test that no documents merge into an empty mapping."""
        assert merge_documents([]) == Mapping()

    def test_merge_mappings_single_step(self, team_tags, env_tags):
        """Test the single-step helper in both modes."""
        assert merge_mappings(team_tags, env_tags) == env_tags
        assert len(merge_mappings(team_tags, env_tags, "deep")["tags"]) == 2


class TestMergeErrors:
    """Tests for merge error handling."""

    def test_non_mapping_root_raises(self, team_tags):
        """Test that a list root is rejected with its index."""
        with pytest.raises(TypeMismatchError) as exc_info:
            merge_documents([team_tags, from_native([1, 2])])

        assert exc_info.value.index == 1
        assert exc_info.value.actual == "sequence"
        assert exc_info.value.source is None

    def test_error_includes_source_label(self, team_tags):
        """Test that the source path is reported when given."""
        with pytest.raises(TypeMismatchError, match="b.tfvars") as exc_info:
            merge_documents(
                [team_tags, from_native("scalar")], sources=["a.tfvars", "b.tfvars"]
            )

        assert exc_info.value.source == "b.tfvars"

    def test_unknown_mode_raises(self, team_tags):
        """Test that an unknown merge mode is rejected."""
        with pytest.raises(ValueError, match="Unknown merge mode"):
            merge_documents([team_tags], "concat")
