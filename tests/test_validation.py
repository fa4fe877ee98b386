"""
Tests for syntax validation module.

This module tests validation of HCL files, which only checks that the
parser accepts each document and never merges them.
"""

from __future__ import annotations

import pytest

from hcl2json.exceptions import InputError
from hcl2json.results import ValidationResult
from hcl2json.validation import validate_inputs


class TestValidateInputs:
    """Tests for validate_inputs function."""

    def test_valid_file(self, terraform_tfvars):
        """Test that a valid file is reported as valid."""
        results = validate_inputs([str(terraform_tfvars)])

        assert len(results) == 1
        assert results[0].status == "valid"
        assert results[0].error is None
        assert results[0].report_line() == f"VALID: {terraform_tfvars}"

    def test_invalid_file_does_not_stop_others(self, tmp_test_dir, create_hcl_file):
        """Test that every file is checked independently."""
        create_hcl_file("a.tfvars", 'region = "us-west-2"\n')
        create_hcl_file("b.tfvars", "invalid hcl content {")
        create_hcl_file("c.tfvars", "count = 1\n")

        results = validate_inputs([str(tmp_test_dir / "*.tfvars")])

        assert [r.status for r in results] == ["valid", "invalid", "valid"]
        assert results[1].error
        assert results[1].report_line().startswith(f"INVALID: {tmp_test_dir / 'b.tfvars'}: ")

    def test_files_with_conflicting_roots_still_valid(self, create_hcl_file):
        """Test that validation performs no merge."""
        a = create_hcl_file("a.tfvars", "tags = { Team = \"x\" }\n")
        b = create_hcl_file("b.tfvars", "tags = [\"x\"]\n")

        results = validate_inputs([str(a), str(b)])

        assert all(r.is_valid for r in results)

    def test_stdin_valid(self):
        """Test stdin validation reports as stdin."""
        results = validate_inputs([], 'region = "us-west-2"\n')
        assert results == [ValidationResult(source="stdin", status="valid")]
        assert results[0].report_line() == "VALID: stdin"

    def test_stdin_invalid(self):
        """Test invalid stdin is reported, not raised."""
        results = validate_inputs([], "invalid hcl content {")
        assert results[0].status == "invalid"

    def test_no_input_raises(self):
        """Test that missing files and stdin is an error."""
        with pytest.raises(InputError, match="No files or input provided"):
            validate_inputs([])

    def test_unmatched_pattern_raises(self, tmp_test_dir):
        """Test that an unmatched pattern is an input error."""
        with pytest.raises(InputError):
            validate_inputs([str(tmp_test_dir / "missing.tfvars")])
