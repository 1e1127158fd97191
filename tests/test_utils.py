"""Unit tests for utility functions (featgen.utils).

Tests cover:
- to_pascal_case / to_camel_case
- is_kebab_case / is_kebab_case_path / split_path_segments
- ensure_dir
- Rich output helpers (print_summary_table, print_success, etc.)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from featgen.utils import (
    ensure_dir,
    is_kebab_case,
    is_kebab_case_path,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    split_path_segments,
    to_camel_case,
    to_pascal_case,
)


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


class TestToPascalCase:
    @pytest.mark.unit
    def test_multi_word(self):
        assert to_pascal_case("my-feature-name") == "MyFeatureName"

    @pytest.mark.unit
    def test_single_letter(self):
        assert to_pascal_case("a") == "A"

    @pytest.mark.unit
    def test_single_word(self):
        assert to_pascal_case("tag") == "Tag"

    @pytest.mark.unit
    def test_idempotent_on_pascal_case(self):
        assert to_pascal_case("MyFeature") == "MyFeature"
        assert to_pascal_case(to_pascal_case("order-item")) == "OrderItem"

    @pytest.mark.unit
    def test_empty_string(self):
        assert to_pascal_case("") == ""


class TestToCamelCase:
    @pytest.mark.unit
    def test_multi_word(self):
        assert to_camel_case("my-feature-name") == "myFeatureName"

    @pytest.mark.unit
    def test_single_word_unchanged(self):
        assert to_camel_case("tag") == "tag"

    @pytest.mark.unit
    def test_idempotent_on_camel_case(self):
        assert to_camel_case("myFeature") == "myFeature"

    @pytest.mark.unit
    def test_first_letter_not_uppercased(self):
        assert to_camel_case("order-item")[0] == "o"


# ---------------------------------------------------------------------------
# Kebab-case validation
# ---------------------------------------------------------------------------


class TestIsKebabCase:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["a", "tag", "order-item", "my-feature-name"])
    def test_accepts(self, value):
        assert is_kebab_case(value) is True

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [
            "",
            "-order",
            "order-",
            "order--item",
            "Order-item",
            "orderItem",
            "order1",
            "order_item",
            "order item",
            "_order",
        ],
    )
    def test_rejects(self, value):
        assert is_kebab_case(value) is False


class TestSplitPathSegments:
    @pytest.mark.unit
    def test_forward_and_back_slashes(self):
        assert split_path_segments("a/b\\c") == ["a", "b", "c"]

    @pytest.mark.unit
    def test_drops_empty_segments(self):
        assert split_path_segments("/a//b/") == ["a", "b"]

    @pytest.mark.unit
    def test_empty(self):
        assert split_path_segments("") == []


class TestIsKebabCasePath:
    @pytest.mark.unit
    def test_single_segment(self):
        assert is_kebab_case_path("orders") is True

    @pytest.mark.unit
    def test_nested_segments(self):
        assert is_kebab_case_path("my-parent-dir/sub-dir") is True

    @pytest.mark.unit
    def test_backslash_separator(self):
        assert is_kebab_case_path("my-parent-dir\\sub-dir") is True

    @pytest.mark.unit
    def test_trailing_separator_ignored(self):
        assert is_kebab_case_path("orders/") is True

    @pytest.mark.unit
    def test_invalid_segment(self):
        assert is_kebab_case_path("orders/Sub_Dir") is False

    @pytest.mark.unit
    def test_underscore_rejected_by_default(self):
        assert is_kebab_case_path("_shared/orders") is False

    @pytest.mark.unit
    def test_underscore_prefix_allowed(self):
        assert is_kebab_case_path("_shared/orders", allow_underscore_prefix=True) is True

    @pytest.mark.unit
    def test_underscore_needs_kebab_remainder(self):
        assert is_kebab_case_path("_", allow_underscore_prefix=True) is False
        assert is_kebab_case_path("__shared", allow_underscore_prefix=True) is False

    @pytest.mark.unit
    def test_no_segments(self):
        assert is_kebab_case_path("") is False
        assert is_kebab_case_path("/") is False


# ---------------------------------------------------------------------------
# ensure_dir
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_nested_dir(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        result = ensure_dir(target)
        assert result.is_dir()

    @pytest.mark.unit
    def test_existing_dir_no_error(self, tmp_path: Path):
        ensure_dir(tmp_path)
        assert ensure_dir(tmp_path).is_dir()


# ---------------------------------------------------------------------------
# Rich output helpers (smoke tests - verify they don't raise)
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self, capsys):
        print_summary_table({"Created": "3", "Skipped": "0"}, title="Test Summary")
        out = capsys.readouterr().out
        assert "Created" in out
        assert "Test Summary" in out

    @pytest.mark.unit
    def test_print_success(self, capsys):
        print_success("done")
        assert "done" in capsys.readouterr().out

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning(self):
        print_warning("Check your config")

    @pytest.mark.unit
    def test_print_info(self):
        print_info("for your information")
