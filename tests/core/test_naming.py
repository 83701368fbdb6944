# tests/core/test_naming.py
from __future__ import annotations

import pytest

from sql_data_api.core.naming import NameAlias, extract_name_and_alias


class TestExtractNameAndAlias:
    def test_name_only(self):
        assert extract_name_and_alias("Customers") == NameAlias("Customers", None)

    def test_name_and_alias(self):
        assert extract_name_and_alias("Customers c") == NameAlias("Customers", "c")

    def test_trims_outer_whitespace(self):
        assert extract_name_and_alias("  Orders o  ") == NameAlias("Orders", "o")
        assert extract_name_and_alias("  Orders  ") == NameAlias("Orders", None)

    def test_alias_after_last_space(self):
        # lenient: extra words in the middle are ignored
        result = extract_name_and_alias("dbo.Orders as o")
        assert result.name == "dbo.Orders"
        assert result.alias == "o"

    def test_multiple_spaces_between(self):
        assert extract_name_and_alias("Orders    o") == NameAlias("Orders", "o")

    @pytest.mark.parametrize("text", ["Customers c", "dbo.Orders ord", "v_Sales s1"])
    def test_reconstructs_original(self, text):
        parsed = extract_name_and_alias(text)
        assert f"{parsed.name} {parsed.alias}" == text
