"""
Unit tests for the optional-equality predicate builder.

Tests cover:
- Empty builder matches everything
- Missing and blank values are skipped
- Present values become parameterized equality terms joined with AND
"""

from repositories.predicate import PredicateBuilder


class TestPredicateBuilder:
    """Rendering of optional equality filters."""

    def test_no_terms_matches_everything(self):
        assert PredicateBuilder().build_and() == ("TRUE", [])

    def test_none_value_is_skipped(self):
        sql, params = PredicateBuilder().add(None, "c.name").build_and()
        assert sql == "TRUE"
        assert params == []

    def test_blank_string_is_skipped(self):
        sql, params = PredicateBuilder().add("   ", "c.name").add("", "u.username").build_and()
        assert sql == "TRUE"
        assert params == []

    def test_single_term(self):
        sql, params = PredicateBuilder().add("Google", "c.name").build_and()
        assert sql == "c.name = %s"
        assert params == ["Google"]

    def test_terms_are_joined_with_and_in_order(self):
        sql, params = (
            PredicateBuilder()
            .add("Google", "c.name")
            .add(None, "pi.lastname")
            .add("Sergey", "pi.firstname")
            .build_and()
        )
        assert sql == "c.name = %s AND pi.firstname = %s"
        assert params == ["Google", "Sergey"]

    def test_non_string_values_are_kept(self):
        sql, params = PredicateBuilder().add(0, "p.amount").build_and()
        assert sql == "p.amount = %s"
        assert params == [0]

    def test_build_returns_a_copy_of_params(self):
        builder = PredicateBuilder().add("Apple", "c.name")
        _, params = builder.build_and()
        params.append("mutated")
        assert builder.build_and()[1] == ["Apple"]
