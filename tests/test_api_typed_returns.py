"""Test that API functions return typed dataclasses."""

from mathsteps_pkg.api import check, simplify_expression, solve_equation
from mathsteps_pkg.types import CheckResult, SimplifyResult, SolveResult


class TestAPITypedReturns:
    """Test that all API functions return typed dataclasses."""

    def test_check_returns_check_result(self):
        """Test that check() returns CheckResult."""
        result = check("a + b", "b + a")
        assert isinstance(result, CheckResult)
        assert result.ok is True
        assert result.equivalent is True
        assert [s["message"] for s in result.steps] == ["commutative property"]
        assert result.values_match is True

    def test_check_wrong_step(self):
        """A wrong step is not equivalent and SymPy agrees."""
        result = check("2x/2", "2b")
        assert result.ok is True
        assert result.equivalent is False
        assert result.steps == []
        assert result.values_match is False

    def test_check_equations(self):
        result = check("x + 5 = 10", "x = 5")
        assert result.ok is True
        assert result.values_match is True

    def test_check_options(self):
        result = check("24/6", "4", eval_fractions=False)
        assert result.equivalent is True
        assert result.steps[0]["message"] == "prime factorization"

    def test_check_error_returns_check_result(self):
        """Test that check() errors return CheckResult."""
        result = check("", "x")
        assert isinstance(result, CheckResult)
        assert result.ok is False
        assert result.error_code == "EMPTY_INPUT"

    def test_check_to_dict(self):
        data = check("1 + 2", "3").to_dict()
        assert data["type"] == "check"
        assert data["equivalent"] is True
        assert data["steps"][0] == {
            "message": "evaluation of addition",
            "before": "1 + 2",
            "after": "3",
        }

    def test_simplify_returns_simplify_result(self):
        """Test that simplify_expression() returns SimplifyResult."""
        result = simplify_expression("3(x + 1) + 4")
        assert isinstance(result, SimplifyResult)
        assert result.ok is True
        assert result.changed is True
        assert result.result == "3x + 7"
        assert [s["message"] for s in result.steps] == ["distribute", "collect like terms"]
        assert "substeps" in result.steps[0]

    def test_simplify_unchanged(self):
        result = simplify_expression("2/3")
        assert result.ok is True
        assert result.changed is False
        assert result.result == "2 / 3"
        assert result.to_dict()["type"] == "simplify"

    def test_solve_equation_returns_solve_result(self):
        """Test that solve_equation() returns SolveResult."""
        result = solve_equation("2x + 4 = 10", "x")
        assert isinstance(result, SolveResult)
        assert result.ok is True
        assert result.solved is True
        assert result.result == "x = 3"
        assert result.variable == "x"
        assert result.to_dict()["type"] == "equation"

    def test_solve_other_variable(self):
        result = solve_equation("3y = 12", "y")
        assert result.solved is True
        assert result.result == "y = 4"

    def test_solve_equation_unsolved(self):
        result = solve_equation("x^2 = 4")
        assert result.ok is True
        assert result.solved is False
        assert result.result is None

    def test_solve_equation_error_returns_solve_result(self):
        """Test that solve_equation() errors return SolveResult."""
        result = solve_equation("x + 1")
        assert isinstance(result, SolveResult)
        assert result.ok is False
        assert result.error is not None
        assert result.error_code == "NOT_AN_EQUATION"
