"""Unit tests for the expression model."""

import unittest
from fractions import Fraction

from mathsteps_pkg.expression import (
    Add,
    IdArena,
    Mul,
    Neg,
    add,
    apply_step,
    apply_steps,
    clone,
    contains,
    find_path,
    from_fraction,
    get_factors,
    get_terms,
    identifier,
    is_number,
    mul,
    mul_factors,
    add_terms,
    neg,
    node_at,
    number,
    replace_at,
    traverse,
)
from mathsteps_pkg.parser import parse
from mathsteps_pkg.types import Step


class TestNodeEquality(unittest.TestCase):
    """Deep equality ignores ids and source locations."""

    def test_equal_nodes_have_different_ids(self):
        a, b = number(1), number(1)
        self.assertEqual(a, b)
        self.assertNotEqual(a.id, b.id)

    def test_nodes_are_hashable(self):
        self.assertEqual(len({identifier("x"), identifier("x"), identifier("y")}), 2)

    def test_operand_order_matters(self):
        x, y = identifier("x"), identifier("y")
        self.assertNotEqual(add([x, y]), add([y, x]))

    def test_implicit_flag_matters(self):
        x, y = identifier("x"), identifier("y")
        self.assertNotEqual(mul([x, y]), mul([x, y], implicit=True))

    def test_parsed_location_ignored(self):
        self.assertEqual(parse("x"), identifier("x"))
        self.assertIsNotNone(parse("x").loc)


class TestBuilders(unittest.TestCase):
    def test_arena_ids_are_reproducible(self):
        arena = IdArena()
        self.assertEqual(number(1, arena=arena).id, 1)
        self.assertEqual(identifier("x", arena=arena).id, 2)

    def test_add_needs_two_operands(self):
        with self.assertRaises(ValueError):
            add([number(1)])

    def test_add_terms_and_mul_factors(self):
        x = identifier("x")
        self.assertEqual(add_terms([]), number(0))
        self.assertIs(add_terms([x]), x)
        self.assertEqual(mul_factors([]), number(1))
        self.assertIs(mul_factors([x]), x)

    def test_from_fraction(self):
        self.assertEqual(from_fraction(Fraction(3)), number(3))
        self.assertIsInstance(from_fraction(Fraction(-3)), Neg)
        self.assertEqual(str(from_fraction(Fraction(2, 3))), "2 / 3")

    def test_clone_gives_fresh_ids(self):
        node = parse("2x + 1")
        copy = clone(node)
        self.assertEqual(copy, node)
        self.assertNotEqual(copy.id, node.id)
        self.assertNotEqual(copy.args[0].id, node.args[0].id)


class TestQueries(unittest.TestCase):
    def test_terms_and_factors(self):
        x = identifier("x")
        self.assertEqual(get_terms(x), [x])
        self.assertEqual(len(get_terms(parse("x + y + z"))), 3)
        self.assertEqual(get_factors(parse("2xy")), [number(2), identifier("x"), identifier("y")])

    def test_is_number(self):
        self.assertTrue(is_number(parse("1 + 2 * 3")))
        self.assertTrue(is_number(parse("-2 / 3")))
        self.assertFalse(is_number(parse("2x")))

    def test_contains(self):
        self.assertTrue(contains(parse("2(x + 1)"), identifier("x")))
        self.assertFalse(contains(parse("2(y + 1)"), identifier("x")))


class TestTraversal(unittest.TestCase):
    def test_unchanged_traversal_returns_same_object(self):
        node = parse("3(x + 1) + 4")
        self.assertIs(traverse(node, exit=lambda n, ancestors: None), node)

    def test_exit_replaces_nodes(self):
        node = parse("x + y")
        renamed = traverse(
            node,
            exit=lambda n, ancestors: identifier("z") if n == identifier("x") else None,
        )
        self.assertEqual(renamed, parse("z + y"))
        self.assertEqual(renamed.id, node.id)

    def test_ancestors_are_root_first(self):
        seen = {}

        def enter(n, ancestors):
            seen[str(n)] = [type(a) for a in ancestors]

        traverse(parse("2(x + 1)"), enter=enter)
        self.assertEqual(seen["x"], [Mul, Add])


class TestReplacement(unittest.TestCase):
    def test_path_replacement(self):
        node = parse("2(x + 1)")
        x = node.args[1].args[0]
        path = find_path(node, x.id)
        self.assertEqual(path, (1, 0))
        self.assertIs(node_at(node, path), x)
        replaced = replace_at(node, path, identifier("y"))
        self.assertEqual(str(replaced), "2(y + 1)")
        self.assertEqual(str(node), "2(x + 1)")

    def test_sum_is_spliced_into_parent_sum(self):
        node = parse("3(x + 1) + 4")
        term = node.args[0]
        step = Step("distribute", term, add([parse("3x"), number(3)]))
        self.assertEqual(str(apply_step(node, step)), "3x + 3 + 4")

    def test_missing_node_leaves_tree_unchanged(self):
        node = parse("x + 1")
        step = Step("unrelated", identifier("x"), identifier("y"))
        self.assertIs(apply_step(node, step), node)

    def test_apply_steps_in_order(self):
        node = parse("x + y")
        x, y = node.args
        z = identifier("z")
        steps = [Step("a", x, z), Step("b", z, neg(y))]
        self.assertEqual(str(apply_steps(node, steps)), "-y + y")


if __name__ == "__main__":
    unittest.main()
