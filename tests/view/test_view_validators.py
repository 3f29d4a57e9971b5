import unittest

from driveview.errors import LocalPreconditionError
from driveview.view.validators import (
    find_cycle,
    validate_name,
    validate_not_noop_move,
    validate_not_self_drop,
)


def _lookup(links: dict):
    def lookup(entry_id: str):
        if entry_id in links:
            return True, links[entry_id]
        return False, None

    return lookup


class TestValidators(unittest.TestCase):
    def test_validate_name_trims(self) -> None:
        self.assertEqual(validate_name("  Docs "), "Docs")
        with self.assertRaises(LocalPreconditionError):
            validate_name("\t ")

    def test_self_and_noop_moves(self) -> None:
        with self.assertRaises(LocalPreconditionError):
            validate_not_self_drop("A", "A")
        validate_not_self_drop("A", None)
        with self.assertRaises(LocalPreconditionError):
            validate_not_noop_move(None, None)
        validate_not_noop_move("P", None)

    def test_find_cycle(self) -> None:
        links = {"C": "B", "B": "A", "A": None, "D": None}
        self.assertEqual(find_cycle("A", "C", _lookup(links), max_hops=25), (True, None))
        self.assertEqual(find_cycle("A", "D", _lookup(links), max_hops=25), (False, None))
        self.assertEqual(find_cycle("A", "Z", _lookup(links), max_hops=25), (False, "Z"))

    def test_find_cycle_guards_loops_and_long_chains(self) -> None:
        with self.assertRaises(LocalPreconditionError):
            find_cycle("A", "P", _lookup({"P": "Q", "Q": "P"}), max_hops=25)

        chain = {f"n{i}": f"n{i + 1}" for i in range(40)}
        with self.assertRaises(LocalPreconditionError):
            find_cycle("A", "n0", _lookup(chain), max_hops=25)


if __name__ == "__main__":
    unittest.main()
