from __future__ import annotations

import unittest

from branchborder.state import BorderState
from branchborder.view import render_status


class TestStatusViewContract(unittest.TestCase):
    def test_unknown_state(self) -> None:
        self.assertEqual(render_status(BorderState()), ["Branch: unknown", "Color: unset", "Randomize Color"])

    def test_stable_state(self) -> None:
        lines = render_status(BorderState("feature/login", "#3949AB"))
        self.assertEqual(lines[:2], ["Branch: feature/login", "Color: #3949AB"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
