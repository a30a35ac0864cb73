import unittest

from strudel_bridge.web_runtime_safety import is_page_closed_error, page_is_closed


class _Page:
    def __init__(self, closed: bool = False, broken: bool = False) -> None:
        self._closed = closed
        self._broken = broken

    def is_closed(self) -> bool:
        if self._broken:
            raise RuntimeError("connection lost")
        return self._closed


class PageClosedTests(unittest.TestCase):
    def test_missing_page_counts_as_closed(self) -> None:
        self.assertTrue(page_is_closed(None))

    def test_reports_page_state(self) -> None:
        self.assertFalse(page_is_closed(_Page()))
        self.assertTrue(page_is_closed(_Page(closed=True)))

    def test_broken_checker_counts_as_closed(self) -> None:
        self.assertTrue(page_is_closed(_Page(broken=True)))

    def test_closed_error_messages(self) -> None:
        self.assertTrue(is_page_closed_error(RuntimeError("Target page, context or browser has been closed")))
        self.assertTrue(is_page_closed_error(RuntimeError("Execution context was destroyed, most likely because of a navigation")))
        self.assertFalse(is_page_closed_error(RuntimeError("ReferenceError: setcps is not defined")))


if __name__ == "__main__":
    unittest.main()
