import threading
import unittest

from game import ManualScheduler, ThreadingScheduler


class TestManualScheduler(unittest.TestCase):
    def test_given_callbacks_when_advancing_then_run_once_in_due_order(self):
        clock = ManualScheduler()
        ran = []
        clock.schedule(500, lambda: ran.append("a"))
        clock.schedule(100, lambda: ran.append("b"))
        clock.schedule(500, lambda: ran.append("c"))
        self.assertEqual(clock.pending, 3)

        self.assertEqual(clock.advance(99), 0)
        self.assertEqual(clock.advance(1), 1)
        self.assertEqual(ran, ["b"])
        self.assertEqual(clock.advance(400), 2)
        self.assertEqual(ran, ["b", "a", "c"])
        self.assertEqual(clock.now, 500)
        self.assertEqual(clock.advance(1000), 0)
        self.assertEqual(ran, ["b", "a", "c"])

    def test_given_callback_scheduling_more_work_when_run_pending_then_due_work_runs(self):
        clock = ManualScheduler()
        ran = []
        clock.schedule(10, lambda: clock.schedule(0, lambda: ran.append("inner")))
        self.assertEqual(clock.run_pending(), 2)
        self.assertEqual(ran, ["inner"])
        self.assertEqual(clock.pending, 0)
        self.assertEqual(clock.run_pending(), 0)


    def test_given_callback_scheduling_longer_delay_when_run_pending_then_queue_drained(self):
        clock = ManualScheduler()
        ran = []
        clock.schedule(10, lambda: clock.schedule(1000, lambda: ran.append("late")))
        self.assertEqual(clock.run_pending(), 2)
        self.assertEqual(ran, ["late"])
        self.assertEqual(clock.now, 1010)
        self.assertEqual(clock.pending, 0)


class TestThreadingScheduler(unittest.TestCase):
    def test_given_short_delay_when_scheduled_then_callback_fires(self):
        fired = threading.Event()
        ThreadingScheduler().schedule(10, fired.set)
        self.assertTrue(fired.wait(timeout=5))


if __name__ == "__main__":
    unittest.main(verbosity=2)
