import unittest

try:
    from gprefs.Watcher import PrefsWatcher
except ImportError:
    PrefsWatcher = None

from gprefs.ConfigAccessor import ConfigAccessor
from gprefs.Clients.MemoryClient import MemoryClient
from gprefs.const import VALUE_INT
from gprefs.Value import Value


@unittest.skipIf(PrefsWatcher is None, "PyGObject is not available")
class PrefsWatcherTestCase(unittest.TestCase):
    def setUp(self):
        self.client = MemoryClient()
        self.accessor = ConfigAccessor("gnucash", self.client.ref)
        self.changes = []

    def onChanged(self, watcher, key, value):
        self.changes.append((key, value))

    def testChanges(self):
        watcher = PrefsWatcher(self.accessor, "general")
        self.assertTrue(watcher.connected)
        watcher.connect("changed", self.onChanged)

        self.accessor.set_int("general", "count", 3)
        self.accessor.set_int("history", "count", 3)
        self.accessor.unset("general", "count")
        self.assertEqual(self.changes, [
            ("/apps/gnucash/general/count", Value(VALUE_INT, 3)),
            ("/apps/gnucash/general/count", None),
        ])

        watcher.close()
        self.assertFalse(watcher.connected)
        self.assertEqual(self.client.dirs, {})
        self.accessor.set_int("general", "count", 4)
        self.assertEqual(len(self.changes), 2)
        # closing twice is harmless
        watcher.close()

    def testTwoWatchers(self):
        first = PrefsWatcher(self.accessor, "general")
        second = PrefsWatcher(self.accessor, "general")
        first.connect("changed", self.onChanged)
        second.connect("changed", self.onChanged)
        self.accessor.set_int("general", "count", 1)
        self.assertEqual(len(self.changes), 2)
        first.close()
        second.close()
        self.assertEqual(self.client.listeners, {})


if __name__ == "__main__":
    unittest.main()
