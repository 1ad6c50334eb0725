import unittest
from unittest import mock

try:
    from gi.repository import GLib
    from gprefs.Clients import GConfClient as gconf_module
except (ImportError, ValueError):
    gconf_module = None

from gprefs.const import VALUE_STRING, VALUE_INT, CLIENT_PRELOAD_ONELEVEL
from gprefs.errors import StoreError
from gprefs.Value import Value


@unittest.skipIf(gconf_module is None, "GConf bindings are not available")
class GConfClientTestCase(unittest.TestCase):
    def setUp(self):
        self.gclient = mock.Mock()
        self.client = gconf_module.GConfClient(self.gclient)

    def testPlainValues(self):
        self.gclient.get_int.return_value = 7
        self.assertEqual(self.client.get_int("/apps/gnucash/general/count"), 7)
        self.gclient.get_int.assert_called_with("/apps/gnucash/general/count")

        self.client.set_string("/apps/gnucash/general/name", "Tux")
        self.gclient.set_string.assert_called_with("/apps/gnucash/general/name", "Tux")

    def testErrorsAreTranslated(self):
        self.gclient.get_bool.side_effect = GLib.Error("Type mismatch")
        try:
            self.client.get_bool("/apps/gnucash/general/flag")
        except StoreError as err:
            self.assertEqual(err.message, "Type mismatch")
            self.assertEqual(err.key, "/apps/gnucash/general/flag")
        else:
            self.fail("GLib.Error wasn't translated")

    def testBadList(self):
        self.assertRaises(StoreError, self.client.set_list,
                          "/apps/gnucash/history/files", VALUE_INT, ["a.gnc"])
        self.assertFalse(self.gclient.set.called)

    def testBadListElementType(self):
        self.assertRaises(StoreError, self.client.get_list,
                          "/apps/gnucash/history/files", 99)
        self.assertFalse(self.gclient.get.called)

    def testNotifyRemoveErrorsAreTranslated(self):
        self.gclient.notify_remove.side_effect = GLib.Error("No such connection")
        self.assertRaises(StoreError, self.client.notify_remove, 3)

    def testSchemaKeys(self):
        self.gclient.get_schema.return_value = None
        self.assertEqual(self.client.get_schema("/apps/gnucash/general/count"), None)
        self.gclient.get_schema.assert_called_with(
            "/schemas/apps/gnucash/general/count")

    def testDirectories(self):
        self.client.add_dir("/apps/gnucash/general", CLIENT_PRELOAD_ONELEVEL)
        self.gclient.add_dir.assert_called_with(
            "/apps/gnucash/general",
            gconf_module.PRELOAD[CLIENT_PRELOAD_ONELEVEL])

        self.gclient.add_dir.side_effect = GLib.Error("Bad key or directory name")
        self.assertRaises(StoreError, self.client.add_dir, "bad", CLIENT_PRELOAD_ONELEVEL)

    def testNotifications(self):
        calls = []

        def callback(client, cnxn_id, entry, user_data):
            calls.append((client, cnxn_id, entry, user_data))

        self.gclient.notify_add.return_value = 12
        cnxn_id = self.client.notify_add("/apps/gnucash/general", callback, "data")
        self.assertEqual(cnxn_id, 12)

        onNotify = self.gclient.notify_add.call_args[0][1]
        gentry = mock.Mock()
        gentry.get_key.return_value = "/apps/gnucash/general/name"
        gentry.get_value.return_value = None
        onNotify(self.gclient, 12, gentry, None)
        self.assertEqual(len(calls), 1)
        client, cnxn_id, entry, user_data = calls[0]
        self.assertIs(client, self.client)
        self.assertEqual(entry.key, "/apps/gnucash/general/name")
        self.assertEqual(entry.value, None)
        self.assertEqual(user_data, "data")

        self.assertTrue(self.client.notify_remove(12))
        self.assertFalse(self.client.notify_remove(12))

    def testSetThroughGConfValues(self):
        with mock.patch.object(gconf_module, "to_gconf") as to_gconf:
            self.client.set("/apps/gnucash/general/name", Value(VALUE_STRING, "Tux"))
        to_gconf.assert_called_with(Value(VALUE_STRING, "Tux"))
        self.gclient.set.assert_called_with("/apps/gnucash/general/name",
                                            to_gconf.return_value)


if __name__ == "__main__":
    unittest.main()
