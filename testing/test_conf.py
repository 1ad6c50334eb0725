import os
import shutil
import logging
import tempfile
import unittest
from configparser import RawConfigParser
from unittest import mock

from gprefs import Clients
from gprefs.ConfigAccessor import ConfigAccessor
from gprefs.Clients.MemoryClient import MemoryClient
from gprefs.Clients.IniClient import IniClient
from gprefs.System import conf, Log


class ConfTestCase(unittest.TestCase):
    def setUp(self):
        self.added = []

    def tearDown(self):
        for key in self.added:
            conf.configParser.remove_option(conf.section, key)

    def set(self, key, value):
        self.added.append(key)
        conf.set(key, value)

    def testDefaults(self):
        with mock.patch.dict(os.environ, clear=False):
            for variable in conf.ENVIRON.values():
                os.environ.pop(variable, None)
            if not conf.hasKey("app"):
                self.assertEqual(conf.get("app"), "gprefs")
            self.assertEqual(conf.get("no such setting"), None)

    def testEnvironmentWins(self):
        self.set("backend", "sql")
        self.assertEqual(conf.get("backend"), "sql")
        with mock.patch.dict(os.environ, {"GPREFS_BACKEND": "memory"}):
            self.assertEqual(conf.get("backend"), "memory")
        self.assertEqual(conf.get("backend"), "sql")

    def testTypedValues(self):
        self.set("test_int", 5)
        self.set("test_bool", True)
        self.set("test_float", 0.5)
        self.set("test_string", "gnucash")
        self.assertEqual(conf.get("test_int"), 5)
        self.assertIs(conf.get("test_bool"), True)
        self.assertEqual(conf.get("test_float"), 0.5)
        self.assertEqual(conf.get("test_string"), "gnucash")
        self.assertTrue(conf.hasKey("test_int"))
        self.assertFalse(conf.hasKey("test_missing"))

    def testTextSettingsStayText(self):
        with mock.patch.dict(os.environ, clear=False):
            for variable in conf.ENVIRON.values():
                os.environ.pop(variable, None)
            self.set("app", "on")
            self.assertEqual(conf.get("app"), "on")
            accessor = ConfigAccessor(client_factory=MemoryClient)
            self.assertEqual(accessor.make_key("general", "x"), "/apps/on/general/x")
            self.set("backend", "1")
            self.assertEqual(conf.get("backend"), "1")

    def testOtherSection(self):
        conf.set("width", 640, "Window")
        try:
            self.assertEqual(conf.get("width", "Window"), 640)
            self.assertEqual(conf.get("height", "Window"), None)
            self.assertEqual(conf.get("width", "NoSuchSection"), None)
        finally:
            conf.configParser.remove_section("Window")

    def testSaveAndLoad(self):
        tmpdir = tempfile.mkdtemp()
        old_path = conf.path
        try:
            conf.path = os.path.join(tmpdir, "sub", "gprefs.conf")
            self.set("test_saved", 42)
            conf.save()

            parser = RawConfigParser(default_section="General")
            parser.read(conf.path)
            self.assertEqual(parser.getint("General", "test_saved"), 42)

            other = os.path.join(tmpdir, "other.conf")
            with open(other, "w") as f:
                f.write("[General]\ntest_loaded = yes\n")
            self.added.append("test_loaded")
            conf.load(other)
            self.assertEqual(conf.path, other)
            self.assertIs(conf.get("test_loaded"), True)
        finally:
            conf.path = old_path
            shutil.rmtree(tmpdir)

    def testSaveFailureIsLogged(self):
        tmpdir = tempfile.mkdtemp()
        old_path = conf.path
        try:
            # a directory can't be opened for writing
            conf.path = tmpdir
            with self.assertLogs("gprefs", level="ERROR") as cm:
                conf.save()
            self.assertIn("Unable to save settings", cm.output[0])
        finally:
            conf.path = old_path
            shutil.rmtree(tmpdir)


class LogTestCase(unittest.TestCase):
    def setUp(self):
        self.level = Log.logger.level

    def tearDown(self):
        Log.logger.setLevel(self.level)

    def testSetLevel(self):
        Log.set_level("debug")
        self.assertEqual(Log.logger.level, logging.DEBUG)
        Log.set_level("ERROR")
        self.assertEqual(Log.logger.level, logging.ERROR)

    def testUnknownLevel(self):
        Log.set_level("INFO")
        with self.assertLogs("gprefs", level="WARNING") as cm:
            Log.set_level("chatty")
        self.assertIn("Unknown log level 'chatty'", cm.output[0])
        self.assertEqual(Log.logger.level, logging.INFO)

    def testTaskFormatter(self):
        formatter = Log.TaskFormatter(fmt="%(task)s %(levelname)s: %(message)s")
        record = logging.LogRecord("gprefs", logging.WARNING, __file__, 1,
                                   "key %s is %s", ("/apps/x", "bad"), None)
        self.assertEqual(formatter.format(record), "unknown WARNING: key /apps/x is bad")
        record.task = "store"
        self.assertEqual(formatter.format(record), "store WARNING: key /apps/x is bad")

    def testAdapterTask(self):
        with self.assertLogs("gprefs", level="WARNING") as cm:
            Log.log.warning("plain")
            Log.log.warning("tagged", extra={"task": "notify"})
        self.assertEqual(cm.records[0].task, "Default")
        self.assertEqual(cm.records[1].task, "notify")

    def testFileLogging(self):
        tmpdir = tempfile.mkdtemp()
        try:
            with mock.patch.dict(os.environ, {"XDG_DATA_HOME": tmpdir}):
                handler = Log.setup_file_logging()
                self.assertIs(Log.setup_file_logging(), handler)
            self.assertTrue(handler.baseFilename.startswith(
                os.path.join(tmpdir, "gprefs")))
            self.assertTrue(handler.baseFilename.endswith(".log"))
            self.assertIn(handler, Log.logger.handlers)
        finally:
            Log.logger.removeHandler(handler)
            handler.close()
            Log.file_handler = None
            shutil.rmtree(tmpdir)


class DefaultClientTestCase(unittest.TestCase):
    def setUp(self):
        self.saved = dict(Clients.clients)
        Clients.clients.clear()

    def tearDown(self):
        Clients.clients.clear()
        Clients.clients.update(self.saved)

    def testMemory(self):
        client = Clients.get_default("memory")
        self.assertIsInstance(client, MemoryClient)
        self.assertEqual(client.refcount, 2)
        self.assertIs(Clients.get_default("memory"), client)
        self.assertEqual(client.refcount, 3)

    def testConfiguredBackend(self):
        with mock.patch.dict(os.environ, {"GPREFS_BACKEND": "memory"}):
            self.assertIsInstance(Clients.get_default(), MemoryClient)

    def testIni(self):
        tmpdir = tempfile.mkdtemp()
        path = os.path.join(tmpdir, "sub", "prefs.ini")
        conf.set("ini_path", path)
        try:
            client = Clients.get_default("ini")
            self.assertIsInstance(client, IniClient)
            self.assertEqual(client.path, path)
            self.assertTrue(os.path.isdir(os.path.join(tmpdir, "sub")))
        finally:
            conf.configParser.remove_option(conf.section, "ini_path")
            shutil.rmtree(tmpdir)

    def testUnknownBackend(self):
        self.assertRaises(ValueError, Clients.get_default, "registry")
        self.assertEqual(Clients.clients, {})


if __name__ == "__main__":
    unittest.main()
