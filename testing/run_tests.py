import sys
import unittest

modules_to_test = (
    "test_keys",
    "test_enums",
    "test_clients",
    "test_accessor",
    "test_conf",
    "test_cli",
    "test_watcher",
    "test_gconf",
)


def suite():
    tests = unittest.TestSuite()
    for module in map(__import__, modules_to_test):
        tests.addTest(unittest.defaultTestLoader.loadTestsFromModule(module))
    return tests


if __name__ == "__main__":
    ret = unittest.TextTestRunner(verbosity=2).run(suite())
    if ret.wasSuccessful():
        sys.exit(0)
    sys.exit(1)
