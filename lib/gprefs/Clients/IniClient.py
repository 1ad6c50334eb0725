""" A store kept in an ini file.

    Every directory is a section of the file and every key an option of its
    directory's section. Values are written as json, so their types survive
    the round trip. The file is written by suggest_sync() and, if anything
    changed since, when the interpreter exits. """

import os
import json
import atexit
from configparser import RawConfigParser, Error as ConfigParserError

from gprefs.errors import StoreError
from gprefs.keys import dirname, basename
from gprefs.Value import to_dict, from_dict
from gprefs.System.Log import log
from .Client import Client


class IniClient(Client):
    def __init__(self, path, encoding="utf-8"):
        Client.__init__(self)
        self.path = path
        self.encoding = encoding
        self.dirty = False

        self.configParser = RawConfigParser()
        # keys are case sensitive
        self.configParser.optionxform = str
        if os.path.isfile(path):
            try:
                with open(path, encoding=encoding) as f:
                    self.configParser.read_file(f)
            except (OSError, ConfigParserError) as err:
                raise StoreError("Unable to read %s: %s" % (path, err))
        atexit.register(self.__write_if_dirty)

    def _load(self, key):
        section, option = dirname(key), basename(key)
        if not self.configParser.has_option(section, option):
            return None
        try:
            return from_dict(json.loads(self.configParser.get(section, option)))
        except (ValueError, KeyError, TypeError) as err:
            raise StoreError("Corrupt value for key %s: %s" % (key, err), key)

    def _store(self, key, value):
        section, option = dirname(key), basename(key)
        if not self.configParser.has_section(section):
            self.configParser.add_section(section)
        self.configParser.set(section, option, json.dumps(to_dict(value)))
        self.dirty = True

    def _delete(self, key):
        section, option = dirname(key), basename(key)
        if not self.configParser.has_section(section):
            return False
        removed = self.configParser.remove_option(section, option)
        if not self.configParser.options(section):
            self.configParser.remove_section(section)
        self.dirty = self.dirty or removed
        return removed

    def _keys(self, directory):
        if not self.configParser.has_section(directory):
            return []
        prefix = "" if directory == "/" else directory
        return ["%s/%s" % (prefix, option)
                for option in self.configParser.options(directory)]

    def _sync(self):
        try:
            with open(self.path, "w", encoding=self.encoding) as f:
                self.configParser.write(f)
        except OSError as err:
            raise StoreError(
                "Unable to save configuration to '%s' because of error: %s %s" %
                (self.path, err.__class__.__name__,
                 ", ".join(str(a) for a in err.args)))
        self.dirty = False

    def __write_if_dirty(self):
        if not self.dirty:
            return
        try:
            self._sync()
        except StoreError as err:
            log.error(err.message, extra={"task": "store"})
