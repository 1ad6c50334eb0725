from collections import namedtuple

from gprefs import keys
from gprefs import Clients
from gprefs.const import CLIENT_PRELOAD_ONELEVEL
from gprefs.errors import StoreError, Result
from gprefs.System import conf
from gprefs.System.Log import log

Registration = namedtuple("Registration", "client path cnxn_id listener")


class ConfigAccessor:
    """ Typed access to the preferences of one application.

        Entries are addressed by a section and a name, which are turned
        into key paths below /apps/<app>/ (see gprefs.keys). Reads and writes
        return a Result holding the store's error, if any, next to the value
        read, or the zero value of its type when the store failed. Call
        result.unwrap() to raise the error, or result.value_or_log() to log
        it and go on with the zero value.

        The store client is taken from client_factory on first use and kept.
        Every notification registration takes a reference of its own from
        client_factory, and drops it when the registration is removed. """

    def __init__(self, app=None, client_factory=None):
        self.app = app if app is not None else conf.get("app")
        self.client_factory = client_factory if client_factory is not None \
            else Clients.get_default
        self._client = None
        self.registrations = {}

    def __repr__(self):
        return "<ConfigAccessor object at %s (app=%s)>" % (id(self), self.app)

    @property
    def client(self):
        if self._client is None:
            self._client = self.client_factory()
        return self._client

    ############################################################################
    # Key paths                                                                #
    ############################################################################

    def section_name(self, name):
        return keys.section_name(name, self.app)

    def schema_section_name(self, name):
        return keys.schema_section_name(name, self.app)

    def make_key(self, section, name):
        return keys.make_key(section, name, self.app)

    def make_schema_key(self, section, name):
        return keys.make_schema_key(section, name, self.app)

    ############################################################################
    # Typed values                                                             #
    ############################################################################

    def __load(self, method, zero, section, name, *args):
        key = self.make_key(section, name)
        context = "load key %s" % key
        try:
            return Result(getattr(self.client, method)(key, *args), None, context)
        except StoreError as err:
            return Result(zero, err, context)

    def __save(self, method, section, name, *args):
        key = self.make_key(section, name)
        context = "save key %s" % key
        try:
            getattr(self.client, method)(key, *args)
        except StoreError as err:
            return Result(None, err, context)
        return Result(None, None, context)

    def get_value(self, section, name):
        """ The Value of an entry whatever its type, None when unset """
        return self.__load("get", None, section, name)

    def get_bool(self, section, name):
        return self.__load("get_bool", False, section, name)

    def get_bool_no_error(self, section, name):
        return self.get_bool(section, name).value_or_log()

    def set_bool(self, section, name, value):
        return self.__save("set_bool", section, name, value)

    def get_int(self, section, name):
        return self.__load("get_int", 0, section, name)

    def set_int(self, section, name, value):
        return self.__save("set_int", section, name, value)

    def get_float(self, section, name):
        return self.__load("get_float", 0.0, section, name)

    def set_float(self, section, name, value):
        return self.__save("set_float", section, name, value)

    def get_string(self, section, name):
        return self.__load("get_string", None, section, name)

    def set_string(self, section, name, value):
        return self.__save("set_string", section, name, value)

    def get_list(self, section, name, list_type):
        return self.__load("get_list", [], section, name, list_type)

    def set_list(self, section, name, list_type, value):
        return self.__save("set_list", section, name, list_type, value)

    def get_schema(self, section, name):
        return self.__load("get_schema", None, section, name)

    def set_schema(self, section, name, schema):
        return self.__save("set_schema", section, name, schema)

    def unset(self, section, name):
        key = self.make_key(section, name)
        context = "unset key %s" % key
        try:
            self.client.unset(key)
        except StoreError as err:
            return Result(None, err, context)
        return Result(None, None, context)

    ############################################################################
    # Directories                                                              #
    ############################################################################

    def all_entries(self, name):
        path = self.section_name(name)
        try:
            return self.client.all_entries(path)
        except StoreError as err:
            log.warning("Failed to get list of all keys in %s: %s" %
                        (path, err.message), extra={"task": "store"})
            return []

    def unset_dir(self, section):
        """ Unset every key directly in section. Stops at the first key
            which can't be unset, and returns its error """
        dir_key = self.make_key(section, None)
        try:
            entries = self.client.all_entries(dir_key)
        except StoreError as err:
            return Result(None, err, "get directory entries for key %s" % dir_key)

        for entry in entries:
            try:
                self.client.unset(entry.key)
            except StoreError as err:
                return Result(None, err, "unset key %s" % entry.key)
        return Result(None, None, "unset directory %s" % dir_key)

    def suggest_sync(self):
        try:
            self.client.suggest_sync()
        except StoreError as err:
            log.warning("Failed to sync the configuration store: %s" % err.message,
                        extra={"task": "store"})

    def schemas_found(self, section, name):
        """ Whether a schema is installed for the given key. Used to tell a
            missing schema installation from keys which were never set """
        key = self.make_schema_key(section, name)
        try:
            return self.client.get_schema(key) is not None
        except StoreError as err:
            log.debug("No schema for %s: %s" % (key, err.message),
                      extra={"task": "store"})
            return False

    ############################################################################
    # Notifications                                                            #
    ############################################################################

    def __watch(self, path, callback, user_data):
        """ Watch path and subscribe callback to its changes.
            Returns a (client, cnxn_id) pair, or None if that failed """
        client = self.client_factory()

        try:
            client.add_dir(path, CLIENT_PRELOAD_ONELEVEL)
        except StoreError as err:
            log.warning("Failed to add %s to the watched directories: %s" %
                        (path, err.message), extra={"task": "notify"})
            client.unref()
            return None

        try:
            cnxn_id = client.notify_add(path, callback, user_data)
        except StoreError as err:
            log.warning("Failed to set notify for %s: %s" % (path, err.message),
                        extra={"task": "notify"})
            try:
                client.remove_dir(path)
            except StoreError as err:
                log.warning("Failed to remove %s from the watched directories: %s" %
                            (path, err.message), extra={"task": "notify"})
            client.unref()
            return None

        return client, cnxn_id

    def __unwatch(self, client, path, cnxn_id):
        """ Cancel cnxn_id and stop watching path, logging failures.
            Returns whether the client still knew cnxn_id """
        try:
            found = client.notify_remove(cnxn_id)
        except StoreError as err:
            log.warning("Failed to remove notify %s for %s: %s" %
                        (cnxn_id, path, err.message), extra={"task": "notify"})
            found = False

        try:
            client.remove_dir(path)
        except StoreError as err:
            log.warning("Failed to remove %s from the watched directories: %s" %
                        (path, err.message), extra={"task": "notify"})
        return found

    def add_notification(self, listener, section, callback):
        """ Call callback(client, cnxn_id, entry, listener) whenever an entry
            in section changes, until remove_notification(listener, section) """
        assert section is not None, "add_notification(): section is None"
        assert callable(callback), "add_notification(): callback not callable"

        tag = (id(listener), section)
        if tag in self.registrations:
            self.remove_notification(listener, section)

        path = self.section_name(section)
        watch = self.__watch(path, callback, listener)
        if watch is None:
            return False

        client, cnxn_id = watch
        self.registrations[tag] = Registration(client, path, cnxn_id, listener)
        return True

    def add_anon_notification(self, section, callback, user_data=None):
        """ Like add_notification(), but the returned connection id (0 on
            failure) is all the caller gets to remove the notification with """
        assert section is not None, "add_anon_notification(): section is None"
        assert callable(callback), "add_anon_notification(): callback not callable"

        watch = self.__watch(self.section_name(section), callback, user_data)
        if watch is None:
            return 0
        return watch[1]

    def remove_notification(self, listener, section):
        assert section is not None, "remove_notification(): section is None"

        registration = self.registrations.pop((id(listener), section), None)
        if registration is None:
            return False

        client = registration.client
        try:
            self.__unwatch(client, registration.path, registration.cnxn_id)
        finally:
            client.unref()
        return True

    def remove_anon_notification(self, section, cnxn_id):
        """ The caller has to make sure cnxn_id was added for section """
        assert section is not None, "remove_anon_notification(): section is None"

        path = self.section_name(section)
        client = self.client_factory()
        try:
            if self.__unwatch(client, path, cnxn_id):
                # the reference add_anon_notification() took
                client.unref()
        finally:
            client.unref()
