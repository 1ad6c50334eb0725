from gprefs.const import VALUE_STRING, VALUE_INT, VALUE_FLOAT, VALUE_BOOL, \
    VALUE_SCHEMA, VALUE_LIST, SCHEMAS_ROOT, CLIENT_PRELOAD_NONE, \
    CLIENT_PRELOAD_ONELEVEL, CLIENT_PRELOAD_RECURSIVE, reprValueType, \
    LIST_TYPES
from gprefs.errors import StoreError
from gprefs.keys import valid_key, is_below
from gprefs.Value import Value, Entry, Schema, check, describe
from gprefs.System.Log import log


class Client:
    """ A handle to a configuration store.

        Keys are absolute slash delimited paths. Typed getters return the
        zero value of their type for keys which are neither set nor have a
        schema default, and raise StoreError when the stored value has
        another type. Every failing operation raises StoreError.

        Changes are only reported for keys inside a directory added with
        add_dir(), to the callbacks registered with notify_add() on a
        namespace containing the key. Callbacks are called synchronously as
        func(client, cnxn_id, entry, user_data).

        Subclasses provide the storage: _load(), _store(), _delete(),
        _keys() and, when they have something to flush, _sync(). """

    def __init__(self):
        self.refcount = 1
        self.dirs = {}
        self.listeners = {}
        self.next_cnxn_id = 1

    def __repr__(self):
        return "<%s object at %s (refcount=%d)>" % \
            (self.__class__.__name__, id(self), self.refcount)

    ############################################################################
    # Storage, implemented by subclasses                                      #
    ############################################################################

    def _load(self, key):
        """ The Value stored under key, or None """
        raise NotImplementedError

    def _store(self, key, value):
        raise NotImplementedError

    def _delete(self, key):
        """ Remove key, returning whether it was set """
        raise NotImplementedError

    def _keys(self, directory):
        """ The keys set directly in directory """
        raise NotImplementedError

    def _sync(self):
        pass

    ############################################################################
    # References                                                               #
    ############################################################################

    def ref(self):
        self.refcount += 1
        return self

    def unref(self):
        if self.refcount <= 0:
            log.warning("%s unreferenced too many times" % repr(self),
                        extra={"task": "store"})
            return
        self.refcount -= 1

    ############################################################################
    # Directories and notifications                                            #
    ############################################################################

    def _check_key(self, key):
        if not isinstance(key, str) or not valid_key(key):
            raise StoreError('Bad key or directory name: "%s"' % key, key)

    def add_dir(self, path, preload=CLIENT_PRELOAD_NONE):
        self._check_key(path)
        if preload not in (CLIENT_PRELOAD_NONE, CLIENT_PRELOAD_ONELEVEL,
                           CLIENT_PRELOAD_RECURSIVE):
            raise StoreError("Bad preload type %s" % repr(preload), path)
        self.dirs[path] = self.dirs.get(path, 0) + 1

    def remove_dir(self, path):
        count = self.dirs.get(path, 0)
        if count == 0:
            log.debug("Directory %s was not being watched" % path,
                      extra={"task": "store"})
        elif count == 1:
            del self.dirs[path]
        else:
            self.dirs[path] = count - 1

    def watched(self, key):
        return any(is_below(key, directory) for directory in self.dirs)

    def notify_add(self, namespace, func, user_data=None):
        self._check_key(namespace)
        if not self.watched(namespace):
            raise StoreError(
                "Not adding notify for %s, it isn't inside a watched directory"
                % namespace, namespace)
        cnxn_id = self.next_cnxn_id
        self.next_cnxn_id += 1
        self.listeners[cnxn_id] = (namespace, func, user_data)
        return cnxn_id

    def notify_remove(self, cnxn_id):
        return self.listeners.pop(cnxn_id, None) is not None

    def _notify(self, key, value):
        if not self.watched(key):
            return
        entry = Entry(key, value)
        for cnxn_id, (namespace, func, user_data) in list(self.listeners.items()):
            if is_below(key, namespace):
                func(self, cnxn_id, entry, user_data)

    ############################################################################
    # Reading                                                                  #
    ############################################################################

    def get(self, key):
        """ The Value of key, its schema default when unset, or None """
        self._check_key(key)
        value = self._load(key)
        if value is None and not is_below(key, SCHEMAS_ROOT):
            schema = self._load(SCHEMAS_ROOT + key)
            if schema is not None and schema.type == VALUE_SCHEMA:
                value = schema.data.default
        return value

    def _get_typed(self, key, value_type, zero):
        value = self.get(key)
        if value is None:
            return zero
        if value.type != value_type:
            raise StoreError("Expected %s, got %s for key %s" %
                             (reprValueType[value_type], describe(value), key), key)
        return value.data

    def get_bool(self, key):
        return self._get_typed(key, VALUE_BOOL, False)

    def get_int(self, key):
        return self._get_typed(key, VALUE_INT, 0)

    def get_float(self, key):
        return float(self._get_typed(key, VALUE_FLOAT, 0.0))

    def get_string(self, key):
        return self._get_typed(key, VALUE_STRING, None)

    def get_list(self, key, list_type):
        if list_type not in LIST_TYPES:
            raise StoreError("Bad list element type %s" % repr(list_type), key)
        value = self.get(key)
        if value is None:
            return []
        if value.type != VALUE_LIST or value.list_type != list_type:
            raise StoreError("Expected list of %s, got %s for key %s" %
                             (reprValueType[list_type], describe(value), key), key)
        return list(value.data)

    def get_schema(self, key):
        self._check_key(key)
        if not is_below(key, SCHEMAS_ROOT):
            key = SCHEMAS_ROOT + key
        value = self._load(key)
        if value is None:
            return None
        if value.type != VALUE_SCHEMA:
            raise StoreError("Expected schema, got %s for key %s" %
                             (describe(value), key), key)
        return value.data

    def all_entries(self, directory):
        self._check_key(directory)
        return [Entry(key, self._load(key))
                for key in sorted(self._keys(directory))]

    ############################################################################
    # Writing                                                                  #
    ############################################################################

    def set(self, key, value):
        self._check_key(key)
        try:
            check(value)
        except TypeError as err:
            raise StoreError("Can't set %s: %s" % (key, err), key)
        self._store(key, value)
        self._notify(key, value)

    def set_bool(self, key, data):
        self.set(key, Value(VALUE_BOOL, data))

    def set_int(self, key, data):
        self.set(key, Value(VALUE_INT, data))

    def set_float(self, key, data):
        self.set(key, Value(VALUE_FLOAT, data))

    def set_string(self, key, data):
        self.set(key, Value(VALUE_STRING, data))

    def set_list(self, key, list_type, data):
        if not isinstance(data, (list, tuple)):
            raise StoreError("Can't set %s: %s is not a list" % (key, repr(data)), key)
        self.set(key, Value(VALUE_LIST, list(data), list_type))

    def set_schema(self, key, schema):
        self._check_key(key)
        if not is_below(key, SCHEMAS_ROOT):
            key = SCHEMAS_ROOT + key
        if not isinstance(schema, Schema):
            raise StoreError("Can't set %s: %s is not a schema" % (key, repr(schema)), key)
        if schema.default is not None:
            try:
                check(schema.default)
            except TypeError as err:
                raise StoreError("Bad default for schema %s: %s" % (key, err), key)
        self.set(key, Value(VALUE_SCHEMA, schema))

    def unset(self, key):
        self._check_key(key)
        if self._delete(key):
            self._notify(key, None)

    def suggest_sync(self):
        self._sync()
