""" Client for a running GConf daemon, through its GObject introspection
    bindings. Needs PyGObject and the GConf-2.0 typelib. """

from contextlib import contextmanager

import gi
gi.require_version("GConf", "2.0")
from gi.repository import GConf, GLib  # noqa: E402

from gprefs.const import VALUE_STRING, VALUE_INT, VALUE_FLOAT, VALUE_BOOL, \
    VALUE_SCHEMA, VALUE_LIST, VALUE_INVALID, CLIENT_PRELOAD_NONE, \
    CLIENT_PRELOAD_ONELEVEL, CLIENT_PRELOAD_RECURSIVE, SCHEMAS_ROOT, \
    LIST_TYPES  # noqa: E402
from gprefs.errors import StoreError  # noqa: E402
from gprefs.keys import is_below  # noqa: E402
from gprefs.Value import Value, Entry, Schema, check  # noqa: E402
from .Client import Client  # noqa: E402

PRELOAD = {
    CLIENT_PRELOAD_NONE: GConf.ClientPreloadType.PRELOAD_NONE,
    CLIENT_PRELOAD_ONELEVEL: GConf.ClientPreloadType.PRELOAD_ONELEVEL,
    CLIENT_PRELOAD_RECURSIVE: GConf.ClientPreloadType.PRELOAD_RECURSIVE,
}

TYPES = {
    VALUE_INVALID: GConf.ValueType.INVALID,
    VALUE_STRING: GConf.ValueType.STRING,
    VALUE_INT: GConf.ValueType.INT,
    VALUE_FLOAT: GConf.ValueType.FLOAT,
    VALUE_BOOL: GConf.ValueType.BOOL,
    VALUE_SCHEMA: GConf.ValueType.SCHEMA,
    VALUE_LIST: GConf.ValueType.LIST,
}
GCONF_TYPES = dict((gtype, value_type) for value_type, gtype in TYPES.items())


@contextmanager
def translated(key=None):
    try:
        yield
    except GLib.Error as err:
        raise StoreError(err.message, key)


def from_gconf(gvalue):
    if gvalue is None:
        return None
    value_type = GCONF_TYPES.get(gvalue.type, VALUE_INVALID)
    if value_type == VALUE_BOOL:
        return Value(VALUE_BOOL, gvalue.get_bool())
    if value_type == VALUE_INT:
        return Value(VALUE_INT, gvalue.get_int())
    if value_type == VALUE_FLOAT:
        return Value(VALUE_FLOAT, gvalue.get_float())
    if value_type == VALUE_STRING:
        return Value(VALUE_STRING, gvalue.get_string())
    if value_type == VALUE_LIST:
        list_type = GCONF_TYPES[gvalue.get_list_type()]
        return Value(VALUE_LIST, [from_gconf(item).data for item in gvalue.get_list()],
                     list_type)
    if value_type == VALUE_SCHEMA:
        return Value(VALUE_SCHEMA, schema_from_gconf(gvalue.get_schema()))
    raise StoreError("Unsupported GConf value type %s" % gvalue.type)


def to_gconf(value):
    gvalue = GConf.Value.new(TYPES[value.type])
    if value.type == VALUE_BOOL:
        gvalue.set_bool(value.data)
    elif value.type == VALUE_INT:
        gvalue.set_int(value.data)
    elif value.type == VALUE_FLOAT:
        gvalue.set_float(value.data)
    elif value.type == VALUE_STRING:
        gvalue.set_string(value.data)
    elif value.type == VALUE_LIST:
        gvalue.set_list_type(TYPES[value.list_type])
        gvalue.set_list([to_gconf(Value(value.list_type, item)) for item in value.data])
    return gvalue


def schema_from_gconf(gschema):
    list_type = GCONF_TYPES.get(gschema.get_list_type())
    return Schema(GCONF_TYPES.get(gschema.get_type(), VALUE_INVALID),
                  list_type if list_type != VALUE_INVALID else None,
                  from_gconf(gschema.get_default_value()),
                  gschema.get_short_desc() or "",
                  gschema.get_long_desc() or "",
                  gschema.get_owner() or "")


class GConfClient(Client):
    def __init__(self, client=None):
        Client.__init__(self)
        self.client = client if client is not None else GConf.Client.get_default()
        self.cnxn_ids = set()

    def add_dir(self, path, preload=CLIENT_PRELOAD_NONE):
        with translated(path):
            self.client.add_dir(path, PRELOAD[preload])

    def remove_dir(self, path):
        with translated(path):
            self.client.remove_dir(path)

    def notify_add(self, namespace, func, user_data=None):
        def onNotify(gclient, cnxn_id, gentry, data):
            entry = Entry(gentry.get_key(), from_gconf(gentry.get_value()))
            func(self, cnxn_id, entry, user_data)

        with translated(namespace):
            cnxn_id = self.client.notify_add(namespace, onNotify, None)
        self.cnxn_ids.add(cnxn_id)
        return cnxn_id

    def notify_remove(self, cnxn_id):
        with translated():
            self.client.notify_remove(cnxn_id)
        if cnxn_id in self.cnxn_ids:
            self.cnxn_ids.remove(cnxn_id)
            return True
        return False

    def get(self, key):
        with translated(key):
            return from_gconf(self.client.get(key))

    def get_bool(self, key):
        with translated(key):
            return self.client.get_bool(key)

    def get_int(self, key):
        with translated(key):
            return self.client.get_int(key)

    def get_float(self, key):
        with translated(key):
            return self.client.get_float(key)

    def get_string(self, key):
        with translated(key):
            return self.client.get_string(key)

    def get_list(self, key, list_type):
        if list_type not in LIST_TYPES:
            raise StoreError("Bad list element type %s" % repr(list_type), key)
        value = self.get(key)
        if value is None:
            return []
        if value.type != VALUE_LIST or value.list_type != list_type:
            raise StoreError("Expected list for key %s" % key, key)
        return value.data

    def get_schema(self, key):
        if not is_below(key, SCHEMAS_ROOT):
            key = SCHEMAS_ROOT + key
        with translated(key):
            gschema = self.client.get_schema(key)
        return schema_from_gconf(gschema) if gschema is not None else None

    def all_entries(self, directory):
        with translated(directory):
            gentries = self.client.all_entries(directory)
        return [Entry(gentry.get_key(), from_gconf(gentry.get_value()))
                for gentry in gentries]

    def set(self, key, value):
        with translated(key):
            self.client.set(key, to_gconf(value))

    def set_bool(self, key, data):
        with translated(key):
            self.client.set_bool(key, data)

    def set_int(self, key, data):
        with translated(key):
            self.client.set_int(key, data)

    def set_float(self, key, data):
        with translated(key):
            self.client.set_float(key, data)

    def set_string(self, key, data):
        with translated(key):
            self.client.set_string(key, data)

    def set_list(self, key, list_type, data):
        value = Value(VALUE_LIST, list(data), list_type)
        try:
            check(value)
        except TypeError as err:
            raise StoreError("Can't set %s: %s" % (key, err), key)
        self.set(key, value)

    def set_schema(self, key, schema):
        if not is_below(key, SCHEMAS_ROOT):
            key = SCHEMAS_ROOT + key
        gschema = GConf.Schema.new()
        gschema.set_type(TYPES[schema.type])
        if schema.list_type is not None:
            gschema.set_list_type(TYPES[schema.list_type])
        if schema.default is not None:
            gschema.set_default_value(to_gconf(schema.default))
        gschema.set_short_desc(schema.short_desc)
        gschema.set_long_desc(schema.long_desc)
        gschema.set_owner(schema.owner)
        with translated(key):
            self.client.set_schema(key, gschema)

    def unset(self, key):
        with translated(key):
            self.client.unset(key)

    def suggest_sync(self):
        with translated():
            self.client.suggest_sync()
