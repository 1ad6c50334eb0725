################################################################################
# Key path roots                                                               #
################################################################################

APPS_ROOT = "/apps"
SCHEMAS_ROOT = "/schemas"

################################################################################
# Value types                                                                  #
################################################################################

VALUE_INVALID, VALUE_STRING, VALUE_INT, VALUE_FLOAT, VALUE_BOOL, \
    VALUE_SCHEMA, VALUE_LIST = range(7)

reprValueType = ["invalid", "string", "int", "float", "bool", "schema", "list"]

# Types allowed as list elements
LIST_TYPES = (VALUE_STRING, VALUE_INT, VALUE_FLOAT, VALUE_BOOL)

################################################################################
# Directory preloading                                                         #
################################################################################

CLIENT_PRELOAD_NONE, CLIENT_PRELOAD_ONELEVEL, CLIENT_PRELOAD_RECURSIVE = range(3)

################################################################################
# Backends                                                                     #
################################################################################

BACKENDS = ("memory", "ini", "sql", "gconf")
