from collections import namedtuple

from gprefs.const import VALUE_STRING, VALUE_INT, VALUE_FLOAT, VALUE_BOOL, \
    VALUE_SCHEMA, VALUE_LIST, LIST_TYPES, reprValueType

Value = namedtuple("Value", "type data list_type")
Value.__new__.__defaults__ = (None, )

Entry = namedtuple("Entry", "key value")

Schema = namedtuple("Schema", "type list_type default short_desc long_desc owner")
Schema.__new__.__defaults__ = (None, None, "", "", "")

PYTHON_TYPES = {
    VALUE_STRING: (str, ),
    VALUE_INT: (int, ),
    VALUE_FLOAT: (float, int),
    VALUE_BOOL: (bool, ),
}


def matches(value_type, data):
    """ Whether data is acceptable as a plain value of value_type """
    types = PYTHON_TYPES.get(value_type)
    if types is None:
        return False
    if value_type in (VALUE_INT, VALUE_FLOAT) and isinstance(data, bool):
        return False
    return isinstance(data, types)


def describe(value):
    if value is None:
        return "unset"
    if value.type == VALUE_LIST:
        return "list of %s" % reprValueType[value.list_type]
    return reprValueType[value.type]


################################################################################
# Serialization to json compatible structures, used by the file backends      #
################################################################################


def to_dict(value):
    if value.type == VALUE_SCHEMA:
        schema = value.data
        data = schema._asdict()
        if schema.default is not None:
            data["default"] = to_dict(schema.default)
    else:
        data = value.data
    return {"type": value.type, "list_type": value.list_type, "data": data}


def from_dict(dic):
    value_type = dic["type"]
    data = dic["data"]
    if value_type == VALUE_SCHEMA:
        if data.get("default") is not None:
            data = dict(data, default=from_dict(data["default"]))
        data = Schema(**data)
    elif value_type == VALUE_LIST:
        data = list(data)
    return Value(value_type, data, dic.get("list_type"))


def check(value):
    """ Raise TypeError unless value is a consistent Value """
    if value.type == VALUE_LIST:
        if value.list_type not in LIST_TYPES:
            raise TypeError("Bad list element type %s" % repr(value.list_type))
        for item in value.data:
            if not matches(value.list_type, item):
                raise TypeError("List element %s is not of type %s" %
                                (repr(item), reprValueType[value.list_type]))
    elif value.type == VALUE_SCHEMA:
        if not isinstance(value.data, Schema):
            raise TypeError("Schema value must hold a Schema")
    elif value.type not in PYTHON_TYPES:
        raise TypeError("Bad value type %s" % repr(value.type))
    elif not matches(value.type, value.data):
        raise TypeError("%s is not of type %s" %
                        (repr(value.data), reprValueType[value.type]))
