""" Conversion between enumeration values and the nicknames they are saved
    under in the configuration store.

    Stored nicknames sometimes use '_' where the code uses '-' (or the other
    way round), so lookups by nickname retry with the two swapped. """

import enum

from gprefs.System.Log import log


class EnumNicks:
    def __init__(self, nicks):
        """ nicks maps every enumeration value to its nickname """
        self.nicks = dict(nicks)
        self.values = dict((nick, value) for value, nick in self.nicks.items())

    @classmethod
    def from_enum(cls, enum_class):
        return cls((member.value, nick_of(member.name))
                   for member in enum_class)

    def __repr__(self):
        return "EnumNicks(%r)" % self.nicks


def nick_of(name):
    return name.lower().replace("_", "-")


registry = {}


def register_enum(type_id, table):
    if not isinstance(table, EnumNicks):
        table = EnumNicks(table)
    registry[type_id] = table
    return table


def lookup(type_id):
    if isinstance(type_id, EnumNicks):
        return type_id
    try:
        return registry[type_id]
    except (KeyError, TypeError):
        pass
    if isinstance(type_id, type) and issubclass(type_id, enum.Enum):
        return register_enum(type_id, EnumNicks.from_enum(type_id))
    log.warning("Unknown enumeration type %s" % repr(type_id),
                extra={"task": "enums"})
    return None


def enum_to_nick(type_id, value):
    table = lookup(type_id)
    if table is None:
        return None

    if isinstance(value, enum.Enum):
        value = value.value
    nick = table.nicks.get(value)
    if nick is None:
        # Use the first item in the enum
        nick = table.nicks.get(0)
    return nick


def enum_from_nick(type_id, name, default_value):
    table = lookup(type_id)
    if table is None:
        return default_value

    if name in table.values:
        return table.values[name]

    if "-" in name:
        alt_name = name.replace("-", "_")
    elif "_" in name:
        alt_name = name.replace("_", "-")
    else:
        return default_value

    return table.values.get(alt_name, default_value)
