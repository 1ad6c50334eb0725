""" Command line access to the preferences store, in the spirit of gconftool.

    python -m gprefs get general/toolbar_style
    python -m gprefs set general/toolbar_style string icons
    python -m gprefs set history/files list-string a.gnc b.gnc
    python -m gprefs list general
    python -m gprefs unset-dir history
"""

import sys
import logging
import argparse
from functools import partial

from gprefs import VERSION
from gprefs import Clients
from gprefs.ConfigAccessor import ConfigAccessor
from gprefs.const import VALUE_STRING, VALUE_INT, VALUE_FLOAT, VALUE_BOOL, \
    VALUE_SCHEMA, VALUE_LIST, BACKENDS, reprValueType
from gprefs.System import conf
from gprefs.System.Log import log, set_level, setup_file_logging

TYPES = {
    "string": VALUE_STRING,
    "int": VALUE_INT,
    "float": VALUE_FLOAT,
    "bool": VALUE_BOOL,
}


def parse_bool(text):
    lowered = text.lower()
    if lowered in ("1", "true", "yes", "on", "t", "y"):
        return True
    if lowered in ("0", "false", "no", "off", "f", "n"):
        return False
    raise ValueError("%s is not a boolean" % repr(text))


PARSERS = {
    VALUE_STRING: str,
    VALUE_INT: int,
    VALUE_FLOAT: float,
    VALUE_BOOL: parse_bool,
}


def format_data(value_type, data):
    if value_type == VALUE_BOOL:
        return "true" if data else "false"
    return str(data)


def format_value(value):
    if value is None:
        return "(unset)"
    if value.type == VALUE_LIST:
        return "[%s]" % ",".join(format_data(value.list_type, item)
                                 for item in value.data)
    if value.type == VALUE_SCHEMA:
        schema = value.data
        text = "<schema of type %s" % reprValueType[schema.type]
        if schema.default is not None:
            text += ", default %s" % format_value(schema.default)
        return text + ">"
    return format_data(value.type, value.data)


def cmd_get(accessor, args):
    result = accessor.get_value(None, args.key)
    if not result.ok:
        return result
    print(format_value(result.value))
    return result


def cmd_set(accessor, args):
    if args.type.startswith("list-"):
        list_type = TYPES[args.type[5:]]
        data = [PARSERS[list_type](item) for item in args.values]
        return accessor.set_list(None, args.key, list_type, data)

    if len(args.values) != 1:
        raise ValueError("set %s takes exactly one value" % args.type)
    value_type = TYPES[args.type]
    data = PARSERS[value_type](args.values[0])
    method = {
        VALUE_STRING: accessor.set_string,
        VALUE_INT: accessor.set_int,
        VALUE_FLOAT: accessor.set_float,
        VALUE_BOOL: accessor.set_bool,
    }[value_type]
    return method(None, args.key, data)


def cmd_unset(accessor, args):
    return accessor.unset(None, args.key)


def cmd_list(accessor, args):
    for entry in accessor.all_entries(args.directory):
        print("%s = %s" % (entry.key, format_value(entry.value)))


def cmd_unset_dir(accessor, args):
    return accessor.unset_dir(args.directory)


def make_parser():
    parser = argparse.ArgumentParser(
        prog="gprefs", description="Read and write application preferences")
    parser.add_argument("--version", action="version", version="%(prog)s " + VERSION)
    parser.add_argument("--app", help="application name, key paths are "
                        "relative to /apps/APP (default: %s)" % conf.get("app"))
    parser.add_argument("--backend", choices=BACKENDS,
                        help="store backend (default: %s)" % conf.get("backend"))
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", action="store_true",
                        help="also log to a file in the user data directory")

    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="print the value of a key")
    get.add_argument("key")
    get.set_defaults(func=cmd_get, writes=False)

    set_ = commands.add_parser("set", help="set the value of a key")
    set_.add_argument("key")
    set_.add_argument("type", choices=sorted(TYPES) +
                      ["list-%s" % name for name in sorted(TYPES)])
    set_.add_argument("values", nargs="+")
    set_.set_defaults(func=cmd_set, writes=True)

    unset = commands.add_parser("unset", help="unset a key")
    unset.add_argument("key")
    unset.set_defaults(func=cmd_unset, writes=True)

    list_ = commands.add_parser("list", help="print every entry of a directory")
    list_.add_argument("directory")
    list_.set_defaults(func=cmd_list, writes=False)

    unset_dir = commands.add_parser("unset-dir",
                                    help="unset every entry of a directory")
    unset_dir.add_argument("directory")
    unset_dir.set_defaults(func=cmd_unset_dir, writes=True)

    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)

    if args.debug:
        log.logger.setLevel(logging.DEBUG)
    else:
        set_level(conf.get("loglevel"))
    if args.log_file:
        setup_file_logging()

    accessor = ConfigAccessor(args.app, partial(Clients.get_default, args.backend))
    try:
        result = args.func(accessor, args)
    except ValueError as err:
        print("gprefs: %s" % err, file=sys.stderr)
        return 2

    if result is not None and not result.ok:
        print("gprefs: failed to %s: %s" % (result.context, result.error.message),
              file=sys.stderr)
        return 1

    if args.writes:
        accessor.suggest_sync()
    return 0


if __name__ == "__main__":
    sys.exit(main())
