""" Key path construction.

    Relative names are placed below the application root, /apps/<app>/, and
    their schemas below /schemas/apps/<app>/. Names starting with a slash
    are taken as absolute and left alone. """

import re

from gprefs.const import APPS_ROOT, SCHEMAS_ROOT

# GConf's key alphabet, one or more components
key_re = re.compile(r"(/[A-Za-z0-9_.-]+)+")


def section_name(name, app):
    if name.startswith("/"):
        return name
    return "%s/%s/%s" % (APPS_ROOT, app, name)


def schema_section_name(name, app):
    if is_below(name, SCHEMAS_ROOT):
        return name
    return SCHEMAS_ROOT + section_name(name, app)


def make_key(section, name, app):
    assert section is not None or name is not None, \
        "make_key(): section and name can't both be None"

    if section is None:
        return section_name(name, app)

    if name is None:
        return section_name(section, app)

    if section.startswith("/"):
        if name.startswith("/"):
            return section + name
        return "/".join((section, name))

    return "/".join((section_name(section, app), name))


def make_schema_key(section, name, app):
    return SCHEMAS_ROOT + make_key(section, name, app)


def dirname(key):
    """ The directory part of an absolute key, "/" for top level keys """
    head = key.rsplit("/", 1)[0]
    return head or "/"


def basename(key):
    return key.rsplit("/", 1)[-1]


def is_below(key, directory):
    """ Whether key is directory itself or lies somewhere under it """
    if directory == "/":
        return key.startswith("/")
    return key == directory or key.startswith(directory + "/")


def valid_key(key):
    return key == "/" or key_re.fullmatch(key) is not None
