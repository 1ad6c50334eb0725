""" The task of this module is to provide the settings of gprefs itself:
    which application root to build key paths under, which store backend to
    talk to and where the file based backends keep their data.
    Environment variables take precedence over the settings file. """
import os
import locale
from configparser import RawConfigParser

from gprefs.System.Log import log
from gprefs.System.prefix import addUserConfigPrefix, addUserDataPrefix, \
    ensureDirectory

section = "General"
configParser = RawConfigParser(default_section=section)

path = os.environ.get("GPREFS_CONFIG", addUserConfigPrefix("gprefs.conf"))
encoding = locale.getpreferredencoding()


DEFAULTS = {
    "General": {
        "app": "gprefs",
        "backend": "ini",
        "ini_path": addUserConfigPrefix("prefs.ini"),
        "sql_path": addUserDataPrefix("prefs.sqlite"),
        "loglevel": "WARNING",
    },
}

ENVIRON = {
    "app": "GPREFS_APP",
    "backend": "GPREFS_BACKEND",
    "loglevel": "GPREFS_LOGLEVEL",
}


def load(filename=None):
    global path
    if filename is not None:
        path = filename
    if os.path.isfile(path):
        with open(path, encoding=encoding) as f:
            configParser.read_file(f)


def save():
    try:
        with open(ensureDirectory(path), "w", encoding=encoding) as f:
            configParser.write(f)
    except OSError as err:
        log.error(
            "Unable to save settings to '%s' because of error: %s %s" %
            (path, err.__class__.__name__, ", ".join(str(a) for a in err.args)))


def get(key, section=section):
    variable = ENVIRON.get(key)
    if section == "General" and variable in os.environ:
        return os.environ[variable]

    try:
        default = DEFAULTS[section][key]
    except KeyError:
        default = None

    # names and paths stay text, whatever they look like
    if isinstance(default, str):
        return configParser.get(section, key, fallback=default)

    try:
        return configParser.getint(section, key, fallback=default)
    except ValueError:
        pass

    try:
        return configParser.getboolean(section, key, fallback=default)
    except ValueError:
        pass

    try:
        return configParser.getfloat(section, key, fallback=default)
    except ValueError:
        pass

    return configParser.get(section, key, fallback=default)


def set(key, value, section=section):
    if section != configParser.default_section and \
            not configParser.has_section(section):
        configParser.add_section(section)
    configParser.set(section, key, str(value))


def hasKey(key, section=section):
    return configParser.has_option(section, key)


load()
