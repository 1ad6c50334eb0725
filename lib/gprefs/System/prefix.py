"""
This module provides some basic functions for locating gprefs files in
user space
"""

import os

################################################################################
# Locate files in user space                                                   #
################################################################################


def __get_user_dir(xdg_env_var, fallback_dir_path):
    return os.environ.get(
        xdg_env_var, os.path.join(os.path.expanduser("~"), fallback_dir_path)
    )


def get_user_data_dir():
    return __get_user_dir("XDG_DATA_HOME", ".local/share")


def get_user_config_dir():
    return __get_user_dir("XDG_CONFIG_HOME", ".config")


gprefs = "gprefs"


def getUserDataPrefix():
    return os.path.join(get_user_data_dir(), gprefs)


def addUserDataPrefix(subpath):
    return os.path.join(getUserDataPrefix(), subpath)


def getUserConfigPrefix():
    return os.path.join(get_user_config_dir(), gprefs)


def addUserConfigPrefix(subpath):
    return os.path.join(getUserConfigPrefix(), subpath)


def ensureDirectory(path):
    """Create the directory holding path, if needed, and return path"""
    directory = os.path.dirname(path)
    if directory and not os.path.isdir(directory):
        os.makedirs(directory, mode=0o700)
    return path
