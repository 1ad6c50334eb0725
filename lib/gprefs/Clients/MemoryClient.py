from gprefs.keys import dirname
from .Client import Client


class MemoryClient(Client):
    """ A store living in a dictionary, nothing is persisted """

    def __init__(self):
        Client.__init__(self)
        self.values = {}

    def _load(self, key):
        return self.values.get(key)

    def _store(self, key, value):
        self.values[key] = value

    def _delete(self, key):
        return self.values.pop(key, None) is not None

    def _keys(self, directory):
        return [key for key in self.values if dirname(key) == directory]
