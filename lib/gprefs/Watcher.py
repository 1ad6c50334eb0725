from gi.repository import GObject


class PrefsWatcher(GObject.GObject):
    """ Emits "changed" with the key and its new Value (None when unset) for
        every change in a section, so widgets can follow preferences with
        plain signal handlers """

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_FIRST, None, (str, object)),
    }

    def __init__(self, accessor, section):
        GObject.GObject.__init__(self)
        self.accessor = accessor
        self.section = section
        self.connected = accessor.add_notification(self, section, self.__onNotify)

    def __onNotify(self, client, cnxn_id, entry, listener):
        self.emit("changed", entry.key, entry.value)

    def close(self):
        if self.connected:
            self.accessor.remove_notification(self, self.section)
            self.connected = False
