from collections import namedtuple

from gprefs.System.Log import log


class StoreError(Exception):
    """ A failure reported by the configuration store """

    def __init__(self, message, key=None):
        Exception.__init__(self, message)
        self.message = message
        self.key = key

    def __str__(self):
        return self.message


class Result(namedtuple("Result", "value error context")):
    """ The outcome of an accessor call: the value read (or the zero value of
        its type on failure) and the store error, if there was one.

        context describes the attempted operation, e.g. "load key /apps/x/y",
        and is only used for logging. """

    __slots__ = ()

    def __new__(cls, value=None, error=None, context=""):
        return super().__new__(cls, value, error, context)

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.value

    def value_or_log(self):
        if self.error is not None:
            log.warning("Failed to %s: %s" % (self.context, self.error.message),
                        extra={"task": "store"})
        return self.value
