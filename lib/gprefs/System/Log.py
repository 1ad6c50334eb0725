import sys
import time
import logging

from .prefix import addUserDataPrefix, ensureDirectory

logformat = "%(asctime)s.%(msecs)03d %(task)s %(levelname)s: %(message)s"


class TaskFormatter(logging.Formatter):
    def __init__(self, fmt=None, datefmt=None):
        logging.Formatter.__init__(self, fmt, datefmt)

    def format(self, record):
        if not hasattr(record, "task"):
            record.task = "unknown"

        record.message = record.getMessage()
        record.asctime = self.formatTime(record, self.datefmt)

        s = self._fmt % record.__dict__

        if record.exc_info:
            # Cache the traceback text to avoid converting it multiple times
            # (it's constant anyway)
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            if s[-1:] != "\n":
                s = s + "\n"
            s = s + record.exc_text

        return s


formatter = TaskFormatter(fmt=logformat, datefmt='%H:%M:%S')

stream_handler = logging.StreamHandler(sys.stderr)
stream_handler.setFormatter(formatter)

logger = logging.getLogger("gprefs")
logger.addHandler(stream_handler)


class ExtraAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        kwargs["extra"] = kwargs.get("extra", {"task": "Default"})
        return msg, kwargs


log = ExtraAdapter(logger, {})

file_handler = None


def setup_file_logging():
    """ Also write log records to a dated file in the user data directory """
    global file_handler
    if file_handler is not None:
        return file_handler

    newName = time.strftime("%Y-%m-%d_%H-%M-%S") + ".log"
    # delay=True argument prevents creating empty .log files
    file_handler = logging.FileHandler(
        ensureDirectory(addUserDataPrefix(newName)),
        delay=True,
        encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    return file_handler


def set_level(name):
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        log.warning("Unknown log level %s, keeping %s" %
                    (repr(name), logging.getLevelName(logger.level)))
        return
    logger.setLevel(level)
