from gprefs.const import BACKENDS
from gprefs.System import conf
from gprefs.System.Log import log
from gprefs.System.prefix import ensureDirectory

clients = {}


def create_client(backend):
    if backend == "memory":
        from .MemoryClient import MemoryClient
        return MemoryClient()
    if backend == "ini":
        from .IniClient import IniClient
        return IniClient(ensureDirectory(conf.get("ini_path")))
    if backend == "sql":
        from .SqlClient import SqlClient
        return SqlClient(ensureDirectory(conf.get("sql_path")))
    if backend == "gconf":
        from .GConfClient import GConfClient
        return GConfClient()
    raise ValueError("Unknown configuration backend %s, expected one of %s" %
                     (repr(backend), ", ".join(BACKENDS)))


def get_default(backend=None):
    """ The process wide client of backend (by default the configured one),
        with an extra reference the caller has to unref() """
    if backend is None:
        backend = conf.get("backend")
    if backend not in clients:
        clients[backend] = create_client(backend)
        log.debug("Created %s client" % backend, extra={"task": "store"})
    return clients[backend].ref()
