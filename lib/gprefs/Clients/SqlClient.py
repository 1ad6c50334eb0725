import time

from sqlalchemy import create_engine, MetaData, Table, Column, String, \
    SmallInteger, JSON, event, select, insert, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from gprefs.errors import StoreError
from gprefs.keys import dirname
from gprefs.Value import to_dict, from_dict
from gprefs.System.Log import log
from .Client import Client


def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    context._query_start_time = time.time()
    log.debug("Start Query:\n%s" % statement, extra={"task": "SQL"})
    log.debug("Parameters:\n%r" % (parameters,), extra={"task": "SQL"})


def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    total = time.time() - context._query_start_time
    log.debug("Query Complete!", extra={"task": "SQL"})
    log.debug("Total Time: %.02fms" % (total * 1000), extra={"task": "SQL"})


def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    # www.sqlite.org/pragma.html
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


engines = {}


def get_engine(path=None, echo=False):
    if path is None:
        # In memory database, every engine is a database of its own
        url = "sqlite://"
        engine = create_engine(url, connect_args={'check_same_thread': False},
                               echo=echo, poolclass=StaticPool)
    else:
        url = "sqlite:///%s" % path
        if url in engines:
            return engines[url]
        engine = create_engine(url, echo=echo)
        event.listen(engine, "connect", set_sqlite_pragma)
        engines[url] = engine

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    event.listen(engine, "after_cursor_execute", after_cursor_execute)
    metadata.create_all(engine)
    return engine


metadata = MetaData()

entries = Table(
    'entries', metadata,
    Column('key', String(1024), primary_key=True),
    Column('directory', String(1024), index=True, nullable=False),
    Column('type', SmallInteger, nullable=False),
    Column('list_type', SmallInteger),
    Column('data', JSON)
)


class SqlClient(Client):
    """ A store kept in an sqlite database, every write is committed at once """

    def __init__(self, path=None, echo=False):
        Client.__init__(self)
        self.path = path
        try:
            self.engine = get_engine(path, echo)
        except SQLAlchemyError as err:
            raise StoreError("Unable to open %s: %s" % (path or "memory database", err))

    def _load(self, key):
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(entries.c.type, entries.c.list_type, entries.c.data)
                    .where(entries.c.key == key)).first()
        except SQLAlchemyError as err:
            raise StoreError("Failed to read key %s: %s" % (key, err), key)
        if row is None:
            return None
        return from_dict({"type": row.type, "list_type": row.list_type, "data": row.data})

    def _store(self, key, value):
        try:
            with self.engine.begin() as conn:
                conn.execute(delete(entries).where(entries.c.key == key))
                conn.execute(insert(entries).values(
                    key=key,
                    directory=dirname(key),
                    type=value.type,
                    list_type=value.list_type,
                    data=to_dict(value)["data"]))
        except SQLAlchemyError as err:
            raise StoreError("Failed to write key %s: %s" % (key, err), key)

    def _delete(self, key):
        try:
            with self.engine.begin() as conn:
                removed = conn.execute(
                    delete(entries).where(entries.c.key == key)).rowcount > 0
        except SQLAlchemyError as err:
            raise StoreError("Failed to unset key %s: %s" % (key, err), key)
        return removed

    def _keys(self, directory):
        try:
            with self.engine.connect() as conn:
                return list(conn.execute(
                    select(entries.c.key)
                    .where(entries.c.directory == directory)).scalars())
        except SQLAlchemyError as err:
            raise StoreError("Failed to list directory %s: %s" % (directory, err),
                             directory)
