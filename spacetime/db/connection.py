
from spacetime.config import get_config
import spacetime.db.schema as sch

import sqlalchemy as sa
import sqlalchemy.orm
import threading

_lock = threading.Lock()
_engine = None
_sessionmaker = None
def get_engine(*, url=None, kwargs=None):
    """Returns the sqlalchemy.Engine instance, creating it (and the schema) on
    first use.

    Args:
        url: Database url; the configured url by default. Only honored when
                the engine is created.
        kwargs: Passed to `sqlalchemy.create_engine`.
    """
    global _engine, _sessionmaker

    if kwargs is None:
        kwargs = {}

    with _lock:
        if _engine is None:
            if url is None:
                url = get_config()['db']['url']
            _engine = sa.create_engine(url, future=True, **kwargs)
            sch.Base.metadata.create_all(_engine)
            _sessionmaker = sqlalchemy.orm.sessionmaker(_engine)
        elif url is not None:
            assert str(_engine.url) == str(sa.engine.make_url(url)), (
                    f'Engine already created for {_engine.url}')
    return _engine


def get_session():
    """Returns a sqlalchemy.orm.Session object, to be used in a context manager.

    The session is committed if no error is raised.
    """
    if _engine is None:
        # Ensure engine exists
        get_engine()
    return _sessionmaker.begin()


def dispose():
    """Drops the engine, so that the next use connects anew."""
    global _engine, _sessionmaker
    with _lock:
        if _engine is not None:
            _engine.dispose()
        _engine = None
        _sessionmaker = None
