"""Writers for synthesized concepts. Each writer takes one concept at a time,
so that a run never holds all concepts in memory.
"""

import spacetime.db.schema as sch

import json
from pathlib import Path

class NdjsonWriter:
    """Writes concepts to `path` as line-delimited JSON. Use as a context
    manager.

    Output is canonical (sorted keys, no extra whitespace), so that an
    unchanged input gives a byte-identical file.
    """
    def __init__(self, path):
        self.path = Path(path)
        self.count = 0
        self._f = None

    def __enter__(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._f = open(self.path, 'w', encoding='utf-8')
        return self

    def __exit__(self, *exc):
        self._f.close()
        self._f = None

    def write(self, concept):
        self._f.write(dumps(concept))
        self._f.write('\n')
        self.count += 1


class DbWriter:
    """Stores concepts through an open SQLAlchemy session; see
    :mod:`spacetime.db.connection`.
    """
    def __init__(self, session, *, flush_every=10000):
        self.session = session
        self.flush_every = flush_every
        self.count = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.session.flush()

    def write(self, concept):
        self.session.merge(sch.Concept.from_concept(concept))
        self.count += 1
        if self.count % self.flush_every == 0:
            self.session.flush()


def dumps(concept):
    return json.dumps(concept, sort_keys=True, ensure_ascii=False,
            separators=(',', ':'))
