"""Ingests datasets into a :class:`spacetime.graph.Graph`.

A base directory holds one subdirectory per dataset. A dataset supplies its
records as line-delimited JSON:

.. code-block:: text

    base_dir/
        <dataset>/<dataset>.objects.ndjson
        <dataset>/<dataset>.relations.ndjson

Relations may point into other datasets, so the objects of *every* dataset
are ingested before any relation.

Records which break the graph's structure (duplicate ids, relations to
unknown objects, relations without a type) or which cannot be parsed fail on
their own: they are counted and reported, and ingestion continues. Pass
`strict=True` to stop at the first one instead.
"""

from spacetime.config import get_config
from spacetime.graph import Graph, StructuralError
from spacetime.records import ObjectRecord, RecordError, RelationRecord

import dataclasses
import json
import os
from pathlib import Path
import tqdm
from typing import List

KINDS = ['objects', 'relations']

@dataclasses.dataclass
class Dataset:
    id: str
    dir: Path
    kind: str

    @property
    def filename(self):
        return Path(self.dir) / self.id / f'{self.id}.{self.kind}.ndjson'


@dataclasses.dataclass
class IngestReport:
    '''Counts of what was ingested; `errors` holds one message per record
    which was skipped.
    '''
    objects: int = 0
    relations: int = 0
    errors: List[str] = dataclasses.field(default_factory=list)

    def fail(self, where, exc):
        msg = f'{where}: {exc}'
        self.errors.append(msg)
        print(f'Skipping {msg}')


def find_datasets(base_dir, kind, exclude=(), ignored_dirs=None):
    """Returns each :class:`Dataset` in `base_dir` which has a file for `kind`
    ('objects' or 'relations'), ordered by dataset id.
    """
    if kind not in KINDS:
        raise ValueError(f'Unknown kind {kind!r}, expected one of {KINDS}')
    if ignored_dirs is None:
        ignored_dirs = get_config()['aggregate']['ignored_dirs']

    r = []
    for name in sorted(os.listdir(base_dir)):
        if name in ignored_dirs or name in exclude or name.startswith('.'):
            continue
        if not os.path.isdir(os.path.join(base_dir, name)):
            continue
        ds = Dataset(id=name, dir=Path(base_dir), kind=kind)
        if ds.filename.exists():
            r.append(ds)
    return r


def parse_record(dataset_id, kind, line):
    """Parses one line of a dataset file into an `ObjectRecord` or
    `RelationRecord`. `line` may be raw bytes, which must be UTF-8.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode('utf-8')
        except UnicodeDecodeError as e:
            raise RecordError(f'Bad encoding: {e}')
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise RecordError(f'Bad JSON: {e}')
    if kind == 'objects':
        return ObjectRecord.from_dict(dataset_id, data)
    return RelationRecord.from_dict(dataset_id, data)


def read_records(dataset, report=None):
    """Yields every record of `dataset`.

    Args:
        report: If given, lines which cannot be parsed are recorded here and
                skipped. Otherwise, the first one raises `RecordError`.
    """
    for lineno, line in _lines(dataset):
        try:
            yield parse_record(dataset.id, dataset.kind, line)
        except RecordError as e:
            where = f'{dataset.filename}:{lineno}'
            if report is None:
                raise RecordError(f'{where}: {e}')
            report.fail(where, e)


def add_record(graph, record):
    """Adds a single record to `graph`: objects become nodes, relations become
    edges.
    """
    if isinstance(record, ObjectRecord):
        graph.add_node(record.global_id, record)
    elif isinstance(record, RelationRecord):
        graph.add_edge(record.global_from, record.global_to, record.type)
    else:
        raise TypeError(f'Not a record: {record!r}')


def ingest(graph, records, report=None, *, strict=False):
    """Adds `records` to `graph`, one at a time. Callers must supply the
    objects a relation refers to before the relation itself.

    Returns the :class:`IngestReport`, which is updated in place if given.
    """
    if report is None:
        report = IngestReport()
    for record in records:
        try:
            add_record(graph, record)
        except StructuralError as e:
            if strict:
                raise
            report.fail(record.dataset_id, e)
            continue
        if isinstance(record, ObjectRecord):
            report.objects += 1
        else:
            report.relations += 1
    return report


def load_graph(base_dir, graph=None, *, exclude=None, strict=False,
        progress=True):
    """Ingests every dataset found in `base_dir`.

    Args:
        graph: Graph to add to; a new one by default.
        exclude: Dataset ids to skip; defaults to the configured list.
        strict: If True, raise on the first bad record rather than skipping
                it.
        progress: Show a progress bar per dataset file.

    Returns:
        (graph, report)
    """
    cfg = get_config()['aggregate']
    if graph is None:
        graph = Graph()
    if exclude is None:
        exclude = cfg['exclude']

    report = IngestReport()
    for kind in KINDS:
        for ds in find_datasets(base_dir, kind, exclude, cfg['ignored_dirs']):
            records = read_records(ds, None if strict else report)
            if progress:
                records = tqdm.tqdm(records, desc=f'{ds.id} {kind}')
            ingest(graph, records, report, strict=strict)

    print(f'Ingested {report.objects} objects and {report.relations} '
            f'relations; skipped {len(report.errors)}')
    return graph, report


def _lines(dataset):
    # Raw bytes; parse_record decodes each line on its own
    with open(dataset.filename, 'rb') as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if line:
                yield lineno, line
