"""The aggregate step: from datasets on disk to one concept per real-world
entity.

.. mermaid::

    graph LR;
    datasets --> ingest
    ingest --> graph
    graph --> components
    components --> concept
    concept --> ndjson
    concept --> db
"""

from spacetime.concept import ConceptMaker
from spacetime.config import get_config
from spacetime.db.connection import get_session
from spacetime.ingest import load_graph
from spacetime.output import DbWriter, NdjsonWriter

import contextlib
import dataclasses
import tqdm

@dataclasses.dataclass
class AggregateStats:
    objects: int = 0
    relations: int = 0
    errors: int = 0
    components: int = 0
    concepts: int = 0


def iter_concepts(graph, identity_type=None, *, approximate_years=None,
        stats=None):
    """Lazily yields the concept of each component of `graph`.

    Args:
        identity_type: Relation type defining components; configured type by
                default.
        stats: Optional :class:`AggregateStats`, updated as concepts are
                produced.
    """
    maker = ConceptMaker(graph, identity_type,
            approximate_years=approximate_years)
    for component in graph.components(maker.identity_type):
        if stats is not None:
            stats.components += 1
        concept = maker.make(component)
        if concept is None:
            continue
        if stats is not None:
            stats.concepts += 1
        yield concept


def aggregate(base_dir, out_path=None, *, to_db=False, exclude=None,
        strict=False, identity_type=None, progress=True):
    """Reads all datasets in `base_dir`, and writes a concept for each set of
    identical objects.

    Args:
        out_path: If set, concepts are written here as NDJSON.
        to_db: If True, concepts are also stored in the configured database.
        exclude: Dataset ids to skip.
        strict: Stop on the first bad record instead of skipping it.
        identity_type: Relation type meaning "same entity".

    Returns:
        :class:`AggregateStats`
    """
    if identity_type is None:
        identity_type = get_config()['aggregate']['identity_type']

    graph, report = load_graph(base_dir, exclude=exclude, strict=strict,
            progress=progress)
    stats = AggregateStats(objects=report.objects, relations=report.relations,
            errors=len(report.errors))

    with contextlib.ExitStack() as stack:
        writers = []
        if out_path is not None:
            writers.append(stack.enter_context(NdjsonWriter(out_path)))
        if to_db:
            sess = stack.enter_context(get_session())
            writers.append(stack.enter_context(DbWriter(sess)))

        concepts = iter_concepts(graph, identity_type, stats=stats)
        if progress:
            concepts = tqdm.tqdm(concepts, desc='Writing concepts')
        for concept in concepts:
            for w in writers:
                w.write(concept)

    print(f'Finished: {stats.concepts} concepts from {stats.objects} objects')
    return stats
