"""Build concepts from a directory of datasets.
"""

from pathlib import Path
import typer
from typing import List, Optional

app = typer.Typer()

@app.command()
def run(base_dir: Path = typer.Argument(..., exists=True, file_okay=False),
        out: Optional[Path] = typer.Option(None, help='NDJSON output file.'),
        db: bool = typer.Option(False, help='Store concepts in the database.'),
        exclude: List[str] = typer.Option([], help='Dataset id to skip.'),
        strict: bool = typer.Option(False,
            help='Stop at the first bad record.'),
        identity_type: Optional[str] = typer.Option(None)):
    """Ingests every dataset in BASE_DIR and writes one concept per cluster of
    identical objects.
    """
    from spacetime.aggregate import aggregate
    from spacetime.config import get_config

    if out is None and not db:
        raise typer.BadParameter('Nothing to write; pass --out and/or --db')
    if not exclude:
        exclude = get_config()['aggregate']['exclude']
    aggregate(base_dir, out, to_db=db, exclude=exclude, strict=strict,
            identity_type=identity_type)


@app.command()
def components(base_dir: Path = typer.Argument(..., exists=True,
            file_okay=False),
        top: int = typer.Option(10, help='Number of largest components.'),
        identity_type: Optional[str] = typer.Option(None)):
    """Prints statistics on the clusters found in BASE_DIR, without writing
    concepts.
    """
    from spacetime.config import get_config
    from spacetime.ingest import load_graph

    import collections

    if identity_type is None:
        identity_type = get_config()['aggregate']['identity_type']

    graph, _report = load_graph(base_dir)
    comps = sorted(graph.components(identity_type), key=lambda m: -len(m))
    sizes = collections.Counter(len(c) for c in comps)
    print(f'{len(comps)} components over {len(graph)} objects')
    for size, count in sorted(sizes.items()):
        print(f'  size {size}: {count}')
    for c in comps[:top]:
        print(f'{len(c)}: {", ".join(c)}')


if __name__ == '__main__':
    app()
