"""Manage the concept database.
"""

import typer
from typing import Optional

app = typer.Typer()

@app.command()
def reset(yes: bool = typer.Option(False, '--yes',
            help='Do not ask for confirmation.')):
    """Deletes the entire concept database and recreates an empty schema.
    """
    from spacetime.config import get_config
    import spacetime.db.connection
    import sqlalchemy as sa
    from sqlalchemy_utils import database_exists, drop_database, create_database

    url = sa.engine.make_url(get_config()['db']['url'])
    spacetime.db.connection.dispose()

    if database_exists(url):
        print(f'Considering reset of: {url.render_as_string()}')
        if not yes:
            sure = input('Are you sure? This will purge everything. (y/N) ')
            if sure.lower() != 'y':
                print('Aborting.')
                return

        print('Resetting.')
        drop_database(url)
    else:
        print('Creating.')

    create_database(url)
    # Creates the schema
    spacetime.db.connection.get_engine()


@app.command()
def show(limit: int = typer.Option(20),
        type: Optional[str] = typer.Option(None,
            help='Only concepts of this type.')):
    """Lists stored concepts.
    """
    from spacetime.db.connection import get_session
    import spacetime.db.schema as sch
    import sqlalchemy as sa

    with get_session() as sess:
        query = sa.select(sch.Concept).order_by(sch.Concept.id)
        if type is not None:
            query = query.where(sch.Concept.type == type)
        total = sess.execute(sa.select(sa.func.count()).select_from(
                query.subquery())).scalar()
        for c in sess.execute(query.limit(limit)).scalars():
            n = len(c.data.get('objects', []))
            print(f'{c.id} {c.type} {c.name!r} ({n} objects)')
        print(f'{total} concepts')


if __name__ == '__main__':
    app()
