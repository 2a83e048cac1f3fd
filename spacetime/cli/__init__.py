"""Main command line interface for spacetime.

This tool consists of several sub-commands; see below modules (or commandline
`--help`) for more information.
"""

import typer

app = typer.Typer()

from .aggregate import app as aggregate_app
app.add_typer(aggregate_app, name='aggregate')

from .db import app as db_app
app.add_typer(db_app, name='db')


if __name__ == '__main__':
    app()
