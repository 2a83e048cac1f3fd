
from spacetime.cli import app
import spacetime.db.connection

import json
import pytest
from typer.testing import CliRunner

runner = CliRunner()

def _write(base, dataset, kind, rows):
    d = base / dataset
    d.mkdir(parents=True, exist_ok=True)
    (d / f'{dataset}.{kind}.ndjson').write_text(
            ''.join(json.dumps(r) + '\n' for r in rows))


@pytest.fixture
def base(tmp_path):
    b = tmp_path / 'transform'
    _write(b, 'a', 'objects', [{'id': i, 'type': 't', 'name': f'n{i}'}
            for i in range(4)])
    _write(b, 'a', 'relations', [
            {'from': 0, 'to': 1, 'type': 'st:sameAs'},
            {'from': 2, 'to': 1, 'type': 'st:sameAs'},
    ])
    _write(b, 'b', 'objects', [{'id': 0, 'type': 't'}])
    _write(b, 'b', 'relations', [{'from': 0, 'to': 'a/3', 'type': 'rel'}])
    return b


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    url = f'sqlite:///{tmp_path / "concepts.db"}'
    monkeypatch.setenv('SPACETIME_DB_URL', url)
    spacetime.db.connection.dispose()
    yield url
    spacetime.db.connection.dispose()


def test_help():
    result = runner.invoke(app, ['--help'])
    assert result.exit_code == 0
    assert 'aggregate' in result.output


def test_run(base, tmp_path):
    out = tmp_path / 'concepts.ndjson'
    result = runner.invoke(app, ['aggregate', 'run', str(base), '--out',
            str(out)])
    assert result.exit_code == 0, result.output
    lines = out.read_text().splitlines()
    # {a/0, a/1, a/2}, {a/3}, {b/0}
    assert len(lines) == 3
    assert 'Finished: 3 concepts from 5 objects' in result.output


def test_run_exclude(base, tmp_path):
    out = tmp_path / 'concepts.ndjson'
    result = runner.invoke(app, ['aggregate', 'run', str(base), '--out',
            str(out), '--exclude', 'b'])
    assert result.exit_code == 0, result.output
    assert len(out.read_text().splitlines()) == 2


def test_run_strict(base, tmp_path):
    _write(base, 'c', 'relations', [{'from': 0, 'to': 1}])
    _write(base, 'c', 'objects', [{'id': 0}, {'id': 1}])
    out = tmp_path / 'concepts.ndjson'
    result = runner.invoke(app, ['aggregate', 'run', str(base), '--out',
            str(out)])
    assert result.exit_code == 0, result.output
    assert 'Skipping c: Edge type not set' in result.output

    result = runner.invoke(app, ['aggregate', 'run', str(base), '--out',
            str(out), '--strict'])
    assert result.exit_code != 0


def test_run_needs_output(base):
    result = runner.invoke(app, ['aggregate', 'run', str(base)])
    assert result.exit_code != 0


def test_components(base):
    result = runner.invoke(app, ['aggregate', 'components', str(base)])
    assert result.exit_code == 0, result.output
    assert '3 components over 5 objects' in result.output
    assert '3: a/0, a/2, a/1' in result.output


def test_db(base, db_url):
    result = runner.invoke(app, ['db', 'reset', '--yes'])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ['aggregate', 'run', str(base), '--db'])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ['db', 'show', '--limit', '1'])
    assert result.exit_code == 0, result.output
    assert '3 concepts' in result.output
    assert len([l for l in result.output.splitlines() if 'objects)' in l]) == 1
