
from spacetime.aggregate import aggregate, iter_concepts
from spacetime.graph import Graph
from spacetime.records import ObjectRecord

import json

SAME = 'st:sameAs'

def _write(base, dataset, kind, rows):
    d = base / dataset
    d.mkdir(exist_ok=True)
    (d / f'{dataset}.{kind}.ndjson').write_text(
            ''.join(json.dumps(r) + '\n' for r in rows))


def _datasets(base):
    _write(base, 'tgn', 'objects', [
            {'id': 1, 'type': 'hg:Place', 'name': 'Bussum',
                'validSince': '1817', 'geometry': {'type': 'Point',
                    'coordinates': [5.16, 52.27]}},
            {'id': 2, 'type': 'hg:Province', 'name': 'Noord-Holland'},
    ])
    _write(base, 'tgn', 'relations', [
            {'from': 1, 'to': 2, 'type': 'hg:liesIn'},
    ])
    _write(base, 'geonames', 'objects', [
            {'id': 7, 'type': 'hg:Place', 'name': 'Gemeente Bussum',
                'validSince': '18xx', 'geometry': {'type': 'Point',
                    'coordinates': [5.17, 52.28]}},
    ])
    _write(base, 'geonames', 'relations', [
            {'from': 7, 'to': 'tgn/1', 'type': SAME},
            {'from': 7, 'to': 'tgn/404', 'type': SAME},
    ])


def test_iter_concepts_lookup_miss():
    g = Graph()
    g.add_node('a/1', ObjectRecord('a', '1'))
    # Components over ids without data yield nothing
    g.add_node('a/2', None)
    concepts = list(iter_concepts(g, SAME))
    assert [c['data']['objects'][0]['id'] for c in concepts] == ['a/1']


def test_aggregate(tmp_path):
    base = tmp_path / 'transform'
    base.mkdir()
    _datasets(base)
    out = tmp_path / 'aggregate' / 'concepts.ndjson'

    stats = aggregate(base, out, progress=False)
    assert stats.objects == 3
    assert stats.relations == 2
    assert stats.errors == 1
    assert stats.components == 2
    assert stats.concepts == 2

    concepts = [json.loads(l) for l in out.read_text().splitlines()]
    bussum, province = concepts
    assert bussum['name'] == 'Gemeente Bussum'
    assert bussum['validSince'] == '1817'
    assert bussum['geometry']['type'] == 'GeometryCollection'
    assert [o['id'] for o in bussum['data']['objects']] == ['geonames/7',
            'tgn/1']
    assert bussum['data']['objects'][1]['relations']['outgoing'] == {
            'hg:liesIn': [{'id': 'tgn/2', 'type': 'hg:Province',
                'name': 'Noord-Holland'}]}
    assert province['data']['objects'][0]['relations']['incoming'] == {
            'hg:liesIn': [{'id': 'tgn/1', 'type': 'hg:Place',
                'name': 'Bussum'}]}

    # Reruns give identical output
    first = out.read_bytes()
    aggregate(base, out, progress=False)
    assert out.read_bytes() == first
