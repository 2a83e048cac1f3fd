"""Concept synthesis: merges every object of one component into a single
concept record.

Merge rules, over the component's objects in component order:

* `id` -- hash of all member ids, joined in order. The id is therefore stable
  for a given input order, but not for a given *set* of members.
* `type` -- type of the first member.
* `name` -- longest name.
* `validSince` / `validUntil` -- the tightest bounds, i.e. the latest start
  and the earliest end. The original expression is kept.
* `geometry` -- the single geometry, or a `GeometryCollection` of all of them.
* `data.objects` -- each member, with its relations to non-identical objects.
"""

from spacetime.config import get_config
from spacetime import dates

import copy
import hashlib
import shortuuid
import uuid

BASE62 = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz'
_base62 = shortuuid.ShortUUID(alphabet=BASE62)

ID_JOIN = '-'

class ConceptMaker:
    """Synthesizes concepts from components of `graph`.

    Args:
        graph: A :class:`spacetime.graph.Graph` holding
                :class:`spacetime.records.ObjectRecord` nodes.
        identity_type: Relation type used to build components; relations of
                this type are not listed on member objects.
        approximate_years: See :func:`spacetime.dates.fuzzy_range`.
    """
    def __init__(self, graph, identity_type=None, approximate_years=None):
        cfg = get_config()
        if identity_type is None:
            identity_type = cfg['aggregate']['identity_type']
        if approximate_years is None:
            approximate_years = cfg['dates']['approximate_years']
        self.graph = graph
        self.identity_type = identity_type
        self.approximate_years = approximate_years

    def make(self, component):
        """Returns the concept for `component`, or None if none of its ids
        has a node.
        """
        objects = [o for o in map(self.graph.get_node, component)
                if o is not None]
        if not objects:
            return None

        geometry = make_geometry(objects)
        concept = {
                'id': make_id(objects),
                'type': make_type(objects),
                'name': make_name(objects),
                'validSince': make_valid_since(objects,
                    self.approximate_years),
                'validUntil': make_valid_until(objects,
                    self.approximate_years),
                'data': {
                    'objects': self._make_objects(objects),
                },
                'geometry': geometry,
        }
        return {k: v for k, v in concept.items() if v is not None}

    def _make_objects(self, objects):
        # Matches make_geometry: a collection only when several members have one
        is_collection = (len([o for o in objects if o.geometry is not None])
                > 1)
        geometry_index = 0

        r = []
        for o in objects:
            data = copy.deepcopy(o.asdict())
            data.pop('geometry', None)
            data['id'] = o.global_id
            data['dataset'] = o.dataset_id
            if is_collection:
                if o.geometry is not None:
                    data['geometryIndex'] = geometry_index
                    geometry_index += 1
                else:
                    data['geometryIndex'] = -1
            data['relations'] = {
                    'incoming': self._relations(
                        self.graph.get_incoming(o.global_id)),
                    'outgoing': self._relations(
                        self.graph.get_outgoing(o.global_id)),
            }
            r.append(data)
        return r

    def _relations(self, neighbors):
        """Groups neighbors by relation type, as short descriptions of each
        neighbor.
        """
        r = {}
        for n in neighbors or []:
            if n.type == self.identity_type:
                continue
            r.setdefault(n.type, []).append(self._describe(n.id))
        return r

    def _describe(self, id):
        o = self.graph.get_node(id)
        r = {'id': id}
        if o is not None:
            r['type'] = o.type
            r['name'] = o.name
        return {k: v for k, v in r.items() if v is not None}


def make_id(objects):
    ids = ID_JOIN.join(o.global_id for o in objects)
    digest = hashlib.md5(ids.encode('utf-8')).digest()
    return _base62.encode(uuid.UUID(bytes=digest))


def make_type(objects):
    # Members of other types are tolerated; the first one wins.
    return objects[0].type


def make_name(objects):
    names = [o.name for o in objects if isinstance(o.name, str) and o.name]
    if not names:
        return None
    # Stable; earliest of equally long names
    return sorted(names, key=lambda n: -len(n))[0]


def make_valid_since(objects, approximate_years=5):
    """Latest start of validity among `objects`, as that object wrote it."""
    candidates = []
    for o in objects:
        if not o.valid_since:
            continue
        t = dates.earliest(o.valid_since, approximate_years)
        if t is not None:
            candidates.append((t, o.valid_since))
    if not candidates:
        return None
    return max(candidates, key=lambda m: m[0])[1]


def make_valid_until(objects, approximate_years=5):
    """Earliest end of validity among `objects`, as that object wrote it."""
    candidates = []
    for o in objects:
        if not o.valid_until:
            continue
        t = dates.latest(o.valid_until, approximate_years)
        if t is not None:
            candidates.append((t, o.valid_until))
    if not candidates:
        return None
    return min(candidates, key=lambda m: m[0])[1]


def make_geometry(objects):
    geometries = [o.geometry for o in objects if o.geometry is not None]
    if not geometries:
        return None
    if len(geometries) == 1:
        return geometries[0]
    return {
            'type': 'GeometryCollection',
            'geometries': geometries,
    }
