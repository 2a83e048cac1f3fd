"""Records read from datasets.

Each dataset supplies two kinds of line-delimited records:

.. mermaid::

    flowchart LR
    object[object<br/><div style='text-align:left'>+id<br/>+type<br/>+name<br/>+geometry<br/>+validSince<br/>+validUntil</div>]
    object -- "relation, type" --> object

Known object fields are explicit attributes; anything else a dataset
supplies is kept, untouched, in `ObjectRecord.extra`.
"""

from spacetime.ids import expand

import dataclasses
from typing import Any, Dict, Optional

class RecordError(ValueError):
    """Raised when a record cannot be interpreted."""


# Wire name -> attribute name, in output order
_OBJECT_FIELDS = {
        'id': 'id',
        'type': 'type',
        'name': 'name',
        'validSince': 'valid_since',
        'validUntil': 'valid_until',
        'geometry': 'geometry',
}


@dataclasses.dataclass
class ObjectRecord:
    '''One dataset's description of a real-world entity.'''
    dataset_id: str
    id: str
    type: Optional[str] = None
    name: Optional[str] = None
    # Raw, dataset-native date expressions; see `spacetime.dates`
    valid_since: Any = None
    valid_until: Any = None
    # GeoJSON geometry object
    geometry: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def global_id(self):
        return expand(self.dataset_id, self.id)

    @classmethod
    def from_dict(cls, dataset_id, data):
        if not isinstance(data, dict):
            raise RecordError(f'Object must be a JSON object, not {data!r}')
        if data.get('id') is None:
            raise RecordError(f'Object without id in dataset {dataset_id}')
        kwargs = {attr: data[key] for key, attr in _OBJECT_FIELDS.items()
                if key in data}
        extra = {k: v for k, v in data.items() if k not in _OBJECT_FIELDS}
        return cls(dataset_id=dataset_id, extra=extra, **kwargs)

    def asdict(self):
        """Returns the wire representation of this record; unset fields are
        omitted.
        """
        r = {}
        for key, attr in _OBJECT_FIELDS.items():
            v = getattr(self, attr)
            if v is not None:
                r[key] = v
        for k, v in self.extra.items():
            r.setdefault(k, v)
        return r


@dataclasses.dataclass
class RelationRecord:
    '''A directed, typed edge between two objects, possibly across datasets.
    '''
    dataset_id: str
    from_id: str
    to_id: str
    type: Optional[str] = None

    @property
    def global_from(self):
        return expand(self.dataset_id, self.from_id)

    @property
    def global_to(self):
        return expand(self.dataset_id, self.to_id)

    @classmethod
    def from_dict(cls, dataset_id, data):
        if not isinstance(data, dict):
            raise RecordError(f'Relation must be a JSON object, not {data!r}')
        for k in ['from', 'to']:
            if data.get(k) is None:
                raise RecordError(f'Relation without `{k}` in dataset '
                        f'{dataset_id}: {data}')
        # A missing type is a structural problem; the graph reports it.
        return cls(dataset_id=dataset_id, from_id=data['from'],
                to_id=data['to'], type=data.get('type'))

    def asdict(self):
        return {'from': self.from_id, 'to': self.to_id, 'type': self.type}
