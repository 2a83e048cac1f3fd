"""Schema for stored concepts.
"""

import sqlalchemy as sa
from sqlalchemy.orm import registry
import sqlalchemy_json as sj

mapper_registry = registry()
Base = mapper_registry.generate_base()

DbJson = lambda: sj.mutable_json_type(dbtype=sa.JSON, nested=True)

class Concept(Base):
    '''A concept, as produced by :class:`spacetime.concept.ConceptMaker`.

    Stored concepts are replaced, not amended, when the same id is written
    again.
    '''
    __tablename__ = 'concept'
    def __repr__(self):
        cls = self.__class__
        return f'<{cls.__module__}.{cls.__name__} {self.id}: {self.type} {self.name}>'

    id = sa.Column(sa.String(32), primary_key=True)
    type = sa.Column(sa.String, index=True)
    name = sa.Column(sa.String)

    # Raw date expressions, as written by the dataset which supplied them;
    # JSON so that a year given as a number comes back as a number
    valid_since = sa.Column(sa.JSON(none_as_null=True))
    valid_until = sa.Column(sa.JSON(none_as_null=True))

    geometry = sa.Column(DbJson())
    # {'objects': [...]}
    data = sa.Column(DbJson(), nullable=False, default=lambda: {})

    @classmethod
    def from_concept(cls, concept):
        return cls(id=concept['id'], type=concept.get('type'),
                name=concept.get('name'),
                valid_since=concept.get('validSince'),
                valid_until=concept.get('validUntil'),
                geometry=concept.get('geometry'),
                data=concept['data'])

    def asdict(self):
        """Returns the concept in the same shape `ConceptMaker` produces."""
        r = {
                'id': self.id,
                'type': self.type,
                'name': self.name,
                'validSince': self.valid_since,
                'validUntil': self.valid_until,
                'data': _plain(self.data),
                'geometry': _plain(self.geometry),
        }
        return {k: v for k, v in r.items() if v is not None}


def _plain(r):
    # Recursively remove sqlalchemy_json wrapper magic
    if isinstance(r, dict):
        return {k: _plain(v) for k, v in r.items()}
    elif isinstance(r, list):
        return [_plain(v) for v in r]
    return r
