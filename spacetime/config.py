"""Methods for dealing with spacetime-wide configuration.
"""

import copy
import os

DEFAULT = {
        'aggregate': {
            # Relation type meaning "same real-world thing"; drives clustering
            'identity_type': 'st:sameAs',
            # Dataset ids which are never read
            'exclude': [],
            'ignored_dirs': ['node_modules', '.git'],
        },
        'dates': {
            # Margin applied on both sides of approximate dates, e.g. ~1850
            'approximate_years': 5,
        },
        'db': {
            'url': 'sqlite:///spacetime.db',
        },
}

def get_config():
    """Retrieves the configuration object.

    Returns a copy of the defaults each time, so that callers may adjust it
    for a single run. `SPACETIME_DB_URL` overrides the database location.
    """
    cfg = copy.deepcopy(DEFAULT)
    db_url = os.environ.get('SPACETIME_DB_URL')
    if db_url:
        cfg['db']['url'] = db_url
    return cfg
