#! /usr/bin/env python3

"""Script which automatically adds the folder containing this script to
PYTHONPATH and then runs spacetime's CLI.

Note that this file is NOT `spacetime.py` to keep the `spacetime` name
referring to the module.
"""

import os
_path = os.path.dirname(os.path.abspath(__file__))

os.environ['PYTHONPATH'] = _path + ':' + os.environ.get('PYTHONPATH', '')
from spacetime.cli import app
app()
