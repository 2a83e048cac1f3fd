"""spacetime root module. Contains all importable modules.

Clusters objects from many datasets into concepts: one canonical record per
real-world entity. Clusters are defined only by explicit identity relations
(`st:sameAs`) between objects.

Submodules
==========

.. autosummary::
    :toctree: _autosummary

    aggregate
    cli
    concept
    dates
    db
    graph
    ingest

Architecture
============

.. mermaid::

    graph LR;
    ingest --> graph
    graph --> concept
    concept --> output
    output --> db
"""
