"""Database storage for synthesized concepts.

Concepts can be kept in any database SQLAlchemy supports; the configured url
(`db.url`, or env `SPACETIME_DB_URL`) defaults to a local SQLite file.

```python
>>> from spacetime.db.connection import get_session
>>> import spacetime.db.schema as sch
>>> import sqlalchemy as sa
>>> with get_session() as sess:
...     sess.execute(sa.select(sch.Concept).limit(1)).scalar()
<spacetime.db.schema.Concept 2ncMt4o...: hg:Place Bussum>
```
"""
