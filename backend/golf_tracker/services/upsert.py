from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from golf_tracker import db

_CONFLICT_INSERTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


def get_or_create(model, lookup: dict, defaults: dict | None = None):
    """Return ``(row, created)`` for the row matching ``lookup``.

    Absent rows are inserted with conflicts on the lookup columns ignored, then
    re-read, so two writers introducing the same key both resolve to the one
    committed row. Runs inside the caller's transaction and never commits.
    """
    instance = model.query.filter_by(**lookup).first()
    if instance is not None:
        return instance, False

    values = dict(lookup, **(defaults or {}))
    insert = _CONFLICT_INSERTS.get(db.engine.dialect.name)
    if insert is not None:
        stmt = insert(model).values(**values).on_conflict_do_nothing(index_elements=list(lookup))
        created = db.session.execute(stmt).rowcount == 1
    else:
        created = _insert_in_savepoint(model, values)
    return model.query.filter_by(**lookup).one(), created


def _insert_in_savepoint(model, values: dict) -> bool:
    try:
        with db.session.begin_nested():
            db.session.add(model(**values))
    except IntegrityError:
        return False
    return True
