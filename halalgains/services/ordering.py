from sqlalchemy import func

from halalgains.extensions import db


def next_order(column, *criteria):
    """max(column) + 1 over the matching rows, 0 when there are none."""
    current = db.session.query(func.max(column)).filter(*criteria).scalar()
    return 0 if current is None else current + 1


def next_number(column, *criteria):
    """Like next_order but numbering starts at 1 (weeks, days)."""
    current = db.session.query(func.max(column)).filter(*criteria).scalar()
    return 1 if current is None else current + 1
