from contextlib import contextmanager

from flask import current_app

from pagebuilder.extensions import db


@contextmanager
def transactional():
    """
    Commit the session when the block succeeds; roll back and re-raise otherwise.

    Blocks do not nest: an inner block would commit the outer one's work.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.debug("Session rolled back")
        raise
