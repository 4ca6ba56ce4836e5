from datetime import datetime, timezone
import uuid
from pagebuilder.extensions import db


def new_uuid():
    return str(uuid.uuid4())


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """String UUID primary key plus created/updated timestamps, set per row."""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=new_uuid, index=True)
    created_at = db.Column(db.DateTime, default=utc_now, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now, index=True)
