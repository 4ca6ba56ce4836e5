# pagebuilder/models/activity_log.py
from pagebuilder.extensions import db
from .base import BaseModel
from sqlalchemy import event


class ActivityLog(BaseModel):
    __tablename__ = "activity_logs"

    __table_args__ = (
        db.Index("ix_activity_entity", "entity_type", "entity_id"),
    )

    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False, index=True)
    entity_id = db.Column(db.String(64), nullable=False)

    payload = db.Column(db.JSON, nullable=False, default=dict)


@event.listens_for(ActivityLog, 'before_update')
@event.listens_for(ActivityLog, 'before_delete')
def prevent_activity_mutation(mapper, connection, target):
    raise RuntimeError("Activity logs are immutable")
