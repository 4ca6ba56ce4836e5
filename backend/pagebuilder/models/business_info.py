from pagebuilder.extensions import db
from .base import BaseModel

class BusinessInfo(BaseModel):
    __tablename__ = "business_info"

    name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(120), nullable=True)
    state = db.Column(db.String(60), nullable=True)
    zip = db.Column(db.String(20), nullable=True)
    phone = db.Column(db.String(40), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    hours = db.Column(db.Text, nullable=True)  # JSON object, free-form day labels
    social_media = db.Column(db.Text, nullable=True)  # JSON object, platform -> url
    map_embed = db.Column(db.Text, nullable=True)
