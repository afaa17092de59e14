from app.extensions import db
from datetime import datetime
import uuid


class Campaign(db.Model):
    __tablename__ = 'campaigns'

    """
    Campaign Model - a named collection of tracked video links.
    Created once and never renamed or deleted from the API.
    """

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    links = db.relationship('CampaignLink', backref='campaign', cascade='all, delete-orphan')

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
