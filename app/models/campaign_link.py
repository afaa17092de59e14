from app.extensions import db
from datetime import datetime
import uuid

LINK_STATUS_OK = 'ok'
LINK_STATUS_ERROR = 'error'

METRIC_FIELDS = ('views', 'likes', 'comments', 'shares', 'saves')


class CampaignLink(db.Model):
    __tablename__ = 'campaign_links'

    """
    CampaignLink Model - one tracked URL plus its latest engagement metrics.

    Attributes:
        url (str): URL as submitted (trimmed, query and fragment removed)
        canonical_url (str): Redirect-resolved, normalized URL used to match
            provider records. Null until the first refresh.
        views/likes/comments/shares/saves (int): Counters from the last
            successful refresh, overwritten on every match
        status (str): 'ok' or 'error'
        last_error (str): Diagnostic for the last failed match
        last_updated_at (datetime): When the last refresh touched this row
    """

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    campaign_id = db.Column(
        db.String(36),
        db.ForeignKey('campaigns.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    url = db.Column(db.Text, nullable=False)
    canonical_url = db.Column(db.Text, nullable=True)

    views = db.Column(db.BigInteger, nullable=False, default=0)
    likes = db.Column(db.BigInteger, nullable=False, default=0)
    comments = db.Column(db.BigInteger, nullable=False, default=0)
    shares = db.Column(db.BigInteger, nullable=False, default=0)
    saves = db.Column(db.BigInteger, nullable=False, default=0)

    status = db.Column(db.String(20), nullable=False, default=LINK_STATUS_OK)
    last_error = db.Column(db.Text, nullable=True)
    last_updated_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def apply_metrics(self, canonical_url, metrics, now):
        self.canonical_url = canonical_url
        for field in METRIC_FIELDS:
            setattr(self, field, metrics.get(field, 0))
        self.status = LINK_STATUS_OK
        self.last_error = None
        self.last_updated_at = now

    def mark_not_found(self, canonical_url, message, now):
        self.canonical_url = canonical_url
        self.status = LINK_STATUS_ERROR
        self.last_error = message
        self.last_updated_at = now

    def to_dict(self):
        return {
            "id": self.id,
            "campaign_id": self.campaign_id,
            "url": self.url,
            "canonical_url": self.canonical_url,
            "views": self.views or 0,
            "likes": self.likes or 0,
            "comments": self.comments or 0,
            "shares": self.shares or 0,
            "saves": self.saves or 0,
            "status": self.status,
            "last_error": self.last_error,
            "last_updated_at": self.last_updated_at.isoformat() if self.last_updated_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
