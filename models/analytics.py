from datetime import datetime
from .waitlist import db


class WaitlistAnalytics(db.Model):
    """Single-row running total of signups."""
    __tablename__ = 'waitlist_analytics'

    id = db.Column(db.Integer, primary_key=True)
    total_signups = db.Column(db.Integer, default=0, server_default='0')
    last_updated = db.Column(db.DateTime, default=datetime.utcnow, server_default=db.func.now())

    def __repr__(self):
        return f'<WaitlistAnalytics total={self.total_signups}>'

    def to_dict(self):
        return {
            'totalSignups': self.total_signups,
            'lastUpdated': self.last_updated.isoformat() if self.last_updated else None,
        }
