from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

DEFAULT_GENDER = 'prefer-not-to-say'
DEFAULT_AGE = 'not-specified'


class WaitlistUser(db.Model):
    __tablename__ = 'waitlist_users'
    __table_args__ = (
        db.Index('idx_waitlist_email', 'email'),
        db.Index('idx_waitlist_created_at', 'created_at'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    phone = db.Column(db.String(50), nullable=False)
    gender = db.Column(db.String(50), default=DEFAULT_GENDER)
    age = db.Column(db.String(50), default=DEFAULT_AGE)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, server_default=db.func.now())
    ip_address = db.Column(db.String(50))
    user_agent = db.Column(db.Text)
    referral_code = db.Column(db.String(50))

    def __repr__(self):
        return f'<WaitlistUser {self.email}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'gender': self.gender,
            'age': self.age,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
