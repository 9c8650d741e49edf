from schooldesk import db
from schooldesk.utils.class_names import grade_label
from datetime import datetime

class Grade(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    # Not unique at the database level; seeding keeps one row per level
    level = db.Column(db.Integer, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    classes = db.relationship('SchoolClass', backref='grade', lazy=True)
    students = db.relationship('Student', backref='grade', lazy=True)
    events = db.relationship('Event', backref='grade', lazy=True)

    @property
    def label(self):
        return grade_label(self.level)

    def to_dict(self):
        return {
            'id': self.id,
            'level': self.level,
            'label': self.label,
        }

    def __repr__(self):
        return f'<Grade {self.label} (id={self.id})>'
