from schooldesk import db
from datetime import datetime

class SchoolClass(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(16), nullable=False)
    capacity = db.Column(db.Integer, nullable=False, default=45)
    grade_id = db.Column(db.Integer, db.ForeignKey('grade.id'), nullable=False)
    supervisor_id = db.Column(db.Integer, db.ForeignKey('teacher.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    students = db.relationship('Student', backref='school_class', lazy=True)
    lessons = db.relationship('Lesson', backref='school_class', lazy=True)
    announcements = db.relationship('Announcement', backref='school_class', lazy=True)
    supervisor = db.relationship('Teacher', backref=db.backref('supervised_classes', lazy=True))

    def to_dict(self, include_grade=True):
        data = {
            'id': self.id,
            'name': self.name,
            'capacity': self.capacity,
            'grade_id': self.grade_id,
            'supervisor_id': self.supervisor_id,
        }
        if include_grade:
            data['grade'] = self.grade.to_dict() if self.grade else None
        return data

    def __repr__(self):
        return f'<SchoolClass {self.name} (id={self.id}, grade_id={self.grade_id})>'
