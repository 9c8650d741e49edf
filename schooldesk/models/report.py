from schooldesk import db
from datetime import datetime

TERMS = ['TERM1', 'TERM2', 'TERM3', 'TERM4']

class Report(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=False)
    term = db.Column(db.String(10), nullable=False)  # one of TERMS
    year = db.Column(db.Integer, nullable=False)
    marks = db.Column(db.Float, nullable=False)  # 0-100
    grade = db.Column(db.String(4), nullable=False)  # Letter grade, not a Grade record
    teacher_comment = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'subject_id': self.subject_id,
            'term': self.term,
            'year': self.year,
            'marks': self.marks,
            'grade': self.grade,
            'teacher_comment': self.teacher_comment,
        }
