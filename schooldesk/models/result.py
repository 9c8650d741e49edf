from schooldesk import db

class Result(db.Model):
    """A student's score on one exam or one assignment"""
    id = db.Column(db.Integer, primary_key=True)
    score = db.Column(db.Float, nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False)
    # Normally exactly one of these is set
    exam_id = db.Column(db.Integer, db.ForeignKey('exam.id'), nullable=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignment.id'), nullable=True)

    student = db.relationship('Student', backref=db.backref('results', lazy=True))

    @property
    def assessment(self):
        return self.exam or self.assignment

    def to_dict(self):
        return {
            'id': self.id,
            'score': self.score,
            'student_id': self.student_id,
            'exam_id': self.exam_id,
            'assignment_id': self.assignment_id,
        }
