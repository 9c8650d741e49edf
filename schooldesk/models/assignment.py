from schooldesk import db

class Assignment(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lesson.id'), nullable=False)

    results = db.relationship('Result', backref='assignment', lazy=True)
    lesson = db.relationship('Lesson', backref=db.backref('assignments', lazy=True))

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'start_date': self.start_date.isoformat(),
            'due_date': self.due_date.isoformat(),
            'lesson_id': self.lesson_id,
        }
