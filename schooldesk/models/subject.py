from schooldesk import db

class Subject(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False)

    lessons = db.relationship('Lesson', backref='subject', lazy=True)
    reports = db.relationship('Report', backref='subject', lazy=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}
