from schooldesk import db

class Announcement(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey('school_class.id'), nullable=True)  # None = school-wide

    def to_dict(self, include_class=True):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': self.date.isoformat(),
            'class_id': self.class_id,
        }
        if include_class:
            cls = self.school_class
            data['class'] = {'id': cls.id, 'name': cls.name} if cls else None
        return data
