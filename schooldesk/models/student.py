from schooldesk import db
from datetime import datetime

class Student(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.String(32), unique=True, nullable=False)  # School-issued code
    username = db.Column(db.String(32), unique=True, nullable=False)
    name = db.Column(db.String(64), nullable=False)
    surname = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(20))
    address = db.Column(db.String(200))
    sex = db.Column(db.String(10), nullable=False)  # 'MALE' or 'FEMALE'
    birthday = db.Column(db.Date, nullable=False)
    img = db.Column(db.String(256), nullable=True)
    class_id = db.Column(db.Integer, db.ForeignKey('school_class.id'), nullable=False)
    grade_id = db.Column(db.Integer, db.ForeignKey('grade.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    reports = db.relationship('Report', backref='student', lazy=True)

    def to_dict(self, include_class=False):
        data = {
            'id': self.id,
            'student_id': self.student_id,
            'username': self.username,
            'name': self.name,
            'surname': self.surname,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'sex': self.sex,
            'birthday': self.birthday.isoformat() if self.birthday else None,
            'img': self.img,
            'class_id': self.class_id,
            'grade_id': self.grade_id,
        }
        if include_class:
            data['class'] = {'name': self.school_class.name} if self.school_class else None
        return data
