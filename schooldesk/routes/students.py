from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required
from sqlalchemy import or_
from schooldesk import db
from schooldesk.models.grade import Grade
from schooldesk.models.school_class import SchoolClass
from schooldesk.models.student import Student
from schooldesk.utils.parsing import parse_date, to_int, json_body

bp = Blueprint('students', __name__, url_prefix='/api/students')

REQUIRED_FIELDS = ['username', 'name', 'surname', 'birthday', 'sex']

@bp.route('/search', methods=['GET'])
@login_required
def search_students():
    query = request.args.get('query')
    if not query:
        return jsonify([])

    try:
        pattern = f'%{query}%'
        students = Student.query.filter(or_(
            Student.student_id.ilike(pattern),
            Student.name.ilike(pattern),
            Student.surname.ilike(pattern),
        )).limit(current_app.config.get('SEARCH_LIMIT_STUDENTS', 10)).all()

        return jsonify([{
            'id': s.id,
            'student_id': s.student_id,
            'name': s.name,
            'surname': s.surname,
            'img': s.img,
            'class': {'name': s.school_class.name} if s.school_class else None,
        } for s in students])
    except Exception as e:
        current_app.logger.error(f"Failed to search students: {str(e)}")
        return jsonify({'error': 'Failed to search students'}), 500

@bp.route('/', methods=['POST'])
@login_required
def create_student():
    body = json_body()
    if body is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    missing = [field for field in REQUIRED_FIELDS if not body.get(field)]
    if missing:
        current_app.logger.debug(f"Missing required student fields: {missing}")
        return jsonify({'error': 'Missing required fields', 'details': missing}), 400

    sex = str(body['sex']).upper()
    if sex not in ('MALE', 'FEMALE'):
        return jsonify({'error': 'Sex must be MALE or FEMALE'}), 400

    birthday = parse_date(body['birthday'])
    if birthday is None:
        return jsonify({'error': 'Invalid date format'}), 400

    grade_id = to_int(body.get('grade_id'))
    class_id = to_int(body.get('class_id'))
    if not grade_id or not class_id:
        return jsonify({'error': 'Grade and class are required'}), 400

    if db.session.get(Grade, grade_id) is None:
        return jsonify({'error': 'Grade not found'}), 404
    if db.session.get(SchoolClass, class_id) is None:
        return jsonify({'error': 'Class not found'}), 404

    username = body['username']
    student_code = body.get('student_id') or username
    existing = Student.query.filter(or_(
        Student.username == username,
        Student.student_id == student_code,
    )).first()
    if existing:
        return jsonify({'error': 'Student already exists'}), 409

    try:
        student = Student(
            student_id=student_code,
            username=username,
            name=body['name'],
            surname=body['surname'],
            email=body.get('email') or None,
            phone=body.get('phone') or None,
            address=body.get('address') or None,
            sex=sex,
            birthday=birthday,
            grade_id=grade_id,
            class_id=class_id
        )
        db.session.add(student)
        db.session.commit()
        current_app.logger.info(f"Student created successfully: {student.id}")
        return jsonify(student.to_dict(include_class=True)), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"createStudent error: {str(e)}")
        return jsonify({'error': 'Failed to create student'}), 500

@bp.route('/bulk-assign', methods=['POST'])
@login_required
def bulk_assign():
    """Move a list of students into one class"""
    body = json_body()
    if body is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    raw_ids = body.get('student_ids')
    student_ids = [to_int(i) for i in raw_ids] if isinstance(raw_ids, list) else []
    class_id = to_int(body.get('class_id'))

    if not student_ids or None in student_ids or class_id is None:
        return jsonify({'error': 'student_ids and class_id are required'}), 400
    cls = db.session.get(SchoolClass, class_id)
    if cls is None:
        return jsonify({'error': 'Class not found'}), 404

    try:
        # Students follow the grade of their new class
        updated = Student.query.filter(Student.id.in_(student_ids)) \
                               .update({Student.class_id: class_id, Student.grade_id: cls.grade_id},
                                       synchronize_session=False)
        db.session.commit()
        return jsonify({'success': True, 'updated': updated})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error bulk assigning students: {str(e)}")
        return jsonify({'error': 'Failed to assign students'}), 500
