from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required
from schooldesk import db
from schooldesk.models.grade import Grade
from schooldesk.models.school_class import SchoolClass
from schooldesk.models.student import Student
from schooldesk.models.teacher import Teacher
from schooldesk.services.grade_service import GradeService
from schooldesk.utils.class_names import grade_label
from schooldesk.utils.parsing import to_int, json_body

bp = Blueprint('classes', __name__, url_prefix='/api/classes')

def _validate_payload(body):
    """
    Validate a class payload.

    When grade_id is omitted the grade is taken from the class name,
    e.g. "2D" goes to the level 2 grade.
    """
    if body is None:
        return None, (jsonify({'error': 'Request body must be a JSON object'}), 400)

    name = (body.get('name') or '').strip()
    capacity = to_int(body.get('capacity'))
    grade_id = body.get('grade_id')
    supervisor_id = body.get('supervisor_id')

    if not name:
        return None, (jsonify({'error': 'Class name is required'}), 400)
    if capacity is None or capacity < 1:
        return None, (jsonify({'error': 'Capacity must be at least 1'}), 400)

    if grade_id is not None:
        grade_id = to_int(grade_id)
        if grade_id is None or db.session.get(Grade, grade_id) is None:
            return None, (jsonify({'error': 'Grade not found'}), 404)
    else:
        level, grade = GradeService.resolve_grade_for_class_name(name)
        if level is None:
            return None, (jsonify({'error': 'Grade is required for class names like ' + repr(name)}), 400)
        if grade is None:
            return None, (jsonify({'error': f'Grade level {level} not found'}), 404)
        grade_id = grade.id

    if supervisor_id is not None:
        supervisor_id = to_int(supervisor_id)
        if supervisor_id is None or db.session.get(Teacher, supervisor_id) is None:
            return None, (jsonify({'error': 'Supervisor not found'}), 404)

    return {
        'name': name,
        'capacity': capacity,
        'grade_id': grade_id,
        'supervisor_id': supervisor_id,
    }, None

@bp.route('/', methods=['GET'])
@login_required
def list_classes():
    query = SchoolClass.query.join(Grade)

    grade_id = to_int(request.args.get('grade_id'))
    if grade_id is not None:
        query = query.filter(SchoolClass.grade_id == grade_id)

    search = request.args.get('search')
    if search:
        query = query.filter(SchoolClass.name.ilike(f'%{search}%'))

    classes = query.order_by(Grade.level.asc(), SchoolClass.name.asc()).all()
    return jsonify([c.to_dict() for c in classes])

@bp.route('/', methods=['POST'])
@login_required
def create_class():
    fields, error = _validate_payload(json_body())
    if error:
        return error

    try:
        cls = SchoolClass(**fields)
        db.session.add(cls)
        db.session.commit()
        current_app.logger.info(f"Created class {cls.name} (grade_id {cls.grade_id})")
        return jsonify(cls.to_dict()), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"createClass error: {str(e)}")
        return jsonify({'error': 'Failed to create class'}), 500

@bp.route('/<int:class_id>', methods=['PUT'])
@login_required
def update_class(class_id):
    cls = db.session.get(SchoolClass, class_id)
    if cls is None:
        return jsonify({'error': 'Class not found'}), 404

    fields, error = _validate_payload(json_body())
    if error:
        return error

    try:
        for key, value in fields.items():
            setattr(cls, key, value)
        db.session.commit()
        return jsonify(cls.to_dict())
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"updateClass error: {str(e)}")
        return jsonify({'error': 'Failed to update class'}), 500

@bp.route('/<int:class_id>', methods=['DELETE'])
@login_required
def delete_class(class_id):
    cls = db.session.get(SchoolClass, class_id)
    if cls is None:
        return jsonify({'error': 'Class not found'}), 404

    student_count = Student.query.filter_by(class_id=class_id).count()
    if student_count:
        return jsonify({'error': f'Class {cls.name} still has {student_count} students'}), 409

    try:
        db.session.delete(cls)
        db.session.commit()
        return jsonify({'message': 'Class deleted successfully'})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"deleteClass error: {str(e)}")
        return jsonify({'error': 'Failed to delete class'}), 500

@bp.route('/statistics', methods=['GET'])
@login_required
def class_statistics():
    """Enrolment per class for the dashboard"""
    stats = []
    for cls in SchoolClass.query.order_by(SchoolClass.id.asc()).all():
        total = len(cls.students)
        stats.append({
            'id': cls.id,
            'name': cls.name,
            'total_students': total,
            'male_count': sum(1 for s in cls.students if s.sex == 'MALE'),
            'female_count': sum(1 for s in cls.students if s.sex == 'FEMALE'),
            'capacity': cls.capacity,
            'utilization_rate': round(total / cls.capacity * 100, 1) if cls.capacity else 0,
        })
    return jsonify(stats)

@bp.route('/<int:class_id>/register', methods=['GET'])
@login_required
def class_register(class_id):
    cls = db.session.get(SchoolClass, class_id)
    if cls is None:
        return jsonify({'error': 'Class not found'}), 404

    students = Student.query.filter_by(class_id=class_id) \
                            .order_by(Student.surname.asc(), Student.name.asc()) \
                            .all()
    return jsonify({
        'class_name': cls.name,
        'grade': f'Grade {grade_label(cls.grade.level)}',
        'supervisor': cls.supervisor.full_name if cls.supervisor else 'No supervisor assigned',
        'capacity': cls.capacity,
        'total_students': len(students),
        'male_count': sum(1 for s in students if s.sex == 'MALE'),
        'female_count': sum(1 for s in students if s.sex == 'FEMALE'),
        'students': [{
            'student_id': s.student_id,
            'name': s.name,
            'surname': s.surname,
            'sex': s.sex,
            'birthday': s.birthday.isoformat() if s.birthday else None,
            'email': s.email,
            'phone': s.phone,
        } for s in students],
    })
