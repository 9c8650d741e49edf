from flask import Blueprint, jsonify, current_app
from flask_login import login_required
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from schooldesk import db
from schooldesk.auth import role_required
from schooldesk.models.grade import Grade
from schooldesk.models.school_class import SchoolClass
from schooldesk.services.grade_service import GradeService

bp = Blueprint('grades', __name__, url_prefix='/api/grades')

@bp.route('/', methods=['GET'])
@login_required
def list_grades():
    """Grades in level order with their class counts"""
    rows = db.session.query(Grade, func.count(SchoolClass.id)) \
                     .outerjoin(SchoolClass, SchoolClass.grade_id == Grade.id) \
                     .group_by(Grade.id) \
                     .order_by(Grade.level.asc(), Grade.id.asc()) \
                     .all()
    grades = []
    for grade, class_count in rows:
        data = grade.to_dict()
        data['class_count'] = class_count
        grades.append(data)
    return jsonify(grades)

@bp.route('/reconcile', methods=['POST'])
@login_required
@role_required('admin')
def reconcile():
    """Re-point every class at the grade its name encodes"""
    try:
        summary = GradeService.reconcile_class_grades()
    except SQLAlchemyError as e:
        current_app.logger.error(f"Reconciliation aborted: {str(e)}")
        return jsonify({'error': 'Reconciliation failed', 'details': str(e)}), 500
    return jsonify(summary.to_dict())
