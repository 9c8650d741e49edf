from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required
from sqlalchemy import or_
from schooldesk.models.assignment import Assignment
from schooldesk.models.exam import Exam
from schooldesk.models.result import Result
from schooldesk.models.student import Student

bp = Blueprint('results', __name__, url_prefix='/api/results')

def _flatten(result):
    """One search row; None for a result with neither exam nor assignment"""
    assessment = result.assessment
    if assessment is None:
        return None

    student = result.student
    teacher = assessment.lesson.teacher
    if result.exam is not None:
        kind, starts = 'exam', result.exam.start_time
    else:
        kind, starts = 'assignment', result.assignment.start_date

    return {
        'id': result.id,
        'type': kind,
        'title': assessment.title,
        'student_name': student.name,
        'student_surname': student.surname,
        'teacher_name': teacher.name,
        'teacher_surname': teacher.surname,
        'score': result.score,
        'class_name': student.school_class.name if student.school_class else 'No Class',
        'start_time': starts.isoformat(),
    }

@bp.route('/search', methods=['GET'])
@login_required
def search_results():
    """Search exam and assignment results by student code, name, surname or title"""
    query = request.args.get('query')
    if not query:
        return jsonify([])

    try:
        pattern = f'%{query}%'
        results = Result.query.join(Student, Result.student_id == Student.id) \
                              .outerjoin(Exam, Result.exam_id == Exam.id) \
                              .outerjoin(Assignment, Result.assignment_id == Assignment.id) \
                              .filter(or_(
                                  Student.student_id.ilike(pattern),
                                  Student.name.ilike(pattern),
                                  Student.surname.ilike(pattern),
                                  Exam.title.ilike(pattern),
                                  Assignment.title.ilike(pattern),
                              )) \
                              .order_by(Result.id.desc()) \
                              .limit(current_app.config.get('SEARCH_LIMIT_RESULTS', 20)) \
                              .all()
        rows = [_flatten(r) for r in results]
        return jsonify([row for row in rows if row is not None])
    except Exception as e:
        current_app.logger.error(f"Failed to search results: {str(e)}")
        return jsonify({'error': 'Failed to search results'}), 500
