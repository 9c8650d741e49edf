from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from sqlalchemy import or_, select
from schooldesk import db
from schooldesk.models.announcement import Announcement
from schooldesk.models.school_class import SchoolClass
from schooldesk.models.lesson import Lesson
from schooldesk.utils.parsing import parse_datetime, to_int, json_body

bp = Blueprint('announcements', __name__, url_prefix='/api/announcements')

def _validate_payload(body):
    """Return (fields, error_response) for a create/update payload"""
    if body is None:
        return None, (jsonify({'error': 'Request body must be a JSON object'}), 400)

    title = body.get('title')
    description = body.get('description')
    date = body.get('date')
    class_id = body.get('class_id')

    # Validate required fields
    if not title or not description or not date:
        return None, (jsonify({'error': 'Missing required fields'}), 400)

    announcement_date = parse_datetime(date)
    if announcement_date is None:
        return None, (jsonify({'error': 'Invalid date format'}), 400)

    # Validate class_id if provided
    if class_id is not None:
        class_id = to_int(class_id)
        if class_id is None or db.session.get(SchoolClass, class_id) is None:
            return None, (jsonify({'error': 'Class not found'}), 404)

    return {
        'title': title,
        'description': description,
        'date': announcement_date,
        'class_id': class_id or None,
    }, None

@bp.route('/', methods=['GET'])
@login_required
def list_announcements():
    """All announcements, newest first"""
    try:
        announcements = Announcement.query.order_by(Announcement.date.desc()).all()
        return jsonify([a.to_dict() for a in announcements])
    except Exception as e:
        current_app.logger.error(f"Error fetching announcements: {str(e)}")
        return jsonify({'error': 'Failed to fetch announcements'}), 500

@bp.route('/recent', methods=['GET'])
@login_required
def recent_announcements():
    """Newest announcements visible to the current identity"""
    limit = current_app.config.get('RECENT_ANNOUNCEMENTS', 3)
    query = Announcement.query

    if current_user.role == 'teacher':
        taught = select(Lesson.class_id).where(Lesson.teacher_id == to_int(current_user.id))
        query = query.filter(or_(Announcement.class_id.is_(None), Announcement.class_id.in_(taught)))
    elif current_user.role in ('student', 'parent'):
        query = query.filter(or_(Announcement.class_id.is_(None), Announcement.class_id == current_user.class_id))

    announcements = query.order_by(Announcement.date.desc()).limit(limit).all()
    return jsonify([a.to_dict(include_class=False) for a in announcements])

@bp.route('/', methods=['POST'])
@login_required
def create_announcement():
    body = json_body()
    current_app.logger.debug(f"Received announcement body: {body}")

    fields, error = _validate_payload(body)
    if error:
        return error

    try:
        announcement = Announcement(**fields)
        db.session.add(announcement)
        db.session.commit()
        current_app.logger.info(f"Created announcement {announcement.id}: {announcement.title}")
        return jsonify(announcement.to_dict()), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating announcement: {str(e)}")
        return jsonify({'error': 'Failed to create announcement', 'details': str(e)}), 500

@bp.route('/<int:announcement_id>', methods=['PUT'])
@login_required
def update_announcement(announcement_id):
    announcement = db.session.get(Announcement, announcement_id)
    if announcement is None:
        return jsonify({'error': 'Announcement not found'}), 404

    fields, error = _validate_payload(json_body())
    if error:
        return error

    try:
        for key, value in fields.items():
            setattr(announcement, key, value)
        db.session.commit()
        return jsonify(announcement.to_dict())
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating announcement: {str(e)}")
        return jsonify({'error': 'Failed to update announcement'}), 500

@bp.route('/<int:announcement_id>', methods=['DELETE'])
@login_required
def delete_announcement(announcement_id):
    announcement = db.session.get(Announcement, announcement_id)
    if announcement is None:
        return jsonify({'error': 'Announcement not found'}), 404

    try:
        db.session.delete(announcement)
        db.session.commit()
        return jsonify({'message': 'Announcement deleted successfully'})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting announcement: {str(e)}")
        return jsonify({'error': 'Failed to delete announcement'}), 500