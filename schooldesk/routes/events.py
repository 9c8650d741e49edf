from datetime import timedelta
from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required
from schooldesk import db
from schooldesk.models.event import Event
from schooldesk.models.grade import Grade
from schooldesk.utils.parsing import parse_datetime, parse_date, to_int, json_body

bp = Blueprint('events', __name__, url_prefix='/api/events')

def _validate_payload(body):
    if body is None:
        return None, (jsonify({'error': 'Request body must be a JSON object'}), 400)

    title = body.get('title')
    start_time = body.get('start_time')
    end_time = body.get('end_time')
    grade_id = body.get('grade_id')

    if not title or not start_time or not end_time:
        return None, (jsonify({'error': 'Missing required fields'}), 400)

    start = parse_datetime(start_time)
    end = parse_datetime(end_time)
    if start is None or end is None:
        return None, (jsonify({'error': 'Invalid date format'}), 400)
    if end <= start:
        return None, (jsonify({'error': 'End time must be after start time'}), 400)

    if grade_id:
        grade_id = to_int(grade_id)
        if grade_id is None or db.session.get(Grade, grade_id) is None:
            return None, (jsonify({'error': 'Grade not found'}), 404)

    return {
        'title': title,
        'description': body.get('description') or None,
        'start_time': start,
        'end_time': end,
        'grade_id': grade_id or None,
    }, None

@bp.route('/', methods=['GET'])
@login_required
def list_events():
    """Events in start order, optionally only those starting on ?date=YYYY-MM-DD"""
    query = Event.query
    day = request.args.get('date')
    if day:
        parsed = parse_date(day)
        if parsed is None:
            return jsonify({'error': 'Invalid date format'}), 400
        start = parse_datetime(parsed.isoformat())
        query = query.filter(Event.start_time >= start, Event.start_time < start + timedelta(days=1))

    events = query.order_by(Event.start_time.asc()).all()
    return jsonify([e.to_dict() for e in events])

@bp.route('/', methods=['POST'])
@login_required
def create_event():
    fields, error = _validate_payload(json_body())
    if error:
        return error

    try:
        event = Event(**fields)
        db.session.add(event)
        db.session.commit()
        return jsonify(event.to_dict()), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating event: {str(e)}")
        return jsonify({'error': 'Failed to create event'}), 500

@bp.route('/<int:event_id>', methods=['PUT'])
@login_required
def update_event(event_id):
    event = db.session.get(Event, event_id)
    if event is None:
        return jsonify({'error': 'Event not found'}), 404

    fields, error = _validate_payload(json_body())
    if error:
        return error

    try:
        for key, value in fields.items():
            setattr(event, key, value)
        db.session.commit()
        return jsonify(event.to_dict())
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating event: {str(e)}")
        return jsonify({'error': 'Failed to update event'}), 500

@bp.route('/<int:event_id>', methods=['DELETE'])
@login_required
def delete_event(event_id):
    event = db.session.get(Event, event_id)
    if event is None:
        return jsonify({'error': 'Event not found'}), 404

    try:
        db.session.delete(event)
        db.session.commit()
        return jsonify({'message': 'Event deleted successfully'})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting event: {str(e)}")
        return jsonify({'error': 'Failed to delete event'}), 500
