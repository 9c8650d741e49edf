from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from config import Config

# ✅ Fix for Windows: Use PyMySQL instead of MySQLdb
import pymysql
pymysql.install_as_MySQLdb()

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        # Import models and routes here to register with the app
        from schooldesk import auth, commands
        from schooldesk.models import (
            Grade, SchoolClass, Student, Teacher, Subject, Lesson, Announcement, Event, Report,
            Exam, Assignment, Result,
        )
        from schooldesk.routes import announcements, events, classes, grades, students, reports, results

        # Register blueprints
        app.register_blueprint(announcements.bp)
        app.register_blueprint(events.bp)
        app.register_blueprint(grades.bp)
        app.register_blueprint(classes.bp)
        app.register_blueprint(students.bp)
        app.register_blueprint(reports.bp)
        app.register_blueprint(results.bp)

        commands.register_commands(app)

        # Create all database tables (if not already created)
        db.create_all()

        # Register error handlers
        register_error_handlers(app)

    return app

def register_error_handlers(app):
    """Register global error handlers"""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(400)
    def bad_request_error(error):
        return jsonify({'error': 'Bad request'}), 400

    @app.errorhandler(403)
    def forbidden_error(error):
        return jsonify({'error': 'Forbidden'}), 403

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        # If it's an HTTP exception, keep its status code
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description}), e.code

        # Log the error
        app.logger.error(f'Unhandled exception: {str(e)}')

        # For any other exception, return 500
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500
