from flask import Blueprint, request, jsonify, send_file, current_app
from flask_login import login_required
from schooldesk import db
from schooldesk.models.lesson import Lesson
from schooldesk.models.report import Report, TERMS
from schooldesk.models.student import Student
from schooldesk.models.subject import Subject
from schooldesk.utils.parsing import to_int, json_body
from sqlalchemy import or_
from datetime import datetime
import io
import xlsxwriter

bp = Blueprint('reports', __name__, url_prefix='/api/reports')

def _teacher_name(report):
    """Name of the teacher giving this subject to the student's class, or N/A"""
    student = report.student
    if not student or not student.class_id:
        return 'N/A'
    lesson = Lesson.query.filter_by(subject_id=report.subject_id, class_id=student.class_id) \
                         .order_by(Lesson.id.asc()).first()
    return lesson.teacher.full_name if lesson and lesson.teacher else 'N/A'

def _flatten(report):
    student = report.student
    return {
        'id': report.id,
        'student_name': student.name,
        'student_surname': student.surname,
        'student_id': student.student_id or student.id,
        'class_name': student.school_class.name if student.school_class else None,
        'subject': report.subject.name,
        'term': report.term,
        'year': report.year,
        'marks': report.marks,
        'grade': report.grade,
        'teacher_name': _teacher_name(report),
    }

@bp.route('/search', methods=['GET'])
@login_required
def search_reports():
    """Search reports by student code, name, surname or subject"""
    query = request.args.get('query')
    if not query:
        return jsonify([])

    try:
        pattern = f'%{query}%'
        reports = Report.query.join(Student, Report.student_id == Student.id) \
                              .join(Subject, Report.subject_id == Subject.id) \
                              .filter(or_(
                                  Student.student_id.ilike(pattern),
                                  Student.name.ilike(pattern),
                                  Student.surname.ilike(pattern),
                                  Subject.name.ilike(pattern),
                              )) \
                              .order_by(Report.year.desc(), Report.term.asc()) \
                              .limit(current_app.config.get('SEARCH_LIMIT_REPORTS', 20)) \
                              .all()
        return jsonify([_flatten(r) for r in reports])
    except Exception as e:
        current_app.logger.error(f"Failed to search reports: {str(e)}")
        return jsonify({'error': 'Failed to search reports'}), 500

@bp.route('/', methods=['POST'])
@login_required
def create_report():
    body = json_body()
    if body is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    student_id = to_int(body.get('student_id'))
    subject_id = to_int(body.get('subject_id'))
    term = body.get('term')
    year = to_int(body.get('year'))
    grade = body.get('grade')
    try:
        marks = float(body.get('marks'))
    except (TypeError, ValueError):
        marks = None

    if student_id is None or subject_id is None:
        return jsonify({'error': 'Student and subject are required'}), 400
    if term not in TERMS:
        return jsonify({'error': 'Term is required'}), 400
    if year is None or not 2020 <= year <= 2100:
        return jsonify({'error': 'Valid year is required'}), 400
    if marks is None or not 0 <= marks <= 100:
        return jsonify({'error': 'Marks must be between 0 and 100'}), 400
    if not grade:
        return jsonify({'error': 'Grade is required'}), 400

    if db.session.get(Student, student_id) is None:
        return jsonify({'error': 'Student not found'}), 404
    if db.session.get(Subject, subject_id) is None:
        return jsonify({'error': 'Subject not found'}), 404

    try:
        report = Report(
            student_id=student_id,
            subject_id=subject_id,
            term=term,
            year=year,
            marks=marks,
            grade=grade,
            teacher_comment=body.get('teacher_comment') or None
        )
        db.session.add(report)
        db.session.commit()
        return jsonify(report.to_dict()), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating report: {str(e)}")
        return jsonify({'error': 'Failed to create report'}), 500

@bp.route('/export', methods=['GET'])
@login_required
def export():
    """Download every report as an Excel workbook"""
    try:
        reports = Report.query.join(Student, Report.student_id == Student.id) \
                              .order_by(Report.year.desc(), Report.term.asc(),
                                        Student.surname.asc(), Student.name.asc()) \
                              .all()

        # Create Excel file in memory
        output = io.BytesIO()
        workbook = xlsxwriter.Workbook(output, {'in_memory': True})

        # Define formats
        header_format = workbook.add_format({
            'bold': True,
            'font_color': '#FFFFFF',
            'bg_color': '#4F81BD',
            'align': 'center',
            'valign': 'vcenter',
            'border': 1
        })
        data_format = workbook.add_format({'border': 1, 'align': 'left', 'valign': 'vcenter'})
        center_format = workbook.add_format({'border': 1, 'align': 'center', 'valign': 'vcenter'})
        number_format = workbook.add_format({
            'border': 1,
            'align': 'center',
            'valign': 'vcenter',
            'num_format': '0.0'
        })

        worksheet = workbook.add_worksheet('Reports')
        worksheet.set_column('A:A', 14)  # Student ID
        worksheet.set_column('B:C', 20)  # Name, Surname
        worksheet.set_column('D:D', 8)   # Class
        worksheet.set_column('E:E', 20)  # Subject
        worksheet.set_column('F:I', 10)  # Term, Year, Marks, Grade
        worksheet.set_column('J:J', 25)  # Teacher

        headers = ['Student ID', 'Name', 'Surname', 'Class', 'Subject', 'Term', 'Year', 'Marks', 'Grade', 'Teacher']
        for col, header in enumerate(headers):
            worksheet.write(0, col, header, header_format)

        for row, report in enumerate(reports, start=1):
            item = _flatten(report)
            worksheet.write(row, 0, str(item['student_id']), data_format)
            worksheet.write(row, 1, item['student_name'], data_format)
            worksheet.write(row, 2, item['student_surname'], data_format)
            worksheet.write(row, 3, item['class_name'] or '', center_format)
            worksheet.write(row, 4, item['subject'], data_format)
            worksheet.write(row, 5, item['term'], center_format)
            worksheet.write(row, 6, item['year'], center_format)
            worksheet.write(row, 7, item['marks'], number_format)
            worksheet.write(row, 8, item['grade'], center_format)
            worksheet.write(row, 9, item['teacher_name'], data_format)

        workbook.close()
        output.seek(0)

        return send_file(
            output,
            mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            download_name=f'reports_{datetime.now().strftime("%Y%m%d")}.xlsx',
            as_attachment=True
        )
    except Exception as e:
        current_app.logger.error(f"Export error: {str(e)}")
        return jsonify({'error': 'Failed to export reports'}), 500
