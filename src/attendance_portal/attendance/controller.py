from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import DomainError, RecordNotFound, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _require_role(role: Role, login_endpoint: str):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if "email" not in session:
                    flash("Please log in to access this page.", "warning")
                    return redirect(url_for(login_endpoint))

                if session.get("role") != role.value:
                    current_user = {"name": session.get("name"), "role": session.get("role")}
                    return render_template("403.html", current_user=current_user), 403

                return view(*args, **kwargs)

            return wrapper

        return decorator

    professor_required = _require_role(Role.PROFESSOR, "professor_login")
    student_required = _require_role(Role.STUDENT, "login")

    def _partition_args() -> dict:
        return {"owner": session.get("email"), "semester": session.get("semester")}

    def _form_list(field: str):
        # None when the field is absent so the service can reject the batch.
        return request.form.getlist(field) if field in request.form else None

    @app.route("/professor/sheet", endpoint="professor_sheet")
    @professor_required
    def professor_sheet():
        try:
            records = service.list_ordered(**_partition_args())
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("professor_login"))

        return render_template(
            "professor_sheet.html",
            records=records,
            professor=session.get("name"),
            semester=session.get("semester"),
            statuses=list(AttendanceStatus),
            active_page="professor_sheet",
        )

    @app.route("/professor/students/add", methods=["GET", "POST"], endpoint="add_student")
    @professor_required
    def add_student():
        if request.method == "POST":
            try:
                result = service.upsert_student(
                    **_partition_args(),
                    roll_number=request.form.get("roll_number", ""),
                    name=request.form.get("name", ""),
                    class_name=request.form.get("class_name"),
                    overwrite=bool(request.form.get("reset_history")),
                )
                flash("Student added successfully." if result.created else "Student updated successfully.", "success")
                return redirect(url_for("professor_sheet"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Adding student failed")
                flash("System error while saving the student", "danger")

        return render_template("add_student.html", semester=session.get("semester"), active_page="add_student")

    @app.route("/professor/students/edit", endpoint="edit_student")
    @professor_required
    def edit_student():
        roll_number = request.args.get("roll_number", "")
        try:
            student = service.get_student(**_partition_args(), roll_number=roll_number)
        except DomainError:
            flash("Student not found.", "danger")
            return redirect(url_for("professor_sheet"))

        return render_template("edit_student.html", student=student)

    @app.route("/professor/students/update", methods=["POST"], endpoint="update_student")
    @professor_required
    def update_student():
        try:
            service.update_student(
                **_partition_args(),
                roll_number=request.form.get("roll_number", ""),
                name=request.form.get("name", ""),
                class_name=request.form.get("class_name"),
            )
            flash("Student updated successfully.", "success")
        except RecordNotFound:
            flash("No student found with that roll number.", "danger")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating student failed")
            flash("An error occurred while updating the student.", "danger")

        return redirect(url_for("professor_sheet"))

    @app.route("/professor/attendance", methods=["POST"], endpoint="record_attendance")
    @professor_required
    def record_attendance():
        try:
            result = service.record_batch(
                **_partition_args(),
                roll_numbers=_form_list("roll_numbers"),
                statuses=_form_list("statuses"),
            )
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("professor_sheet"))
        except Exception:
            logger.exception("Recording attendance failed")
            flash("Failed to record attendance.", "danger")
            return redirect(url_for("professor_sheet"))

        if result.ok:
            flash("Attendance recorded successfully.", "success")
        else:
            failed = ", ".join(f"{item.roll_number} ({item.outcome.value})" for item in result.failed)
            flash(f"Attendance recorded for {result.recorded} student(s); not recorded: {failed}", "warning")
        return redirect(url_for("professor_sheet"))

    @app.route("/professor/students/<path:roll_number>/remove", methods=["POST"], endpoint="remove_student")
    @professor_required
    def remove_student(roll_number: str):
        try:
            removed = service.remove_student(**_partition_args(), roll_number=roll_number)
        except ValidationError as e:
            return str(e), 400
        except Exception:
            logger.exception("Removing %s failed", roll_number)
            return "An error occurred while removing attendance.", 500

        if removed:
            return "Attendance removed successfully.", 200
        return "No attendance record found.", 404

    @app.route("/professor/records", endpoint="attendance_records")
    @professor_required
    def attendance_records():
        try:
            records = service.list_ordered(**_partition_args())
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("professor_login"))

        return render_template(
            "attendance_records.html",
            records=records,
            professor=session.get("name"),
            semester=session.get("semester"),
            active_page="attendance_records",
        )

    @app.route("/student/attendance", endpoint="student_attendance")
    @student_required
    def student_attendance():
        roll_number = session.get("roll_number")
        if not roll_number:
            flash("No roll number provided.", "danger")
            return redirect(url_for("login"))

        summary = service.student_summary(roll_number)
        if summary is None:
            flash("No attendance records found for your roll number.", "info")
        return render_template("student_attendance.html", summary=summary, roll_number=roll_number)
