from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def professor_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "email" not in session:
                flash("Please log in to access this page.", "warning")
                return redirect(url_for("professor_login"))

            if session.get("role") != Role.PROFESSOR.value:
                current_user = {"name": session.get("name"), "role": session.get("role")}
                return render_template("403.html", current_user=current_user), 403

            return view(*args, **kwargs)

        return wrapper

    @app.route("/feedback", methods=["GET", "POST"], endpoint="feedback")
    def feedback():
        if request.method == "POST":
            try:
                container.feedback_service.submit(
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    phone=request.form.get("phone", ""),
                    address=request.form.get("address", ""),
                    message=request.form.get("message", ""),
                )
                flash("Feedback submitted successfully!", "success")
                return redirect(url_for("feedback_success"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Saving feedback failed")
                flash("Error submitting feedback. Please try again.", "danger")

        return render_template("feedback.html")

    @app.route("/feedback/success", endpoint="feedback_success")
    def feedback_success():
        return render_template("success.html")

    @app.route("/feedback/list", endpoint="feedback_list")
    @professor_required
    def feedback_list():
        return render_template("feedback_list.html", feedback=container.feedback_service.list_all())
