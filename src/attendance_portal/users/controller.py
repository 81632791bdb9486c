from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..container import Container
from .service import SessionUser

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _start_session(user: SessionUser) -> None:
        session.clear()
        session.permanent = True
        session["email"] = user.email
        session["name"] = user.name
        session["role"] = user.role.value
        session["roll_number"] = user.roll_number
        session["semester"] = user.semester

    def _landing_for_role(role: str | None):
        if role == Role.PROFESSOR.value:
            return redirect(url_for("professor_sheet"))
        if role == Role.STUDENT.value:
            return redirect(url_for("student_attendance"))
        return None

    @app.route("/", endpoint="index")
    def index():
        landing = _landing_for_role(session.get("role"))
        return landing or redirect(url_for("home"))

    @app.route("/home", endpoint="home")
    def home():
        return render_template("home.html")

    @app.route("/about", endpoint="about")
    def about():
        return render_template("about.html")

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "POST":
            try:
                user = container.auth_service.login_student(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                )
                _start_session(user)
                return redirect(url_for("student_attendance"))
            except (AuthenticationError, AuthorizationError) as e:
                session.clear()
                flash(str(e), "danger")
            except Exception:
                logger.exception("Student login failed")
                flash("System error while logging in", "danger")

        return render_template("login.html")

    @app.route("/professor/login", methods=["GET", "POST"], endpoint="professor_login")
    def professor_login():
        if request.method == "POST":
            try:
                user = container.auth_service.login_professor(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                    request.form.get("semester", ""),
                )
                _start_session(user)
                return redirect(url_for("professor_sheet"))
            except (AuthenticationError, AuthorizationError, ValidationError) as e:
                session.clear()
                flash(str(e), "danger")
            except Exception:
                logger.exception("Professor login failed")
                flash("System error while logging in", "danger")

        return render_template("professor_login.html")

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_student():
        if request.method == "POST":
            try:
                container.auth_service.register_student(
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    roll_number=request.form.get("roll_number", ""),
                    phone=request.form.get("phone", ""),
                    dob=request.form.get("dob", ""),
                )
                flash("Registration successful. Please log in.", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Student registration failed")
                flash("System error while registering", "danger")

        return render_template("register.html")

    @app.route("/professor/register", methods=["GET", "POST"], endpoint="professor_register")
    def register_professor():
        if request.method == "POST":
            try:
                container.auth_service.register_professor(
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    phone=request.form.get("phone", ""),
                    dob=request.form.get("dob", ""),
                    qualification=request.form.get("qualification", ""),
                )
                flash("Registration successful. Please log in.", "success")
                return redirect(url_for("professor_login"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Professor registration failed")
                flash("System error while registering", "danger")

        return render_template("professor_register.html")

    @app.route("/professors", endpoint="professors")
    def professors():
        return render_template("professors.html", professors=container.user_service.list_professors())

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("home"))
