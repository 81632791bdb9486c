import pytest

from attendance_portal.core.enums import Role
from attendance_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateCredential,
    ValidationError,
)
from attendance_portal.users.service import UserService


def _student(auth, email="s@uni.edu", roll="CS-1"):
    return auth.register_student(name="Sam", email=email, password="secret1", roll_number=roll)


def test_register_student_hashes_password(auth_service, users_repo):
    _student(auth_service)

    user = users_repo.get_by_email("s@uni.edu")
    assert user.role == Role.STUDENT
    assert user.roll_number == "CS-1"
    assert user.password_hash != "secret1"


def test_duplicate_email_is_rejected(auth_service):
    _student(auth_service)
    with pytest.raises(DuplicateCredential, match="Email"):
        _student(auth_service, roll="CS-2")


def test_duplicate_roll_number_is_rejected(auth_service):
    _student(auth_service)
    with pytest.raises(DuplicateCredential, match="Roll number"):
        _student(auth_service, email="other@uni.edu")


def test_professor_email_cannot_be_reused(auth_service):
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1")
    with pytest.raises(DuplicateCredential):
        auth_service.register_professor(name="Ada", email="ADA@uni.edu", password="secret1")


def test_short_password_is_rejected(auth_service):
    with pytest.raises(ValidationError):
        auth_service.register_professor(name="Ada", email="ada@uni.edu", password="123")


def test_wrong_password_raises(auth_service):
    _student(auth_service)
    with pytest.raises(AuthenticationError):
        auth_service.login_student("s@uni.edu", "wrong")


def test_unknown_user_raises(auth_service):
    with pytest.raises(AuthenticationError):
        auth_service.login_student("nobody@uni.edu", "secret1")


def test_professor_login_carries_semester(auth_service):
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1")

    user = auth_service.login_professor("ada@uni.edu", "secret1", "Fall 2024")

    assert user.role == Role.PROFESSOR
    assert user.semester == "Fall 2024"
    assert user.name == "Ada"


def test_professor_login_requires_semester(auth_service):
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1")
    with pytest.raises(ValidationError):
        auth_service.login_professor("ada@uni.edu", "secret1", " ")


def test_roles_cannot_use_each_others_login(auth_service):
    _student(auth_service)
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1")

    with pytest.raises(AuthorizationError):
        auth_service.login_professor("s@uni.edu", "secret1", "Fall 2024")
    with pytest.raises(AuthorizationError):
        auth_service.login_student("ada@uni.edu", "secret1")


def test_list_professors(auth_service, users_repo):
    _student(auth_service)
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1")

    names = [p.full_name for p in UserService(users_repo).list_professors()]
    assert names == ["Ada"]
