from typing import Optional, Union

from django.views.decorators.csrf import ensure_csrf_cookie
from ninja import Router, Schema
from ninja.decorators import decorate_view

from authentication.session_auth import admin_session_auth
from authentication.sessions import AdminSession, AdminSessionManager
from leads.captcha import LOGIN_CAPTCHA_KEY, ChallengeStore, is_correct
from leads.schemas import CaptchaSchema

router = Router()


class LoginSchema(Schema):
    email: str
    password: str
    captcha_answer: Optional[Union[int, str]] = None


class AuthErrorSchema(Schema):
    error: str
    captcha: CaptchaSchema


class MessageResponse(Schema):
    message: str


@router.get("/captcha", response=CaptchaSchema, auth=None)
@decorate_view(ensure_csrf_cookie)
def login_captcha(request):
    """Issue a fresh challenge for the login form"""
    return ChallengeStore(request.session, LOGIN_CAPTCHA_KEY).issue().to_dict()


@router.post("/session", response={200: AdminSession, 401: AuthErrorSchema}, auth=None)
@decorate_view(ensure_csrf_cookie)
def login(request, data: LoginSchema):
    """
    Open an admin session.

    The login challenge must be answered first; any failure issues a new one.
    The response carries the CSRF cookie that admin writes must echo back in
    the X-CSRFToken header.
    """
    challenges = ChallengeStore(request.session, LOGIN_CAPTCHA_KEY)
    if not is_correct(challenges.current(), data.captcha_answer):
        return 401, {"error": "Incorrect CAPTCHA answer.", "captcha": challenges.issue().to_dict()}

    admin = AdminSessionManager(request.session).login(data.email, data.password)
    if admin is None:
        return 401, {"error": "Invalid credentials.", "captcha": challenges.issue().to_dict()}

    challenges.clear()
    request.session.cycle_key()
    return admin


@router.get("/session", response=AdminSession, auth=admin_session_auth)
@decorate_view(ensure_csrf_cookie)
def current_session(request):
    """Return the logged-in admin"""
    return request.auth


@router.delete("/session", response=MessageResponse, auth=None)
def logout(request):
    """Close the admin session"""
    AdminSessionManager(request.session).logout()
    return {"message": "Logged out"}
