"""
Login and logout routes.

Each role has its own login page:
- /login/manager  (email + password)
- /login/agent    (email + password)
- /admin          (user name + password)
"""

from flask import Blueprint, flash, redirect, render_template, request

from core.api_client import ROLE_ADMIN, ROLE_AGENT, ROLE_MANAGER
from core.exceptions import AuthorizationError, BackendError, BackendUnavailableError, ValidationError
from logging_config import get_logger
from modules import auth_token
from modules.validation import validate_fields, validate_required
from services import auth_service
from .helpers import api_client, backend_message


# Module logger
logger = get_logger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/")
def index():
    """Send logged-in users home, everyone else to the manager login."""
    token = auth_service.get_token()
    role = auth_service.current_role()
    if token and role and not auth_token.is_expired(token):
        return redirect(auth_service.home_url(role))
    return redirect(auth_service.login_url(ROLE_MANAGER))


def _login(role: str, identifier_field: str):
    errors = {}
    identifier = ""

    if request.method == "POST":
        identifier = request.form.get(identifier_field, "").strip()
        password = request.form.get("password", "")
        try:
            validate_fields([
                (identifier_field, validate_required(identifier)),
                ("password", validate_required(password)),
            ])
            stored_role = auth_service.login(api_client(), role, identifier, password)
            return redirect(auth_service.home_url(stored_role))
        except ValidationError as e:
            errors = e.errors
        except AuthorizationError:
            logger.info(f"Login rejected for {role}")
            errors = {"form": "auth.invalid_credentials"}
        except BackendUnavailableError:
            errors = {"form": "errors.network"}
        except BackendError as e:
            errors = {"form": backend_message(e, "auth.invalid_credentials")}

    return render_template(
        "login.html",
        role=role,
        identifier_field=identifier_field,
        identifier=identifier,
        errors=errors,
    ), (400 if errors else 200)


@auth_bp.route("/login/manager", methods=["GET", "POST"])
def login_manager():
    return _login(ROLE_MANAGER, "email")


@auth_bp.route("/login/agent", methods=["GET", "POST"])
def login_agent():
    return _login(ROLE_AGENT, "email")


@auth_bp.route("/admin", methods=["GET", "POST"])
def login_admin():
    return _login(ROLE_ADMIN, "username")


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    role = auth_service.logout()
    flash("auth.logged_out", "success")
    return redirect(auth_service.login_url(role))
