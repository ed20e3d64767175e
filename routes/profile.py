"""
Profile routes (the logged-in manager's own account).

GET/POST /profile           Show and update personal details
POST     /profile/password  Change the password
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.validation import validate_password_change, validate_profile_form
from services.auth_service import login_required
from .helpers import api_client, backend_message, form_values


# Module logger
logger = get_logger(__name__)

profile_bp = Blueprint("profile", __name__)

PROFILE_FIELDS = (
    ("firstName", "fields.first_name", "text"),
    ("lastName", "fields.last_name", "text"),
    ("phoneNumber", "fields.phone", "tel"),
    ("dateOfBirth", "fields.date_of_birth", "date"),
    ("streetAddress", "fields.street_address", "text"),
    ("city", "fields.city", "text"),
    ("businessName", "fields.business_name", "text"),
)

PASSWORD_FIELDS = (
    ("oldPassword", "fields.old_password", "password"),
    ("newPassword", "fields.new_password", "password"),
    ("confirmPassword", "fields.confirm_password", "password"),
)

OPTIONAL_FIELDS = ("dateOfBirth", "streetAddress", "city", "businessName")


def _render_profile(values=None, errors=None, password_errors=None, status_code=200):
    manager = api_client().get_current_user()
    return render_template(
        "profile.html",
        manager=manager,
        fields=PROFILE_FIELDS,
        password_fields=PASSWORD_FIELDS,
        values=values if values is not None else manager.to_profile_form(),
        errors=errors or {},
        password_errors=password_errors or {},
    ), status_code


@profile_bp.route("/profile", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def view_profile():
    if request.method == "GET":
        return _render_profile()

    values = form_values([name for name, _, _ in PROFILE_FIELDS])
    try:
        validate_profile_form(values)
        # Blank optional fields are cleared rather than sent as empty strings
        payload = {
            key: (value or None) if key in OPTIONAL_FIELDS else value
            for key, value in values.items()
        }
        api_client().update_current_user(payload)
    except ValidationError as e:
        return _render_profile(values, errors=e.errors, status_code=400)
    except BusinessRuleError as e:
        return _render_profile(values, errors={"form": backend_message(e)}, status_code=400)

    logger.info("Profile updated")
    flash("profile.updated", "success")
    return redirect(url_for("profile.view_profile"))


@profile_bp.route("/profile/password", methods=["POST"])
@login_required(ROLE_MANAGER)
def change_password():
    values = form_values([name for name, _, _ in PASSWORD_FIELDS])
    try:
        validate_password_change(values)
        api_client().update_current_user_password(
            values["oldPassword"], values["newPassword"], values["confirmPassword"]
        )
    except ValidationError as e:
        return _render_profile(password_errors=e.errors, status_code=400)
    except BusinessRuleError as e:
        return _render_profile(password_errors={"form": backend_message(e)}, status_code=400)

    logger.info("Password changed")
    flash("profile.password_changed", "success")
    return redirect(url_for("profile.view_profile"))
