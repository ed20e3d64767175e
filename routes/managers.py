"""
Manager account routes (admin only).
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_ADMIN
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.validation import (
    validate_email,
    validate_password,
    validate_password_confirmation,
    validate_person_form,
)
from services.auth_service import login_required
from .helpers import api_client, backend_message, flash_backend_error, form_values


# Module logger
logger = get_logger(__name__)

managers_bp = Blueprint("managers", __name__)

MANAGER_FIELDS = ("firstName", "lastName", "email", "phoneNumber", "password", "confirmPassword")

FORM_FIELDS = (
    ("firstName", "fields.first_name", "text"),
    ("lastName", "fields.last_name", "text"),
    ("email", "fields.email", "email"),
    ("phoneNumber", "fields.phone", "tel"),
    ("password", "fields.password", "password"),
    ("confirmPassword", "fields.confirm_password", "password"),
)


@managers_bp.route("/managers", methods=["GET"])
@login_required(ROLE_ADMIN)
def list_managers():
    return render_template("managers/list.html", managers=api_client().list_managers())


@managers_bp.route("/managers/new", methods=["GET", "POST"])
@login_required(ROLE_ADMIN)
def create_manager():
    values = {}
    errors = {}

    if request.method == "POST":
        values = form_values(MANAGER_FIELDS)
        try:
            validate_person_form(values, require_password=True)
            confirmation_error = validate_password_confirmation(
                values["password"], values["confirmPassword"]
            )
            if confirmation_error:
                raise ValidationError({"confirmPassword": confirmation_error})
            payload = {key: value for key, value in values.items() if key != "confirmPassword"}
            api_client().create_manager(payload)
            logger.info(f"Manager created: {values['email']}")
            flash("managers.created", "success")
            return redirect(url_for("managers.list_managers"))
        except ValidationError as e:
            errors = e.errors
        except BusinessRuleError as e:
            errors = {"form": backend_message(e)}

    shown = {key: value for key, value in values.items() if "password" not in key.lower()}
    return render_template(
        "form.html",
        title="managers.new",
        action=url_for("managers.create_manager"),
        fields=FORM_FIELDS,
        values=shown,
        errors=errors,
        cancel_url=url_for("managers.list_managers"),
    ), (400 if errors else 200)


@managers_bp.route("/managers/<manager_id>/delete", methods=["POST"])
@login_required(ROLE_ADMIN)
def delete_manager(manager_id: str):
    email = form_values(("email",))["email"]
    if validate_email(email):
        flash("errors.generic", "error")
        return redirect(url_for("managers.list_managers"))
    try:
        api_client().delete_manager(manager_id, email)
        logger.info(f"Manager deleted: {email}")
        flash("managers.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("managers.list_managers"))


@managers_bp.route("/managers/<manager_id>/reset-password", methods=["POST"])
@login_required(ROLE_ADMIN)
def reset_password(manager_id: str):
    """Set a new password for a manager who cannot log in."""
    values = form_values(("email", "newPassword"))
    error = validate_email(values["email"]) or validate_password(values["newPassword"])
    if error:
        flash(error, "error")
        return redirect(url_for("managers.list_managers"))
    try:
        api_client().reset_manager_password(values["email"], values["newPassword"])
        logger.info(f"Password reset for manager {manager_id}")
        flash("managers.password_reset", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("managers.list_managers"))
