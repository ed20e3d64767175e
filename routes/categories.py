"""
Category routes (managers).

Categories are a single name, so create and rename are posted from the
list page and reported with flash messages.
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.validation import MAX_CATEGORY_LENGTH, validate_fields, validate_required_with_max_length
from services.auth_service import login_required
from .helpers import api_client, flash_backend_error, form_values


# Module logger
logger = get_logger(__name__)

categories_bp = Blueprint("categories", __name__)


def _read_name() -> str:
    name = form_values(("name",))["name"]
    validate_fields([("name", validate_required_with_max_length(name, MAX_CATEGORY_LENGTH))])
    return name


@categories_bp.route("/categories", methods=["GET"])
@login_required(ROLE_MANAGER)
def list_categories():
    return render_template("categories/list.html", categories=api_client().list_categories())


@categories_bp.route("/categories/new", methods=["POST"])
@login_required(ROLE_MANAGER)
def create_category():
    try:
        name = _read_name()
        api_client().create_category(name)
        logger.info(f"Category created: {name}")
        flash("categories.created", "success")
    except ValidationError as e:
        flash(e.first_error, "error")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("categories.list_categories"))


@categories_bp.route("/categories/<int:category_id>/edit", methods=["POST"])
@login_required(ROLE_MANAGER)
def edit_category(category_id: int):
    try:
        name = _read_name()
        api_client().update_category(category_id, name)
        flash("categories.updated", "success")
    except ValidationError as e:
        flash(e.first_error, "error")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("categories.list_categories"))


@categories_bp.route("/categories/<int:category_id>/delete", methods=["POST"])
@login_required(ROLE_MANAGER)
def delete_category(category_id: int):
    try:
        api_client().delete_category(category_id)
        flash("categories.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("categories.list_categories"))
