"""
Pickup location routes (managers).
"""

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.validation import validate_location_form
from services.auth_service import login_required
from .helpers import api_client, backend_message, flash_backend_error, form_values


# Module logger
logger = get_logger(__name__)

locations_bp = Blueprint("locations", __name__)

LOCATION_FIELDS = ("name", "streetAddress", "city", "phoneNumber")

FORM_FIELDS = (
    ("name", "fields.location_name", "text"),
    ("streetAddress", "fields.street_address", "text"),
    ("city", "fields.city", "text"),
    ("phoneNumber", "fields.phone", "tel"),
)


def _render_form(title_key, action, values, errors=None, status_code=200):
    return render_template(
        "form.html",
        title=title_key,
        action=action,
        fields=FORM_FIELDS,
        values=values,
        errors=errors or {},
        cancel_url=url_for("locations.list_locations"),
    ), status_code


def _payload(values):
    return {key: (value or None) for key, value in values.items()}


@locations_bp.route("/locations", methods=["GET"])
@login_required(ROLE_MANAGER)
def list_locations():
    return render_template("locations/list.html", locations=api_client().list_locations())


@locations_bp.route("/locations/new", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def create_location():
    action = url_for("locations.create_location")
    if request.method == "GET":
        return _render_form("locations.new", action, {})

    values = form_values(LOCATION_FIELDS)
    try:
        validate_location_form(values)
        api_client().create_location(_payload(values))
    except ValidationError as e:
        return _render_form("locations.new", action, values, e.errors, 400)
    except BusinessRuleError as e:
        return _render_form("locations.new", action, values, {"form": backend_message(e)}, 400)

    logger.info(f"Location created: {values['name']}")
    flash("locations.created", "success")
    return redirect(url_for("locations.list_locations"))


@locations_bp.route("/locations/<int:location_id>/edit", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def edit_location(location_id: int):
    action = url_for("locations.edit_location", location_id=location_id)
    if request.method == "GET":
        location = next(
            (loc for loc in api_client().list_locations() if loc.id == location_id), None
        )
        if location is None:
            abort(404)
        values = {
            "name": location.name,
            "streetAddress": location.street_address,
            "city": location.city,
            "phoneNumber": location.phone_number,
        }
        return _render_form("locations.edit", action, values)

    values = form_values(LOCATION_FIELDS)
    try:
        validate_location_form(values)
        api_client().update_location(location_id, _payload(values))
    except ValidationError as e:
        return _render_form("locations.edit", action, values, e.errors, 400)
    except BusinessRuleError as e:
        return _render_form("locations.edit", action, values, {"form": backend_message(e)}, 400)

    flash("locations.updated", "success")
    return redirect(url_for("locations.list_locations"))


@locations_bp.route("/locations/<int:location_id>/delete", methods=["POST"])
@login_required(ROLE_MANAGER)
def delete_location(location_id: int):
    try:
        api_client().delete_location(location_id)
        flash("locations.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("locations.list_locations"))
