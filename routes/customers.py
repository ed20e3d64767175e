"""
Customer routes (managers and agents, role-scoped).

Handles:
- /customers                   - List with search
- /customers/new               - Create form
- /customers/<id>/edit         - Edit form
- /customers/<id>/delete       - Delete
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_AGENT, ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.formatting import filter_customers
from modules.validation import validate_customer_form
from services.auth_service import current_role, login_required
from .helpers import api_client, backend_message, flash_backend_error, form_values


# Module logger
logger = get_logger(__name__)

customers_bp = Blueprint("customers", __name__)

CUSTOMER_FIELDS = ("name", "phoneNumber", "email", "streetAddress", "city")

FORM_FIELDS = (
    ("name", "fields.name", "text"),
    ("phoneNumber", "fields.phone", "tel"),
    ("email", "fields.email", "email"),
    ("streetAddress", "fields.street_address", "text"),
    ("city", "fields.city", "text"),
)


def _render_form(title_key, action, values, errors=None, status_code=200):
    return render_template(
        "form.html",
        title=title_key,
        action=action,
        fields=FORM_FIELDS,
        values=values,
        errors=errors or {},
        cancel_url=url_for("customers.list_customers"),
    ), status_code


def _payload(values):
    """Blank optional fields are sent as null."""
    return {key: (value or None) for key, value in values.items()}


@customers_bp.route("/customers", methods=["GET"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def list_customers():
    search = request.args.get("q", "")
    customers = api_client().list_customers(role=current_role())
    return render_template(
        "customers/list.html",
        customers=filter_customers(customers, search),
        search=search,
    )


@customers_bp.route("/customers/new", methods=["GET", "POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def create_customer():
    action = url_for("customers.create_customer")
    if request.method == "GET":
        return _render_form("customers.new", action, {})

    values = form_values(CUSTOMER_FIELDS)
    try:
        validate_customer_form(values)
        api_client().create_customer(_payload(values), role=current_role())
    except ValidationError as e:
        return _render_form("customers.new", action, values, e.errors, 400)
    except BusinessRuleError as e:
        return _render_form("customers.new", action, values, {"form": backend_message(e)}, 400)

    logger.info("Customer created")
    flash("customers.created", "success")
    return redirect(url_for("customers.list_customers"))


@customers_bp.route("/customers/<customer_id>/edit", methods=["GET", "POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def edit_customer(customer_id: str):
    action = url_for("customers.edit_customer", customer_id=customer_id)
    if request.method == "GET":
        customer = api_client().get_customer(customer_id, role=current_role())
        values = {
            "name": customer.name,
            "phoneNumber": customer.phone_number,
            "email": customer.email,
            "streetAddress": customer.street_address,
            "city": customer.city,
        }
        return _render_form("customers.edit", action, values)

    values = form_values(CUSTOMER_FIELDS)
    try:
        validate_customer_form(values)
        api_client().update_customer(customer_id, _payload(values), role=current_role())
    except ValidationError as e:
        return _render_form("customers.edit", action, values, e.errors, 400)
    except BusinessRuleError as e:
        return _render_form("customers.edit", action, values, {"form": backend_message(e)}, 400)

    logger.info(f"Customer {customer_id} updated")
    flash("customers.updated", "success")
    return redirect(url_for("customers.list_customers"))


@customers_bp.route("/customers/<customer_id>/delete", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def delete_customer(customer_id: str):
    try:
        api_client().delete_customer(customer_id, role=current_role())
        flash("customers.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("customers.list_customers"))
