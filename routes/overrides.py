"""
Product override routes (managers and agents, role-scoped).

Handles:
- /overrides                        - All overrides, filterable by product,
                                      customer and (managers only) agent
- /customers/<id>/overrides         - Overrides of one customer
- /overrides/new                    - Create (product + customer + price)
- /overrides/<id>/edit              - Change price (unchanged price is a no-op)
- /overrides/<id>/delete            - Delete
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_AGENT, ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from models.catalog import ProductOverride
from models.fields import to_decimal
from modules.query import (
    AGENT_FILTER_ALL,
    AGENT_FILTER_MANAGER,
    CUSTOMER_OVERRIDE_QUERY,
    ListQuery,
    OVERRIDE_FILTERS,
    OVERRIDE_QUERY,
    PRODUCT_QUERY,
)
from services.auth_service import current_role, login_required
from .helpers import api_client, flash_backend_error, override_service


# Module logger
logger = get_logger(__name__)

overrides_bp = Blueprint("overrides", __name__)

# Enough to fill the product picker in one request
PRODUCT_PICKER_SIZE = 100


def _redirect_back(default_endpoint: str = "overrides.list_overrides", **values):
    """Return to the page the form was posted from (local paths only)."""
    target = request.form.get("next", "")
    if target.startswith("/") and not target.startswith("//"):
        return redirect(target)
    return redirect(url_for(default_endpoint, **values))


def _picker_products():
    query = PRODUCT_QUERY.with_size(PRODUCT_PICKER_SIZE)
    return api_client().list_products(query, role=current_role()).content


@overrides_bp.route("/overrides", methods=["GET"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def list_overrides():
    role = current_role()
    filter_keys = OVERRIDE_FILTERS if role == ROLE_MANAGER else ("productId", "customerId")
    query = ListQuery.from_args(request.args, OVERRIDE_QUERY, filter_keys)
    page = override_service().list(query)
    return render_template(
        "overrides/list.html",
        page=page,
        query=query,
        products=_picker_products(),
        customers=api_client().list_customers(role=role),
        agents=api_client().list_agents() if role == ROLE_MANAGER else [],
        agent_filter_all=AGENT_FILTER_ALL,
        agent_filter_manager=AGENT_FILTER_MANAGER,
    )


@overrides_bp.route("/customers/<customer_id>/overrides", methods=["GET"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def customer_overrides(customer_id: str):
    customer = api_client().get_customer(customer_id, role=current_role())
    query = ListQuery.from_args(request.args, CUSTOMER_OVERRIDE_QUERY, ("productId",))
    query = query.with_filter("customerId", customer_id).goto(query.page)
    page = override_service().list(query)
    return render_template(
        "overrides/customer.html",
        customer=customer,
        page=page,
        query=query,
        products=_picker_products(),
    )


@overrides_bp.route("/overrides/new", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def create_override():
    try:
        override_service().create(
            request.form.get("productId", "").strip(),
            request.form.get("customerId", "").strip(),
            request.form.get("overridePrice", ""),
        )
        flash("overrides.created", "success")
    except ValidationError as e:
        flash(e.first_error, "error")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return _redirect_back()


@overrides_bp.route("/overrides/<int:override_id>/edit", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def edit_override(override_id: int):
    current = ProductOverride(
        id=override_id,
        product_id=request.form.get("productId", ""),
        customer_id=request.form.get("customerId", ""),
        override_price=to_decimal(request.form.get("currentPrice")),
    )
    try:
        if override_service().update(current, request.form.get("overridePrice", "")):
            flash("overrides.updated", "success")
    except ValidationError as e:
        flash(e.first_error, "error")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return _redirect_back()


@overrides_bp.route("/overrides/<int:override_id>/delete", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def delete_override(override_id: int):
    try:
        override_service().delete(override_id)
        flash("overrides.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return _redirect_back()
