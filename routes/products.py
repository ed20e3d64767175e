"""
Product catalog routes.

Managers maintain the catalog; agents can browse it.
"""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_AGENT, ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.query import ListQuery, PRODUCT_FILTERS, PRODUCT_QUERY
from modules.validation import validate_product_form
from services.auth_service import current_role, login_required
from .helpers import api_client, backend_message, flash_backend_error, form_values


# Module logger
logger = get_logger(__name__)

products_bp = Blueprint("products", __name__)

PRODUCT_FIELDS = ("name", "originalPrice", "specialPrice", "categoryId", "description")

FORM_FIELDS = (
    ("name", "fields.name", "text"),
    ("originalPrice", "fields.original_price", "number"),
    ("specialPrice", "fields.special_price", "number"),
    ("categoryId", "fields.category", "category"),
    ("description", "fields.description", "textarea"),
)


def _render_form(title_key, action, values, errors=None, status_code=200):
    return render_template(
        "form.html",
        title=title_key,
        action=action,
        fields=FORM_FIELDS,
        values=values,
        errors=errors or {},
        categories=api_client().list_categories(),
        cancel_url=url_for("products.list_products"),
    ), status_code


def _payload(values):
    category_id = values.get("categoryId")
    return {
        "name": values["name"],
        "originalPrice": float(values["originalPrice"]),
        "specialPrice": float(values["specialPrice"]),
        "categoryId": int(category_id) if category_id and category_id.isdigit() else None,
        "description": values.get("description") or "",
    }


@products_bp.route("/products", methods=["GET"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def list_products():
    query = ListQuery.from_args(request.args, PRODUCT_QUERY, PRODUCT_FILTERS)
    page = api_client().list_products(query, role=current_role())
    return render_template(
        "products/list.html",
        page=page,
        query=query,
        categories=api_client().list_categories(),
    )


@products_bp.route("/products/new", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def create_product():
    action = url_for("products.create_product")
    if request.method == "GET":
        return _render_form("products.new", action, {})

    values = form_values(PRODUCT_FIELDS)
    try:
        validate_product_form(values)
        api_client().create_product(_payload(values))
    except ValidationError as e:
        return _render_form("products.new", action, values, e.errors, 400)
    except BusinessRuleError as e:
        return _render_form("products.new", action, values, {"form": backend_message(e)}, 400)

    logger.info(f"Product created: {values['name']}")
    flash("products.created", "success")
    return redirect(url_for("products.list_products"))


@products_bp.route("/products/<product_id>/edit", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def edit_product(product_id: str):
    action = url_for("products.edit_product", product_id=product_id)
    if request.method == "GET":
        product = api_client().get_product(product_id)
        values = {
            "name": product.name,
            "originalPrice": str(product.original_price),
            "specialPrice": str(product.special_price),
            "categoryId": str(product.category_id or ""),
            "description": product.description,
        }
        return _render_form("products.edit", action, values)

    values = form_values(PRODUCT_FIELDS)
    try:
        validate_product_form(values)
        api_client().update_product(product_id, _payload(values))
    except ValidationError as e:
        return _render_form("products.edit", action, values, e.errors, 400)
    except BusinessRuleError as e:
        return _render_form("products.edit", action, values, {"form": backend_message(e)}, 400)

    logger.info(f"Product {product_id} updated")
    flash("products.updated", "success")
    return redirect(url_for("products.list_products"))


@products_bp.route("/products/<product_id>/delete", methods=["POST"])
@login_required(ROLE_MANAGER)
def delete_product(product_id: str):
    try:
        api_client().delete_product(product_id)
        flash("products.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("products.list_products"))
