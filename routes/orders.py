"""
Order routes (managers and agents).

Handles:
- /orders                      - Paginated list with status filter and sorting
- /orders/new                  - Create an EMPTY order (store link)
- /orders/<id>                 - Order details with shareable link
- /orders/<id>/done            - Mark PLACED order as DONE
- /orders/<id>/cancel          - Cancel an open order
- /orders/<id>/discount        - Discount form

After a confirmed transition the page is rendered from the locally
transitioned order; the backend is not asked for the order again.
"""

from flask import (
    Blueprint,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)

from core.api_client import ROLE_AGENT, ROLE_MANAGER
from core.exceptions import BackendUnavailableError, BusinessRuleError, ValidationError
from logging_config import get_logger
from models.order import OrderStatus
from modules.pricing import DiscountForm, DiscountMode, discount_percentage
from modules.query import ListQuery, ORDER_FILTERS, ORDER_QUERY
from services.auth_service import login_required
from .helpers import backend_message, flash_backend_error, order_service


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("/orders", methods=["GET"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def list_orders():
    """Order cards, filtered by status and sorted by the chosen field."""
    service = order_service()
    query = ListQuery.from_args(request.args, ORDER_QUERY, ORDER_FILTERS)
    page = service.list(query)
    return render_template(
        "orders/list.html",
        page=page,
        query=query,
        statuses=list(OrderStatus),
        customers=service.customers(),
    )


@orders_bp.route("/orders/new", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def create_order():
    service = order_service()
    try:
        order_id = service.create(request.form.get("customerId"))
    except BusinessRuleError as e:
        flash_backend_error(e)
        return redirect(url_for("orders.list_orders"))

    flash("orders.created", "success")
    if order_id:
        return redirect(url_for("orders.view_order", order_id=order_id))
    return redirect(url_for("orders.list_orders"))


def _render_order(service, order, discount_form=None, status_code=200):
    return render_template(
        "orders/view.html",
        order=order,
        store_link=service.store_link(order.id),
        discount_form=discount_form,
        discount_percentage=discount_percentage(order.discount, order.subtotal),
        modes=list(DiscountMode),
    ), status_code


@orders_bp.route("/orders/<order_id>", methods=["GET"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def view_order(order_id: str):
    service = order_service()
    return _render_order(service, service.get(order_id))


@orders_bp.route("/orders/<order_id>/done", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def mark_done(order_id: str):
    service = order_service()
    order = service.get(order_id)
    if order.status is not OrderStatus.PLACED:
        flash("orders.errors.not_placed", "error")
        return _render_order(service, order, status_code=409)
    try:
        order = service.mark_done(order)
    except BusinessRuleError as e:
        flash_backend_error(e)
        return _render_order(service, order, status_code=400)
    flash("orders.marked_done", "success")
    return _render_order(service, order)


@orders_bp.route("/orders/<order_id>/cancel", methods=["POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def cancel_order(order_id: str):
    service = order_service()
    order = service.get(order_id)
    if not order.is_open:
        flash("orders.errors.not_open", "error")
        return _render_order(service, order, status_code=409)
    try:
        order = service.cancel(order)
    except BusinessRuleError as e:
        flash_backend_error(e)
        return _render_order(service, order, status_code=400)
    flash("orders.cancelled", "success")
    return _render_order(service, order)


@orders_bp.route("/orders/<order_id>/discount", methods=["GET", "POST"])
@login_required(ROLE_MANAGER, ROLE_AGENT)
def discount(order_id: str):
    """
    Discount form.

    GET: Form prefilled with the current discount (absolute mode)
    POST action=switch_mode: Switch mode; value and error are cleared
    POST action=apply: Validate, compute and submit the discount
    """
    service = order_service()
    order = service.get(order_id)
    form = DiscountForm.for_items(order.items, order.discount)

    if request.method == "GET":
        return _render_order(service, order, discount_form=form)

    mode = DiscountMode.parse(request.form.get("mode"))
    action = request.form.get("action", "apply")

    if action == "switch_mode":
        form.switch_mode(mode)
        return _render_order(service, order, discount_form=form)

    form.switch_mode(mode)
    form.set_value(request.form.get("value", ""))
    try:
        order, _ = service.apply_discount(order, form.value, form.mode)
    except ValidationError as e:
        form.fail(e.first_error)
        return _render_order(service, order, discount_form=form, status_code=400)
    except BusinessRuleError as e:
        logger.warning(f"Discount rejected for order {order.short_id}: {e.user_message}")
        form.fail(backend_message(e, "discount.errors.rejected"))
        return _render_order(service, order, discount_form=form, status_code=400)
    except BackendUnavailableError:
        logger.warning(f"Discount for order {order.short_id} not sent: backend unavailable")
        form.fail("errors.network")
        return _render_order(service, order, discount_form=form, status_code=503)

    flash("discount.applied", "success")
    return _render_order(service, order)
