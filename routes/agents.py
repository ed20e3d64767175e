"""
Agent routes (managers manage their sales agents).
"""

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from core.api_client import ROLE_MANAGER
from core.exceptions import BusinessRuleError, ValidationError
from logging_config import get_logger
from modules.validation import validate_person_form
from services.auth_service import login_required
from .helpers import api_client, backend_message, flash_backend_error, form_values


# Module logger
logger = get_logger(__name__)

agents_bp = Blueprint("agents", __name__)

AGENT_FIELDS = ("firstName", "lastName", "email", "phoneNumber", "streetAddress", "city", "password")

FORM_FIELDS = (
    ("firstName", "fields.first_name", "text"),
    ("lastName", "fields.last_name", "text"),
    ("email", "fields.email", "email"),
    ("phoneNumber", "fields.phone", "tel"),
    ("streetAddress", "fields.street_address", "text"),
    ("city", "fields.city", "text"),
    ("password", "fields.password", "password"),
)

# Edits never change the password
EDIT_FORM_FIELDS = FORM_FIELDS[:-1]


def _render_form(title_key, action, values, fields=FORM_FIELDS, errors=None, status_code=200):
    values = {key: value for key, value in values.items() if key != "password"}
    return render_template(
        "form.html",
        title=title_key,
        action=action,
        fields=fields,
        values=values,
        errors=errors or {},
        cancel_url=url_for("agents.list_agents"),
    ), status_code


@agents_bp.route("/agents", methods=["GET"])
@login_required(ROLE_MANAGER)
def list_agents():
    return render_template("agents/list.html", agents=api_client().list_agents())


@agents_bp.route("/agents/new", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def create_agent():
    action = url_for("agents.create_agent")
    if request.method == "GET":
        return _render_form("agents.new", action, {})

    values = form_values(AGENT_FIELDS)
    try:
        validate_person_form(values, require_password=True)
        api_client().create_agent(values)
    except ValidationError as e:
        return _render_form("agents.new", action, values, errors=e.errors, status_code=400)
    except BusinessRuleError as e:
        return _render_form("agents.new", action, values, errors={"form": backend_message(e)}, status_code=400)

    logger.info(f"Agent created: {values['email']}")
    flash("agents.created", "success")
    return redirect(url_for("agents.list_agents"))


@agents_bp.route("/agents/<int:agent_id>/edit", methods=["GET", "POST"])
@login_required(ROLE_MANAGER)
def edit_agent(agent_id: int):
    action = url_for("agents.edit_agent", agent_id=agent_id)
    if request.method == "GET":
        agent = next((a for a in api_client().list_agents() if a.id == agent_id), None)
        if agent is None:
            abort(404)
        values = {
            "firstName": agent.first_name,
            "lastName": agent.last_name,
            "email": agent.email,
            "phoneNumber": agent.phone_number,
            "streetAddress": agent.street_address,
            "city": agent.city,
        }
        return _render_form("agents.edit", action, values, fields=EDIT_FORM_FIELDS)

    values = form_values(AGENT_FIELDS[:-1])
    try:
        validate_person_form(values, require_password=False)
        api_client().update_agent(agent_id, values)
    except ValidationError as e:
        return _render_form(
            "agents.edit", action, values, fields=EDIT_FORM_FIELDS, errors=e.errors, status_code=400
        )
    except BusinessRuleError as e:
        return _render_form(
            "agents.edit", action, values, fields=EDIT_FORM_FIELDS,
            errors={"form": backend_message(e)}, status_code=400
        )

    flash("agents.updated", "success")
    return redirect(url_for("agents.list_agents"))


@agents_bp.route("/agents/<int:agent_id>/delete", methods=["POST"])
@login_required(ROLE_MANAGER)
def delete_agent(agent_id: int):
    try:
        api_client().delete_agent(agent_id)
        flash("agents.deleted", "success")
    except BusinessRuleError as e:
        flash_backend_error(e)
    return redirect(url_for("agents.list_agents"))
