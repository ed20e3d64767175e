"""
Flask route blueprints for OrderDesk.

This module contains all route handlers organized by functionality:
- auth: Login pages per role and logout
- orders: Order list, details, transitions and discount form
- customers: Customer management (role-scoped)
- products: Product catalog
- categories: Product categories
- locations: Pickup locations
- agents: Sales agents (managers)
- managers: Manager accounts (admin)
- profile: The logged-in manager's own account
- overrides: Customer-specific product prices
- store: Public store link for customers
- api: Health check

Each blueprint is registered with the Flask app in create_app().
"""

from .auth import auth_bp
from .orders import orders_bp
from .customers import customers_bp
from .products import products_bp
from .categories import categories_bp
from .locations import locations_bp
from .agents import agents_bp
from .managers import managers_bp
from .profile import profile_bp
from .overrides import overrides_bp
from .store import store_bp
from .api import api_bp

__all__ = [
    "auth_bp",
    "orders_bp",
    "customers_bp",
    "products_bp",
    "categories_bp",
    "locations_bp",
    "agents_bp",
    "managers_bp",
    "profile_bp",
    "overrides_bp",
    "store_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(auth_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(locations_bp)
    app.register_blueprint(agents_bp)
    app.register_blueprint(managers_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(overrides_bp)
    app.register_blueprint(store_bp)
    app.register_blueprint(api_bp)
