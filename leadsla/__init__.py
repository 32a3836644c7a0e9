"""
Flask application factory.

Creates and configures the Flask app, registers all blueprints.
"""
import importlib

from flask import Flask


def create_app():
    """Create and configure the Flask application."""
    from leadsla.logging_config import configure_logging

    app = Flask(__name__)

    configure_logging(app)

    # Register blueprints
    from leadsla.routes.health import bp as health_bp
    from leadsla.routes.deadlines import bp as deadlines_bp
    from leadsla.routes.scans import bp as scans_bp
    from leadsla.routes.leads import bp as leads_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(deadlines_bp)
    app.register_blueprint(scans_bp)
    app.register_blueprint(leads_bp)

    # Import models so Base.metadata knows about them.
    # Schema is managed by Alembic — no create_all() call.
    importlib.import_module('leadsla.models.company')
    importlib.import_module('leadsla.models.team_member')
    importlib.import_module('leadsla.models.prospect_lead')

    return app
