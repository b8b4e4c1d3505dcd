"""Blueprint registration module.

This file only wires together the blueprints. Route implementations live in
versioned modules:
    * bulk_user_admin.routes.v1.bulk_user_route -> bulk_user_bp
"""

from bulk_user_admin.routes.v1.bulk_user_route import bulk_user_bp


def register_blueprints(app):
    """Register application blueprints with the Flask app instance."""
    prefix = app.config.get('API_PREFIX', '/api/v1/bulk-user-admin')
    app.register_blueprint(bulk_user_bp, url_prefix=prefix)
    app.logger.info("Blueprints registered (bulk_user_api at %s)", prefix)
