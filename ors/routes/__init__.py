from .v1.ctl_route import ctl_bp


def register_blueprints(app):
    app.register_blueprint(ctl_bp, url_prefix='/ctl')
