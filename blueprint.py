from index import main_bp
from routes.auth import auth_bp
from routes.inventory import inventory_bp
from routes.requests import requests_bp
from routes.users import users_bp


def blue_print(app):
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(requests_bp)
    app.register_blueprint(users_bp)
