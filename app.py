from flask import Flask
from configs import db, login
import os

from dotenv import load_dotenv
from db.models.user import User, UserRole
from db.models.movement_request import RequestStatus, RequestType
from lifecycle.transitions import can_act
from blueprint import blue_print
from admin.setup import init_admin
from lifecycle.ext import init_lifecycle
from utils.logger import get_logger, set_level

load_dotenv()

logger = get_logger("app")


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


def create_app(config: dict | None = None) -> Flask:
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.secret_key = os.getenv("SECRET_KEY", "dev_secret")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL", "sqlite:///equipment.db"
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["RESERVE_ITEMS_ON_SUBMIT"] = _env_flag("RESERVE_ITEMS_ON_SUBMIT")
    app.config["DEFAULT_BASE"] = os.getenv("DEFAULT_BASE", "HQ")
    app.config["STORE_BACKEND"] = os.getenv("STORE_BACKEND", "sql")
    app.config["CREATE_TABLES"] = _env_flag("CREATE_TABLES", "True")
    app.config["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO")
    if config:
        app.config.update(config)

    set_level(app.config["LOG_LEVEL"])

    db.init_app(app)
    login.init_app(app)
    login.login_view = "auth.login"

    @app.context_processor
    def inject_enums():
        return dict(
            UserRole=UserRole,
            RequestStatus=RequestStatus,
            RequestType=RequestType,
            can_act=can_act,
        )

    @login.user_loader
    def load_user(user_id):
        return db.session.get(User, str(user_id))

    init_admin(app)  # tạo /manage
    blue_print(app)  # đăng ký các blueprint khác
    init_lifecycle(app)

    if app.config["CREATE_TABLES"]:
        with app.app_context():
            db.create_all()

    logger.info("App created (db=%s)", app.config["SQLALCHEMY_DATABASE_URI"].split(":")[0])
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(
        debug=_env_flag("FLASK_DEBUG"),
        host=os.getenv("FLASK_HOST", "0.0.0.0"),
        port=int(os.getenv("FLASK_PORT", "5000")),
    )
