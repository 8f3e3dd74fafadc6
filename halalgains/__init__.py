import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from halalgains.config import config
from halalgains.extensions import db, ma, jwt, migrate, socketio, limiter, scheduler


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(level)


def configure_scheduler(app):
    """Start the hydration reminder job once per process."""
    from halalgains.services.hydration import dispatch_due_reminders

    if not app.config.get('SCHEDULER_ENABLED') or scheduler.running:
        return

    scheduler.init_app(app)
    scheduler.add_job(
        id='hydration_reminders',
        func=dispatch_due_reminders,
        args=[app],
        trigger='interval',
        seconds=app.config['HYDRATION_CHECK_SECONDS'],
        replace_existing=True,
    )
    scheduler.start()
    app.logger.info("Hydration reminder job scheduled every %ss", app.config['HYDRATION_CHECK_SECONDS'])


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def validation_error(error):
        return jsonify({"msg": "Invalid input", "errors": error.messages}), 400

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({"msg": error.description}), error.code

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        app.logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify({"msg": "Internal server error"}), 500

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return jsonify({"msg": reason}), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return jsonify({"msg": reason}), 401


def create_app(config_name=None, overrides=None):
    app = Flask(__name__)
    config_name = config_name or os.getenv('FLASK_CONFIG', 'default')
    app.config.from_object(config[config_name])
    if overrides:
        app.config.update(overrides)

    configure_logging(app)

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {
        "origins": app.config['CORS_ORIGINS'],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    }}, supports_credentials=True)
    socketio.init_app(app, async_mode=app.config['SOCKETIO_ASYNC_MODE'])

    from halalgains.realtime import register_socket_handlers
    register_socket_handlers()

    register_error_handlers(app)

    from halalgains.cli import register_commands
    register_commands(app)

    from halalgains.routes.auth import auth_bp
    from halalgains.routes.coaches import coaches_bp
    from halalgains.routes.chat import chat_bp
    from halalgains.routes.workout_plans import workout_plans_bp
    from halalgains.routes.progress import progress_bp
    from halalgains.routes.meal_plans import meal_plans_bp
    from halalgains.routes.hydration import hydration_bp
    from halalgains.routes.uploads import uploads_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(coaches_bp, url_prefix="/api/coaches")
    app.register_blueprint(chat_bp, url_prefix="/api")
    app.register_blueprint(workout_plans_bp, url_prefix="/api")
    app.register_blueprint(progress_bp, url_prefix="/api")
    app.register_blueprint(meal_plans_bp, url_prefix="/api")
    app.register_blueprint(hydration_bp, url_prefix="/api/hydration-reminders")
    app.register_blueprint(uploads_bp)

    configure_scheduler(app)

    return app


# JWT callback
@jwt.user_lookup_loader
def user_lookup_callback(_jwt_header, jwt_data):
    from halalgains.models import User

    identity = jwt_data["sub"]
    return db.session.get(User, int(identity))
