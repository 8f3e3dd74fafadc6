from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from halalgains.extensions import limiter
from halalgains.models import User
from halalgains.schemas import SignUpSchema, LoginSchema
from halalgains.services.accounts import register_client, issue_token, profile_for
from halalgains.utils.decorators import login_required

auth_bp = Blueprint("auth", __name__)
signup_schema = SignUpSchema()
login_schema = LoginSchema()


@auth_bp.route("/signup", methods=["POST"])
@limiter.limit("5 per hour")
def signup():
    data = signup_schema.load(request.get_json(silent=True) or {})
    payload, status = register_client(data)
    return jsonify(payload), status


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per 15 minutes")
def login():
    data = login_schema.load(request.get_json(silent=True) or {})
    email = data["email"].strip().lower()

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(data["password"]):
        current_app.logger.info("Login failed for %s", email)
        return jsonify({"msg": "Invalid credentials"}), 401

    access_token = issue_token(user)
    response = jsonify({
        "msg": "Login successful",
        "access_token": access_token,
        "user": {
            "id": user.id,
            "name": user.display_name,
            "role": user.role,
        },
    })
    set_access_cookies(response, access_token)
    return response, 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"msg": "Logged out"})
    unset_jwt_cookies(response)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me(current_user):
    data = current_user.to_dict()
    data["profile"] = profile_for(current_user)
    return jsonify(data), 200
