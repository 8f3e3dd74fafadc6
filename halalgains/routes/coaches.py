from flask import Blueprint, request, jsonify, current_app

from halalgains.extensions import db
from halalgains.models import CoachProfile
from halalgains.schemas import CoachFilterSchema, CoachProfileUpdateSchema, ReviewSchema, AssignCoachSchema
from halalgains.services import coaches as coach_service
from halalgains.storage import save_upload, UploadError
from halalgains.utils.decorators import login_required, client_required, coach_required

coaches_bp = Blueprint("coaches", __name__)
filter_schema = CoachFilterSchema()
profile_update_schema = CoachProfileUpdateSchema()
review_schema = ReviewSchema()
assign_schema = AssignCoachSchema()


def _own_profile(user):
    return user.coach_profile


@coaches_bp.route("", methods=["GET"])
@login_required
def list_coaches(current_user):
    filters = filter_schema.load(request.args.to_dict())
    return jsonify(coach_service.browse_coaches(filters)), 200


@coaches_bp.route("/<int:coach_id>", methods=["GET"])
@login_required
def get_coach(coach_id, current_user):
    coach = db.get_or_404(CoachProfile, coach_id, description="Coach not found")
    return jsonify(coach_service.coach_detail(coach)), 200


@coaches_bp.route("/me/coach", methods=["GET"])
@client_required
def my_coach(current_user):
    profile = current_user.client_profile
    if not profile or not profile.coach:
        return jsonify({"coach": None}), 200
    return jsonify({"coach": coach_service.coach_detail(profile.coach)}), 200


@coaches_bp.route("/me", methods=["PUT"])
@coach_required
def update_my_profile(current_user):
    coach = _own_profile(current_user)
    if not coach:
        return jsonify({"msg": "Coach profile not found"}), 404

    data = profile_update_schema.load(request.get_json(silent=True) or {})
    coach_service.update_coach_profile(coach, data)
    return jsonify({"msg": "Profile updated", "coach": coach.to_dict()}), 200


@coaches_bp.route("/me/photos", methods=["POST"])
@coach_required
def upload_photo(current_user):
    coach = _own_profile(current_user)
    if not coach:
        return jsonify({"msg": "Coach profile not found"}), 404

    try:
        url = save_upload(request.files.get("file"), "coach-photos")
    except UploadError as e:
        return jsonify({"msg": str(e)}), 400

    # reassign so the JSON column is flagged dirty
    coach.profile_photos = list(coach.profile_photos or []) + [url]
    db.session.commit()
    return jsonify({"msg": "Photo uploaded", "url": url, "profile_photos": coach.profile_photos}), 201


@coaches_bp.route("/<int:coach_id>/reviews", methods=["POST"])
@client_required
def review_coach(coach_id, current_user):
    coach = db.get_or_404(CoachProfile, coach_id, description="Coach not found")
    data = review_schema.load(request.get_json(silent=True) or {})
    payload, status = coach_service.add_review(coach, current_user, data["rating"], data.get("review_text"))
    return jsonify(payload), status


@coaches_bp.route("/assign", methods=["POST"])
@coach_required
def assign_client(current_user):
    data = assign_schema.load(request.get_json(silent=True) or {})
    try:
        result = coach_service.assign_coach_to_client(current_user.id, data["client_user_id"])
    except Exception:
        db.session.rollback()
        current_app.logger.exception("assign_coach_to_client failed")
        return jsonify({"success": False, "error": "Assignment failed"}), 500

    if not result["success"]:
        return jsonify(result), 404
    return jsonify(result), 200


@coaches_bp.route("/me/clients", methods=["GET"])
@coach_required
def my_clients(current_user):
    coach = _own_profile(current_user)
    if not coach:
        return jsonify({"msg": "Coach profile not found"}), 404
    return jsonify({"clients": coach_service.coach_clients(coach)}), 200
