from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from halalgains.extensions import db
from halalgains.models import WorkoutPlan, WorkoutDay
from halalgains.schemas import WorkoutLogSchema
from halalgains.services import progress as progress_service
from halalgains.services.workouts import can_view
from halalgains.utils.decorators import client_required, login_required

progress_bp = Blueprint("progress", __name__)
log_schema = WorkoutLogSchema()


@progress_bp.route("/dashboard", methods=["GET"])
@client_required
def dashboard(current_user):
    return jsonify(progress_service.today_workout(current_user)), 200


@progress_bp.route("/workout-exercises/<int:exercise_id>/toggle", methods=["POST"])
@client_required
def toggle_exercise(exercise_id, current_user):
    exercise = progress_service.exercise_for_client(exercise_id, current_user)
    if not exercise:
        return jsonify({"msg": "Exercise not found"}), 404

    try:
        result = progress_service.toggle_exercise_completion(exercise, current_user)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("toggle_exercise_completion failed for exercise %s", exercise_id)
        return jsonify({"msg": "Internal server error"}), 500
    return jsonify(result), 200


@progress_bp.route("/progress/workout-plans/<int:plan_id>", methods=["GET"])
@login_required
def plan_progress(plan_id, current_user):
    plan = db.get_or_404(WorkoutPlan, plan_id, description="Workout plan not found")
    if not can_view(plan, current_user):
        return jsonify({"msg": "Unauthorized"}), 403
    return jsonify(progress_service.plan_progress(plan, current_user)), 200


@progress_bp.route("/workout-days/<int:day_id>/log", methods=["POST"])
@client_required
def log_day(day_id, current_user):
    day = db.get_or_404(WorkoutDay, day_id, description="Day not found")
    if day.week.plan.client_id != current_user.id:
        return jsonify({"msg": "Unauthorized"}), 403

    data = log_schema.load(request.get_json(silent=True) or {})
    try:
        payload, status = progress_service.log_workout_day(day, current_user, data)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("log_workout_day failed for day %s", day_id)
        return jsonify({"msg": "Internal server error"}), 500
    return jsonify(payload), status
