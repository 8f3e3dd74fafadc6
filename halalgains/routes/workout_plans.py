from flask import Blueprint, request, jsonify

from halalgains.extensions import db
from halalgains.models import WorkoutPlan, WorkoutWeek, WorkoutDay, WorkoutExercise
from halalgains.schemas import WorkoutPlanSchema, WorkoutWeekSchema, WorkoutDaySchema, WorkoutExerciseSchema
from halalgains.services import workouts as workout_service
from halalgains.services.coaches import is_coach_client
from halalgains.utils.decorators import login_required, coach_required

workout_plans_bp = Blueprint("workout_plans", __name__)
plan_schema = WorkoutPlanSchema()
plan_update_schema = WorkoutPlanSchema(partial=True)
week_schema = WorkoutWeekSchema()
day_schema = WorkoutDaySchema()
exercise_schema = WorkoutExerciseSchema()
exercise_update_schema = WorkoutExerciseSchema(partial=True)


def _editable_plan(plan_id, user):
    plan = db.get_or_404(WorkoutPlan, plan_id, description="Workout plan not found")
    if not workout_service.can_edit(plan, user):
        return None, (jsonify({"msg": "Unauthorized"}), 403)
    return plan, None


@workout_plans_bp.route("/workout-plans", methods=["GET"])
@login_required
def list_plans(current_user):
    plans = workout_service.plans_for(current_user)
    return jsonify({"workout_plans": [workout_service.plan_summary(p, current_user) for p in plans]}), 200


@workout_plans_bp.route("/workout-plans", methods=["POST"])
@coach_required
def create_plan(current_user):
    coach = current_user.coach_profile
    if not coach:
        return jsonify({"msg": "Coach profile not found"}), 404

    data = plan_schema.load(request.get_json(silent=True) or {})
    if not is_coach_client(coach, data.get("client_id")):
        return jsonify({"msg": "Client is not one of your clients"}), 400

    plan = WorkoutPlan(coach_id=coach.id, **data)
    db.session.add(plan)
    db.session.commit()
    return jsonify({"msg": "Workout plan created", "workout_plan": plan.to_dict()}), 201


@workout_plans_bp.route("/workout-plans/<int:plan_id>", methods=["GET"])
@login_required
def get_plan(plan_id, current_user):
    plan = db.get_or_404(WorkoutPlan, plan_id, description="Workout plan not found")
    if not workout_service.can_view(plan, current_user):
        return jsonify({"msg": "Unauthorized"}), 403
    return jsonify(workout_service.plan_tree(plan)), 200


@workout_plans_bp.route("/workout-plans/<int:plan_id>", methods=["PUT"])
@coach_required
def update_plan(plan_id, current_user):
    plan, error = _editable_plan(plan_id, current_user)
    if error:
        return error

    data = plan_update_schema.load(request.get_json(silent=True) or {})
    if "client_id" in data and not is_coach_client(current_user.coach_profile, data["client_id"]):
        return jsonify({"msg": "Client is not one of your clients"}), 400

    for key, value in data.items():
        setattr(plan, key, value)
    db.session.commit()
    return jsonify({"msg": "Workout plan updated", "workout_plan": plan.to_dict()}), 200


@workout_plans_bp.route("/workout-plans/<int:plan_id>", methods=["DELETE"])
@coach_required
def delete_plan(plan_id, current_user):
    plan, error = _editable_plan(plan_id, current_user)
    if error:
        return error
    workout_service.delete_plan(plan)
    return jsonify({"msg": "Workout plan deleted"}), 200


@workout_plans_bp.route("/workout-plans/<int:plan_id>/weeks", methods=["POST"])
@coach_required
def add_week(plan_id, current_user):
    plan, error = _editable_plan(plan_id, current_user)
    if error:
        return error
    data = week_schema.load(request.get_json(silent=True) or {})
    payload, status = workout_service.add_week(plan, data.get("week_number"))
    return jsonify(payload), status


@workout_plans_bp.route("/workout-weeks/<int:week_id>", methods=["DELETE"])
@coach_required
def delete_week(week_id, current_user):
    week = db.get_or_404(WorkoutWeek, week_id, description="Week not found")
    _, error = _editable_plan(week.workout_plan_id, current_user)
    if error:
        return error
    db.session.delete(week)
    db.session.commit()
    return jsonify({"msg": "Week deleted"}), 200


@workout_plans_bp.route("/workout-weeks/<int:week_id>/days", methods=["POST"])
@coach_required
def add_day(week_id, current_user):
    week = db.get_or_404(WorkoutWeek, week_id, description="Week not found")
    _, error = _editable_plan(week.workout_plan_id, current_user)
    if error:
        return error
    data = day_schema.load(request.get_json(silent=True) or {})
    payload, status = workout_service.add_day(week, data)
    return jsonify(payload), status


@workout_plans_bp.route("/workout-days/<int:day_id>", methods=["DELETE"])
@coach_required
def delete_day(day_id, current_user):
    day = db.get_or_404(WorkoutDay, day_id, description="Day not found")
    _, error = _editable_plan(day.week.workout_plan_id, current_user)
    if error:
        return error
    db.session.delete(day)
    db.session.commit()
    return jsonify({"msg": "Day deleted"}), 200


@workout_plans_bp.route("/workout-days/<int:day_id>/exercises", methods=["POST"])
@coach_required
def add_exercise(day_id, current_user):
    day = db.get_or_404(WorkoutDay, day_id, description="Day not found")
    _, error = _editable_plan(day.week.workout_plan_id, current_user)
    if error:
        return error
    data = exercise_schema.load(request.get_json(silent=True) or {})
    payload, status = workout_service.add_exercise(day, data)
    return jsonify(payload), status


@workout_plans_bp.route("/workout-exercises/<int:exercise_id>", methods=["PUT"])
@coach_required
def update_exercise(exercise_id, current_user):
    exercise = db.get_or_404(WorkoutExercise, exercise_id, description="Exercise not found")
    _, error = _editable_plan(exercise.day.week.workout_plan_id, current_user)
    if error:
        return error
    data = exercise_update_schema.load(request.get_json(silent=True) or {})
    for key, value in data.items():
        setattr(exercise, key, value)
    db.session.commit()
    return jsonify({"msg": "Exercise updated", "exercise": exercise.to_dict()}), 200


@workout_plans_bp.route("/workout-exercises/<int:exercise_id>", methods=["DELETE"])
@coach_required
def delete_exercise(exercise_id, current_user):
    exercise = db.get_or_404(WorkoutExercise, exercise_id, description="Exercise not found")
    _, error = _editable_plan(exercise.day.week.workout_plan_id, current_user)
    if error:
        return error
    db.session.delete(exercise)
    db.session.commit()
    return jsonify({"msg": "Exercise deleted"}), 200
