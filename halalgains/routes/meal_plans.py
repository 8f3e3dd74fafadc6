from flask import Blueprint, request, jsonify

from halalgains.extensions import db
from halalgains.models import MealPlan, MealPlanDay, MealPlanMeal, MealPlanFood
from halalgains.schemas import (
    MealPlanSchema, MealPlanDaySchema, MealSchema, FoodSchema, BulkDaySchema, CompleteWeekSchema
)
from halalgains.services import meal_plans as meal_service
from halalgains.services.coaches import is_coach_client
from halalgains.utils.decorators import login_required, coach_required, client_required

meal_plans_bp = Blueprint("meal_plans", __name__)
plan_schema = MealPlanSchema()
plan_update_schema = MealPlanSchema(partial=True)
day_schema = MealPlanDaySchema()
day_update_schema = MealPlanDaySchema(partial=True)
meal_schema = MealSchema()
meal_update_schema = MealSchema(partial=True)
food_schema = FoodSchema()
food_update_schema = FoodSchema(partial=True)
bulk_schema = BulkDaySchema()
complete_week_schema = CompleteWeekSchema()


def _editable_plan(plan_id, user):
    plan = db.get_or_404(MealPlan, plan_id, description="Meal plan not found")
    if not meal_service.can_edit(plan, user):
        return None, (jsonify({"msg": "Unauthorized"}), 403)
    return plan, None


def _viewable_plan(plan_id, user):
    plan = db.get_or_404(MealPlan, plan_id, description="Meal plan not found")
    if not meal_service.can_view(plan, user):
        return None, (jsonify({"msg": "Unauthorized"}), 403)
    return plan, None


@meal_plans_bp.route("/meal-plans", methods=["GET"])
@login_required
def list_plans(current_user):
    ramadan_only = request.args.get("ramadan", "false").lower() == "true"
    plans = meal_service.plans_for(current_user, ramadan_only=ramadan_only)
    return jsonify({"meal_plans": [meal_service.plan_summary(p) for p in plans]}), 200


@meal_plans_bp.route("/meal-plans", methods=["POST"])
@coach_required
def create_plan(current_user):
    coach = current_user.coach_profile
    if not coach:
        return jsonify({"msg": "Coach profile not found"}), 404

    data = plan_schema.load(request.get_json(silent=True) or {})
    if not is_coach_client(coach, data.get("client_id")):
        return jsonify({"msg": "Client is not one of your clients"}), 400

    plan = MealPlan(coach_id=coach.id, **data)
    db.session.add(plan)
    db.session.commit()
    return jsonify({"msg": "Meal plan created", "meal_plan": plan.to_dict()}), 201


@meal_plans_bp.route("/meal-plans/<int:plan_id>", methods=["GET"])
@login_required
def get_plan(plan_id, current_user):
    plan, error = _viewable_plan(plan_id, current_user)
    if error:
        return error
    return jsonify(meal_service.plan_detail(plan, current_user)), 200


@meal_plans_bp.route("/meal-plans/<int:plan_id>", methods=["PUT"])
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
    return jsonify({"msg": "Meal plan updated", "meal_plan": plan.to_dict()}), 200


@meal_plans_bp.route("/meal-plans/<int:plan_id>", methods=["DELETE"])
@coach_required
def delete_plan(plan_id, current_user):
    plan, error = _editable_plan(plan_id, current_user)
    if error:
        return error
    db.session.delete(plan)
    db.session.commit()
    return jsonify({"msg": "Meal plan deleted"}), 200


# Days

@meal_plans_bp.route("/meal-plans/<int:plan_id>/days", methods=["POST"])
@coach_required
def add_day(plan_id, current_user):
    plan, error = _editable_plan(plan_id, current_user)
    if error:
        return error
    data = day_schema.load(request.get_json(silent=True) or {})
    payload, status = meal_service.add_day(plan, data)
    return jsonify(payload), status


@meal_plans_bp.route("/meal-plans/<int:plan_id>/days/bulk", methods=["POST"])
@coach_required
def bulk_add_day(plan_id, current_user):
    plan, error = _editable_plan(plan_id, current_user)
    if error:
        return error
    data = bulk_schema.load(request.get_json(silent=True) or {})
    payload, status = meal_service.bulk_create_day(plan, data)
    return jsonify(payload), status


@meal_plans_bp.route("/meal-plan-days/<int:day_id>", methods=["PUT"])
@coach_required
def update_day(day_id, current_user):
    day = db.get_or_404(MealPlanDay, day_id, description="Day not found")
    _, error = _editable_plan(day.meal_plan_id, current_user)
    if error:
        return error

    data = day_update_schema.load(request.get_json(silent=True) or {})
    if data.get("day_number") and data["day_number"] != day.day_number:
        clash = MealPlanDay.query.filter_by(meal_plan_id=day.meal_plan_id, day_number=data["day_number"]).first()
        if clash:
            return jsonify({"msg": f"Day {data['day_number']} already exists"}), 409
        day.day_number = data["day_number"]
    if data.get("day_name"):
        day.day_name = data["day_name"]
    if "notes" in data:
        day.notes = data["notes"]
    db.session.commit()
    return jsonify({"msg": "Day updated", "day": day.to_dict()}), 200


@meal_plans_bp.route("/meal-plan-days/<int:day_id>", methods=["DELETE"])
@coach_required
def delete_day(day_id, current_user):
    day = db.get_or_404(MealPlanDay, day_id, description="Day not found")
    _, error = _editable_plan(day.meal_plan_id, current_user)
    if error:
        return error
    db.session.delete(day)
    db.session.commit()
    return jsonify({"msg": "Day deleted"}), 200


@meal_plans_bp.route("/meal-plan-days/<int:day_id>/toggle", methods=["POST"])
@client_required
def toggle_day(day_id, current_user):
    day = db.get_or_404(MealPlanDay, day_id, description="Day not found")
    if day.plan.client_id != current_user.id:
        return jsonify({"msg": "Unauthorized"}), 403
    return jsonify(meal_service.toggle_day_completion(day, current_user)), 200


# Meals

@meal_plans_bp.route("/meal-plan-days/<int:day_id>/meals", methods=["POST"])
@coach_required
def add_meal(day_id, current_user):
    day = db.get_or_404(MealPlanDay, day_id, description="Day not found")
    _, error = _editable_plan(day.meal_plan_id, current_user)
    if error:
        return error
    data = meal_schema.load(request.get_json(silent=True) or {})
    payload, status = meal_service.add_meal(day, data)
    return jsonify(payload), status


@meal_plans_bp.route("/meal-plan-meals/<int:meal_id>", methods=["PUT"])
@coach_required
def update_meal(meal_id, current_user):
    meal = db.get_or_404(MealPlanMeal, meal_id, description="Meal not found")
    plan, error = _editable_plan(meal.day.meal_plan_id, current_user)
    if error:
        return error

    data = meal_update_schema.load(request.get_json(silent=True) or {})
    if "meal_type" in data:
        message = meal_service.check_meal_type(plan, data["meal_type"])
        if message:
            return jsonify({"msg": message}), 400

    for key, value in data.items():
        setattr(meal, key, value)
    db.session.commit()
    return jsonify({"msg": "Meal updated", "meal": meal.to_dict()}), 200


@meal_plans_bp.route("/meal-plan-meals/<int:meal_id>", methods=["DELETE"])
@coach_required
def delete_meal(meal_id, current_user):
    meal = db.get_or_404(MealPlanMeal, meal_id, description="Meal not found")
    _, error = _editable_plan(meal.day.meal_plan_id, current_user)
    if error:
        return error
    db.session.delete(meal)
    db.session.commit()
    return jsonify({"msg": "Meal deleted"}), 200


# Foods

@meal_plans_bp.route("/meal-plan-meals/<int:meal_id>/foods", methods=["POST"])
@coach_required
def add_food(meal_id, current_user):
    meal = db.get_or_404(MealPlanMeal, meal_id, description="Meal not found")
    _, error = _editable_plan(meal.day.meal_plan_id, current_user)
    if error:
        return error
    data = food_schema.load(request.get_json(silent=True) or {})
    payload, status = meal_service.add_food(meal, data)
    return jsonify(payload), status


@meal_plans_bp.route("/meal-plan-foods/<int:food_id>", methods=["PUT"])
@coach_required
def update_food(food_id, current_user):
    food = db.get_or_404(MealPlanFood, food_id, description="Food not found")
    _, error = _editable_plan(food.meal.day.meal_plan_id, current_user)
    if error:
        return error
    data = food_update_schema.load(request.get_json(silent=True) or {})
    for key, value in data.items():
        setattr(food, key, value)
    db.session.commit()
    return jsonify({"msg": "Food updated", "food": food.to_dict()}), 200


@meal_plans_bp.route("/meal-plan-foods/<int:food_id>", methods=["DELETE"])
@coach_required
def delete_food(food_id, current_user):
    food = db.get_or_404(MealPlanFood, food_id, description="Food not found")
    _, error = _editable_plan(food.meal.day.meal_plan_id, current_user)
    if error:
        return error
    db.session.delete(food)
    db.session.commit()
    return jsonify({"msg": "Food deleted"}), 200


# Weekly check-ins

@meal_plans_bp.route("/meal-plans/<int:plan_id>/weeks/<int:week_number>/complete", methods=["POST"])
@client_required
def complete_week(plan_id, week_number, current_user):
    plan, error = _viewable_plan(plan_id, current_user)
    if error:
        return error
    data = complete_week_schema.load(request.get_json(silent=True) or {})
    payload, status = meal_service.complete_week(plan, current_user, week_number, data["weight_kg"])
    return jsonify(payload), status


@meal_plans_bp.route("/meal-plans/<int:plan_id>/weights", methods=["GET"])
@login_required
def weights(plan_id, current_user):
    plan, error = _viewable_plan(plan_id, current_user)
    if error:
        return error
    # coaches look at the assigned client's history
    user_id = current_user.id if current_user.is_client else plan.client_id
    return jsonify(meal_service.weight_history(plan, user_id)), 200
