import logging
import math
from collections import OrderedDict

from sqlalchemy.exc import IntegrityError

from halalgains.extensions import db
from halalgains.models import (
    MealPlan, MealPlanDay, MealPlanMeal, MealPlanFood,
    MealPlanDayCompletion, MealPlanWeekCompletion, WeightTracking
)
from halalgains.services.ordering import next_order, next_number
from halalgains.services.workouts import client_info

logger = logging.getLogger(__name__)

MACROS = (("calories", "calories"), ("protein", "protein_g"), ("carbs", "carbs_g"), ("fats", "fats_g"))


def week_number_for_day(day_number):
    return math.ceil(day_number / 7)


def meal_totals(foods):
    totals = {key: 0 for key, _ in MACROS}
    for food in foods:
        for key, attr in MACROS:
            totals[key] += getattr(food, attr) or 0
    return totals


def day_totals(meals):
    totals = {key: 0 for key, _ in MACROS}
    for meal in meals:
        for key, value in meal_totals(meal.foods).items():
            totals[key] += value
    return totals


def group_days_by_week(days):
    weeks = OrderedDict()
    for day in sorted(days, key=lambda d: d.day_number):
        weeks.setdefault(week_number_for_day(day.day_number), []).append(day)
    return weeks


def plans_for(user, ramadan_only=False):
    if user.is_coach:
        if not user.coach_profile:
            return []
        query = MealPlan.query.filter_by(coach_id=user.coach_profile.id)
    else:
        query = MealPlan.query.filter_by(client_id=user.id)
    if ramadan_only:
        query = query.filter_by(ramadan_mode=True)
    return query.order_by(MealPlan.created_at.desc(), MealPlan.id.desc()).all()


def plan_summary(plan):
    data = plan.to_dict()
    data["client_name"], data["client_photo"] = client_info(plan.client)
    data["coach_name"] = plan.coach.full_name if plan.coach else None
    data["total_days"] = len(plan.days)
    return data


def day_completion_for(day, user_id):
    return MealPlanDayCompletion.query.filter_by(meal_plan_day_id=day.id, user_id=user_id).first()


def plan_detail(plan, user):
    """Days grouped by week with macro totals and the caller's completions."""
    week_completions = {
        wc.week_number: wc for wc in plan.week_completions.filter_by(user_id=user.id).all()
    }

    weeks = []
    for week_number, days in group_days_by_week(plan.days).items():
        day_rows = []
        for day in days:
            meals = []
            for meal in day.meals:
                meal_data = meal.to_dict()
                meal_data["foods"] = [food.to_dict() for food in meal.foods]
                meal_data["totals"] = meal_totals(meal.foods)
                meals.append(meal_data)
            completion = day_completion_for(day, user.id)
            day_data = day.to_dict()
            day_data["meals"] = meals
            day_data["totals"] = day_totals(day.meals)
            day_data["completion"] = completion.to_dict() if completion else None
            day_rows.append(day_data)

        completion = week_completions.get(week_number)
        weeks.append({
            "week_number": week_number,
            "days": day_rows,
            "all_days_completed": all(d["completion"] is not None for d in day_rows),
            "completion": completion.to_dict() if completion else None,
        })

    data = plan_summary(plan)
    data["weeks"] = weeks
    return data


def add_day(plan, data):
    day_number = data.get("day_number")
    if day_number is None:
        day_number = next_number(MealPlanDay.day_number, MealPlanDay.meal_plan_id == plan.id)
    elif MealPlanDay.query.filter_by(meal_plan_id=plan.id, day_number=day_number).first():
        return {"msg": f"Day {day_number} already exists"}, 409

    day = MealPlanDay(
        meal_plan_id=plan.id,
        day_number=day_number,
        day_name=data.get("day_name") or f"Day {day_number}",
        notes=data.get("notes"),
    )
    db.session.add(day)
    db.session.commit()
    return {"msg": "Day added", "day": day.to_dict()}, 201


def _build_meal(day, data, order):
    foods = data.pop("foods", None) or []
    meal = MealPlanMeal(meal_plan_day_id=day.id, meal_order=order, **data)
    for position, food in enumerate(foods):
        meal.foods.append(MealPlanFood(food_order=position, **food))
    return meal


def check_meal_type(plan, meal_type):
    if not plan.allows_meal_type(meal_type):
        return f"{meal_type} meals are only available in Ramadan mode plans"
    return None


def add_meal(day, data):
    error = check_meal_type(day.plan, data["meal_type"])
    if error:
        return {"msg": error}, 400

    order = next_order(MealPlanMeal.meal_order, MealPlanMeal.meal_plan_day_id == day.id)
    meal = _build_meal(day, dict(data), order)
    db.session.add(meal)
    db.session.commit()
    return {"msg": "Meal added", "meal": meal.to_dict()}, 201


def add_food(meal, data):
    food = MealPlanFood(
        meal_plan_meal_id=meal.id,
        food_order=next_order(MealPlanFood.food_order, MealPlanFood.meal_plan_meal_id == meal.id),
        **data,
    )
    db.session.add(food)
    db.session.commit()
    return {"msg": "Food added", "food": food.to_dict()}, 201


def bulk_create_day(plan, data):
    """Create (or reuse) one day and insert several meals with their foods."""
    for meal in data["meals"]:
        error = check_meal_type(plan, meal["meal_type"])
        if error:
            return {"msg": error}, 400

    day = MealPlanDay.query.filter_by(meal_plan_id=plan.id, day_number=data["day_number"]).first()
    if not day:
        day = MealPlanDay(
            meal_plan_id=plan.id,
            day_number=data["day_number"],
            day_name=data.get("day_name") or f"Day {data['day_number']}",
        )
        db.session.add(day)

    try:
        db.session.flush()
        order = next_order(MealPlanMeal.meal_order, MealPlanMeal.meal_plan_day_id == day.id)
        for offset, meal_data in enumerate(data["meals"]):
            db.session.add(_build_meal(day, dict(meal_data), order + offset))
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.error("bulk_create_day failed for plan %s", plan.id, exc_info=True)
        return {"msg": "Could not save meals"}, 409

    db.session.refresh(day)
    day_data = day.to_dict()
    day_data["meals"] = [dict(m.to_dict(), foods=[f.to_dict() for f in m.foods]) for m in day.meals]
    return {"msg": f"{len(data['meals'])} meals saved", "day": day_data}, 201


def toggle_day_completion(day, user):
    completion = day_completion_for(day, user.id)
    if completion:
        db.session.delete(completion)
        db.session.commit()
        return {"meal_plan_day_id": day.id, "completed": False}

    db.session.add(MealPlanDayCompletion(meal_plan_day_id=day.id, user_id=user.id))
    db.session.commit()
    return {"meal_plan_day_id": day.id, "completed": True}


def record_weekly_weight(plan, user_id, week_number, weight_kg):
    """Insert or update the weight row for (user, plan, week)."""
    if weight_kg is None or weight_kg <= 0:
        raise ValueError("weight_kg must be positive")

    row = WeightTracking.query.filter_by(
        user_id=user_id, meal_plan_id=plan.id, week_number=week_number
    ).first()
    if row:
        row.weight_kg = weight_kg
    else:
        row = WeightTracking(user_id=user_id, meal_plan_id=plan.id, week_number=week_number, weight_kg=weight_kg)
        db.session.add(row)
    return row


def complete_week(plan, user, week_number, weight_kg):
    """
    Mark every day of the week completed, record the weekly weight and the
    week completion. A week can only be completed once.
    """
    days = group_days_by_week(plan.days).get(week_number)
    if not days:
        return {"msg": f"Week {week_number} has no days"}, 404

    if plan.week_completions.filter_by(user_id=user.id, week_number=week_number).first():
        return {"msg": "This week is already completed"}, 409

    try:
        for day in days:
            if not day_completion_for(day, user.id):
                db.session.add(MealPlanDayCompletion(meal_plan_day_id=day.id, user_id=user.id))

        weight = record_weekly_weight(plan, user.id, week_number, weight_kg)
        completion = MealPlanWeekCompletion(
            meal_plan_id=plan.id, user_id=user.id, week_number=week_number, weight_kg=weight_kg
        )
        db.session.add(completion)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.error("complete_week failed for plan %s week %s", plan.id, week_number, exc_info=True)
        return {"msg": "This week is already completed"}, 409

    logger.info("User %s completed meal plan %s week %s", user.id, plan.id, week_number)
    return {
        "msg": "Week completed",
        "completion": completion.to_dict(),
        "weight": weight.to_dict(),
    }, 201


def weight_history(plan, user_id):
    rows = (
        WeightTracking.query.filter_by(meal_plan_id=plan.id, user_id=user_id)
        .order_by(WeightTracking.week_number)
        .all()
    )
    history = []
    first = previous = None
    for row in rows:
        entry = row.to_dict()
        entry["change_from_start"] = round(row.weight_kg - first, 1) if first is not None else 0
        entry["change_from_previous"] = round(row.weight_kg - previous, 1) if previous is not None else 0
        history.append(entry)
        if first is None:
            first = row.weight_kg
        previous = row.weight_kg

    return {
        "weights": history,
        "starting_weight": history[0]["weight_kg"] if history else None,
        "current_weight": history[-1]["weight_kg"] if history else None,
        "total_change": history[-1]["change_from_start"] if history else 0,
    }


def can_view(plan, user):
    if user.is_coach:
        return bool(user.coach_profile and plan.coach_id == user.coach_profile.id)
    return plan.client_id == user.id


def can_edit(plan, user):
    return user.is_coach and can_view(plan, user)
