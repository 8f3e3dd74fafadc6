import logging

from halalgains.extensions import db
from halalgains.models import WorkoutPlan, WorkoutWeek, WorkoutDay, WorkoutExercise
from halalgains.services.ordering import next_order, next_number

logger = logging.getLogger(__name__)


def client_info(user):
    if not user:
        return None, None
    profile = user.client_profile
    if not profile:
        return "Unknown Client", None
    return profile.full_name, profile.profile_photo


def plan_summary(plan, viewer):
    data = plan.to_dict()
    data["client_name"], data["client_photo"] = client_info(plan.client)
    data["coach_name"] = plan.coach.full_name if plan.coach else None

    if viewer.is_client and plan.client_id == viewer.id:
        data["total_weeks"] = len(plan.weeks)
        data["completed_weeks"] = plan.week_completions.filter_by(user_id=viewer.id).count()
    else:
        data["total_weeks"] = 0
        data["completed_weeks"] = 0
    return data


def plans_for(user):
    if user.is_coach:
        if not user.coach_profile:
            return []
        query = WorkoutPlan.query.filter_by(coach_id=user.coach_profile.id)
    else:
        query = WorkoutPlan.query.filter_by(client_id=user.id)
    return query.order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc()).all()


def can_view(plan, user):
    if user.is_coach:
        return bool(user.coach_profile and plan.coach_id == user.coach_profile.id)
    return plan.client_id == user.id


def can_edit(plan, user):
    return user.is_coach and can_view(plan, user)


def plan_tree(plan):
    """Plan with weeks by number, days by day_of_week and exercises by order."""
    data = plan.to_dict()
    data["client_name"], data["client_photo"] = client_info(plan.client)
    data["coach"] = plan.coach.to_summary() if plan.coach else None
    weeks = []
    for week in plan.weeks:
        week_data = week.to_dict()
        week_data["days"] = []
        for day in week.days:
            day_data = day.to_dict()
            day_data["exercises"] = [exercise.to_dict() for exercise in day.exercises]
            week_data["days"].append(day_data)
        weeks.append(week_data)
    data["weeks"] = weeks
    return data


def add_week(plan, week_number=None):
    if week_number is None:
        week_number = next_number(WorkoutWeek.week_number, WorkoutWeek.workout_plan_id == plan.id)
    elif WorkoutWeek.query.filter_by(workout_plan_id=plan.id, week_number=week_number).first():
        return {"msg": f"Week {week_number} already exists"}, 409

    week = WorkoutWeek(workout_plan_id=plan.id, week_number=week_number)
    db.session.add(week)
    db.session.commit()
    return {"msg": "Week added", "week": week.to_dict()}, 201


def add_day(week, data):
    if WorkoutDay.query.filter_by(workout_week_id=week.id, day_of_week=data["day_of_week"]).first():
        return {"msg": "This day already exists in the week"}, 409

    day = WorkoutDay(workout_week_id=week.id, **data)
    db.session.add(day)
    db.session.commit()
    return {"msg": "Day added", "day": day.to_dict()}, 201


def add_exercise(day, data):
    exercise = WorkoutExercise(
        workout_day_id=day.id,
        exercise_order=next_order(WorkoutExercise.exercise_order, WorkoutExercise.workout_day_id == day.id),
        **data,
    )
    db.session.add(exercise)
    db.session.commit()
    return {"msg": "Exercise added", "exercise": exercise.to_dict()}, 201


def delete_plan(plan):
    db.session.delete(plan)
    db.session.commit()
    logger.info("Deleted workout plan %s", plan.id)
