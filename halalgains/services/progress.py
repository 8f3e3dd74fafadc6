import logging
from datetime import datetime, date

from halalgains.extensions import db
from halalgains.models import (
    WorkoutPlan, WorkoutExercise, WorkoutDayCompletion, ExerciseCompletion, WorkoutWeekCompletion
)

logger = logging.getLogger(__name__)


def sunday_based_weekday(day=None):
    """0 = Sunday ... 6 = Saturday, the numbering workout days use."""
    day = day or date.today()
    return (day.weekday() + 1) % 7


def completion_percentage(completion, exercise_count):
    if not completion or not exercise_count:
        return 0
    done = sum(1 for ec in completion.exercise_completions if ec.completed)
    return round(done / exercise_count * 100)


def day_completion_for(day, user_id):
    return WorkoutDayCompletion.query.filter_by(workout_day_id=day.id, user_id=user_id).first()


def toggle_exercise_completion(exercise, user):
    """
    Flip the caller's completion of one exercise, creating the day
    completion and the exercise completion rows on first use.
    """
    day_completion = day_completion_for(exercise.day, user.id)
    if not day_completion:
        day_completion = WorkoutDayCompletion(workout_day_id=exercise.workout_day_id, user_id=user.id)
        db.session.add(day_completion)
        db.session.flush()

    entry = ExerciseCompletion.query.filter_by(
        workout_day_completion_id=day_completion.id, workout_exercise_id=exercise.id
    ).first()
    if entry:
        entry.completed = not entry.completed
    else:
        entry = ExerciseCompletion(
            workout_day_completion_id=day_completion.id,
            workout_exercise_id=exercise.id,
            completed=True,
        )
        db.session.add(entry)

    day_completion.updated_at = datetime.utcnow()
    db.session.commit()
    return {
        "workout_exercise_id": exercise.id,
        "completed": entry.completed,
        "day_completion_id": day_completion.id,
    }


def record_week_if_complete(week, user_id):
    """Store the week completion once every day of the week has been logged."""
    if not week.days:
        return False
    if any(day_completion_for(day, user_id) is None for day in week.days):
        return False

    existing = WorkoutWeekCompletion.query.filter_by(
        workout_plan_id=week.workout_plan_id, user_id=user_id, week_number=week.week_number
    ).first()
    if existing:
        return False

    db.session.add(WorkoutWeekCompletion(
        workout_plan_id=week.workout_plan_id, user_id=user_id, week_number=week.week_number
    ))
    db.session.commit()
    logger.info("User %s completed week %s of plan %s", user_id, week.week_number, week.workout_plan_id)
    return True


def log_workout_day(day, user, data):
    """Create or update the caller's log for a day and replace its exercise entries."""
    exercise_ids = {exercise.id for exercise in day.exercises}
    for entry in data["exercises"]:
        if entry["workout_exercise_id"] not in exercise_ids:
            return {"msg": f"Exercise {entry['workout_exercise_id']} is not part of this day"}, 400
    logged_ids = [entry["workout_exercise_id"] for entry in data["exercises"]]
    if len(logged_ids) != len(set(logged_ids)):
        return {"msg": "Each exercise can only be logged once per day"}, 400

    completion = day_completion_for(day, user.id)
    created = completion is None
    if created:
        completion = WorkoutDayCompletion(workout_day_id=day.id, user_id=user.id)
        db.session.add(completion)
    completion.notes = data.get("notes")
    completion.rating = data.get("rating")
    completion.updated_at = datetime.utcnow()

    completion.exercise_completions.clear()
    db.session.flush()
    for entry in data["exercises"]:
        completion.exercise_completions.append(ExerciseCompletion(**entry))
    db.session.commit()

    week_completed = record_week_if_complete(day.week, user.id)
    return {
        "msg": "Workout logged" if created else "Workout log updated",
        "completion": completion.to_dict(),
        "week_completed": week_completed,
    }, 201 if created else 200


def plan_progress(plan, user):
    weeks = []
    for week in plan.weeks:
        days = []
        for day in week.days:
            completion = day_completion_for(day, user.id)
            day_data = day.to_dict()
            day_data["exercises"] = [exercise.to_dict() for exercise in day.exercises]
            day_data["completion"] = completion.to_dict() if completion else None
            day_data["completion_percentage"] = completion_percentage(completion, len(day.exercises))
            days.append(day_data)
        week_data = week.to_dict()
        week_data["days"] = days
        week_data["completed"] = plan.week_completions.filter_by(
            user_id=user.id, week_number=week.week_number
        ).first() is not None
        weeks.append(week_data)

    data = plan.to_dict()
    data["weeks"] = weeks
    return data


def today_workout(user, today=None):
    """Dashboard payload: newest assigned plan, its first week and today's day."""
    profile = user.client_profile
    plan = (
        WorkoutPlan.query.filter_by(client_id=user.id)
        .order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc())
        .first()
    )
    payload = {
        "client_name": profile.full_name if profile else user.email,
        "workout_plan": plan.to_dict() if plan else None,
        "week": None,
        "today": None,
    }
    if not plan or not plan.weeks:
        return payload

    week = plan.weeks[0]
    payload["week"] = week.to_dict()

    weekday = sunday_based_weekday(today)
    day = next((d for d in week.days if d.day_of_week == weekday), None)
    if day:
        completion = day_completion_for(day, user.id)
        day_data = day.to_dict()
        day_data["exercises"] = [exercise.to_dict() for exercise in day.exercises]
        day_data["completion"] = completion.to_dict() if completion else None
        day_data["completion_percentage"] = completion_percentage(completion, len(day.exercises))
        payload["today"] = day_data
    return payload


def exercise_for_client(exercise_id, user):
    exercise = db.session.get(WorkoutExercise, exercise_id)
    if not exercise or exercise.day.week.plan.client_id != user.id:
        return None
    return exercise
