import logging

from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError

from halalgains.extensions import db
from halalgains.models import (
    User, ClientProfile, CoachProfile, FitnessAssessment, IslamicLifestyle, UserAllergy
)

logger = logging.getLogger(__name__)

LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54


def lbs_to_kg(lbs):
    return round(lbs / LBS_PER_KG, 1)


def feet_to_cm(feet, inches):
    return round((feet * 12 + inches) * CM_PER_INCH, 1)


def cm_to_feet(cm):
    total_inches = cm / CM_PER_INCH
    feet = int(total_inches // 12)
    inches = round(total_inches % 12)
    return feet, inches


def issue_token(user):
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


def register_client(data):
    """
    Create a client account with all of its sign-up rows in one transaction:
    user, client profile, fitness assessment, Islamic lifestyle preferences
    and allergies. Returns (payload, status).
    """
    if User.query.filter_by(email=data["email"]).first():
        return {"msg": "An account with this email already exists"}, 409

    if data["use_imperial"]:
        current_weight = lbs_to_kg(data["current_weight"])
        target_weight = lbs_to_kg(data["target_weight"])
        height = feet_to_cm(data.get("height_feet") or 0, data.get("height_inches") or 0)
    else:
        current_weight = data["current_weight"]
        target_weight = data["target_weight"]
        height = data["height"]

    # post-pregnancy recovery only applies to women
    post_pregnancy = data["post_pregnancy"] if data["gender"] == "female" else False

    user = User(email=data["email"], role="client")
    user.set_password(data["password"])
    db.session.add(user)

    try:
        db.session.flush()

        db.session.add(ClientProfile(
            user_id=user.id,
            full_name=data["full_name"],
            age=data["age"],
            gender=data["gender"],
            location=data["location"],
            weight_kg=current_weight,
            fitness_goal=data["fitness_goal"],
            fitness_level=data["fitness_level"],
            post_pregnancy_recovery=post_pregnancy,
        ))
        db.session.add(FitnessAssessment(
            user_id=user.id,
            current_weight_kg=current_weight,
            target_weight_kg=target_weight,
            height_cm=height,
            injuries_limitations=data.get("injuries_limitations") or None,
            medical_conditions=data.get("medical_conditions") or None,
            post_pregnancy=post_pregnancy,
        ))
        db.session.add(IslamicLifestyle(
            user_id=user.id,
            fasting_habit=data["fasting_habit"],
            workout_prayer_preference=data["workout_prayer_preference"],
            dietary_restriction=data["dietary_restriction"],
            coach_gender_preference=data["coach_gender_preference"],
        ))
        seen = set()
        for name in data["allergies"]:
            name = name.strip()
            if name and name.lower() not in seen:
                seen.add(name.lower())
                db.session.add(UserAllergy(user_id=user.id, allergy_name=name))

        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning("Sign up conflict for %s", data["email"])
        return {"msg": "An account with this email already exists"}, 409

    logger.info("Registered client %s", user.id)
    return {
        "msg": "Account created",
        "access_token": issue_token(user),
        "user": user.to_dict(),
        "profile": user.client_profile.to_dict(),
    }, 201


def create_coach(email, password, full_name):
    """Seed a coach account. Returns the new CoachProfile or None if the email is taken."""
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        return None

    user = User(email=email, role="coach")
    user.set_password(password)
    db.session.add(user)
    db.session.flush()

    profile = CoachProfile(user_id=user.id, full_name=full_name)
    db.session.add(profile)
    db.session.commit()
    return profile


def profile_for(user):
    if user.is_coach:
        return user.coach_profile.to_dict() if user.coach_profile else None

    if not user.client_profile:
        return None
    profile = user.client_profile.to_dict()
    if user.fitness_assessment:
        profile["fitness_assessment"] = user.fitness_assessment.to_dict()
    if user.islamic_lifestyle:
        profile["islamic_lifestyle"] = user.islamic_lifestyle.to_dict()
    profile["allergies"] = [a.allergy_name for a in user.allergies]
    return profile
