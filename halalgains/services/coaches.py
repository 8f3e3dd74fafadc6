import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from halalgains.extensions import db
from halalgains.models import CoachProfile, CoachReview, ClientProfile, Conversation, User

logger = logging.getLogger(__name__)

DEFAULT_MIN_PRICE = 0
DEFAULT_MAX_PRICE = 500


def rating_summaries(coach_ids=None):
    """Map coach id to (average rating rounded to 0.1, review count)."""
    query = db.session.query(
        CoachReview.coach_id,
        func.avg(CoachReview.rating),
        func.count(CoachReview.id),
    ).group_by(CoachReview.coach_id)
    if coach_ids is not None:
        query = query.filter(CoachReview.coach_id.in_(coach_ids))

    return {
        coach_id: (round(float(avg), 1), count)
        for coach_id, avg, count in query.all()
    }


def rating_summary(coach_id):
    return rating_summaries([coach_id]).get(coach_id, (None, 0))


def _matches_availability(coach_mode, wanted):
    if not wanted:
        return True
    if coach_mode == wanted:
        return True
    # a coach offering both modes satisfies either single mode
    return coach_mode == "both" and wanted in ("online_only", "in_person")


def matches_filters(coach, average_rating, filters):
    search = (filters.get("search") or "").lower()
    if search:
        haystack = [coach.full_name, coach.bio, coach.location]
        if not any(search in (value or "").lower() for value in haystack):
            return False

    if filters.get("gender") and coach.gender != filters["gender"]:
        return False

    location = (filters.get("location") or "").lower()
    if location and location not in (coach.location or "").lower():
        return False

    specialisation = filters.get("specialisation")
    if specialisation and specialisation not in (coach.specialisations or []):
        return False

    # coaches without a rate are never priced out
    if coach.hourly_rate:
        min_price = filters.get("min_price", DEFAULT_MIN_PRICE)
        max_price = filters.get("max_price", DEFAULT_MAX_PRICE)
        if coach.hourly_rate < min_price or coach.hourly_rate > max_price:
            return False

    if not _matches_availability(coach.availability_type, filters.get("availability_type")):
        return False

    min_rating = filters.get("min_rating") or 0
    if min_rating > 0 and (average_rating is None or average_rating < min_rating):
        return False

    return True


def active_filter_count(filters):
    count = 0
    for key in ("gender", "location", "specialisation", "availability_type"):
        if filters.get(key):
            count += 1
    if (filters.get("min_price", DEFAULT_MIN_PRICE) > DEFAULT_MIN_PRICE
            or filters.get("max_price", DEFAULT_MAX_PRICE) < DEFAULT_MAX_PRICE):
        count += 1
    if filters.get("min_rating"):
        count += 1
    return count


def browse_coaches(filters):
    coaches = CoachProfile.query.order_by(CoachProfile.created_at.desc()).all()
    ratings = rating_summaries([c.id for c in coaches])

    results = []
    for coach in coaches:
        average, count = ratings.get(coach.id, (None, 0))
        if not matches_filters(coach, average, filters):
            continue
        data = coach.to_dict()
        data["average_rating"] = average
        data["review_count"] = count
        results.append(data)

    return {
        "coaches": results,
        "count": len(results),
        "active_filters": active_filter_count(filters),
    }


def coach_detail(coach):
    average, count = rating_summary(coach.id)
    data = coach.to_dict()
    data["availability"] = [slot.to_dict() for slot in coach.availability]
    data["packages"] = [package.to_dict() for package in coach.packages]
    data["reviews"] = [review.to_dict() for review in coach.reviews]
    data["average_rating"] = average
    data["review_count"] = count
    return data


def add_review(coach, client_user, rating, review_text=None):
    existing = CoachReview.query.filter_by(coach_id=coach.id, client_id=client_user.id).first()
    if existing:
        return {"msg": "You have already reviewed this coach"}, 409

    review = CoachReview(coach_id=coach.id, client_id=client_user.id, rating=rating, review_text=review_text)
    db.session.add(review)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.info("Duplicate review from client %s for coach %s", client_user.id, coach.id)
        return {"msg": "You have already reviewed this coach"}, 409
    return {"msg": "Review added", "review": review.to_dict()}, 201


def assign_coach_to_client(coach_user_id, client_user_id):
    """
    Point a client's profile at the calling coach. Mirrors the stored
    procedure contract: a dict with `success` and either `coach_id` or `error`.
    """
    coach = CoachProfile.query.filter_by(user_id=coach_user_id).first()
    if not coach:
        return {"success": False, "error": "Coach profile not found"}

    client = ClientProfile.query.filter_by(user_id=client_user_id).first()
    if not client:
        return {"success": False, "error": "Client profile not found"}

    client.coach_id = coach.id
    client.updated_at = datetime.utcnow()
    db.session.commit()

    logger.info("Assigned coach %s to client user %s", coach.id, client_user_id)
    return {"success": True, "coach_id": coach.id}


def coach_clients(coach):
    """Clients the coach talks to or is assigned to, one entry per user."""
    user_ids = [
        row.client_id
        for row in Conversation.query.filter_by(coach_id=coach.id).order_by(Conversation.updated_at.desc())
    ]
    user_ids += [profile.user_id for profile in coach.clients]

    clients = []
    seen = set()
    for user_id in user_ids:
        if user_id in seen:
            continue
        seen.add(user_id)
        user = db.session.get(User, user_id)
        if not user:
            continue
        profile = user.client_profile
        clients.append({
            "user_id": user.id,
            "full_name": profile.full_name if profile else user.email,
            "profile_photo": profile.profile_photo if profile else None,
            "assigned": bool(profile and profile.coach_id == coach.id),
        })
    return clients


def is_coach_client(coach, client_user_id):
    if client_user_id is None:
        return True
    return any(entry["user_id"] == client_user_id for entry in coach_clients(coach))


def update_coach_profile(coach, data):
    for key, value in data.items():
        setattr(coach, key, value)
    coach.updated_at = datetime.utcnow()
    db.session.commit()
    return coach
