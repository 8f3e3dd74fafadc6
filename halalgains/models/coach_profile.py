from datetime import datetime
from halalgains.extensions import db

SPECIALISATIONS = {
    "weight_loss": "Weight Loss",
    "muscle_building": "Muscle Building",
    "women_fitness": "Women Fitness",
    "athletic_training": "Athletic Training",
    "senior_fitness": "Senior Fitness",
    "fasting_friendly_programs": "Fasting Friendly",
    "halal_nutrition": "Halal Nutrition",
    "ramadan_fitness": "Ramadan Fitness",
}
AVAILABILITY_TYPES = ("online_only", "in_person", "both")


class CoachProfile(db.Model):
    __tablename__ = "coach_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)

    full_name = db.Column(db.String(150), nullable=False)
    age = db.Column(db.Integer)
    gender = db.Column(db.String(10), db.CheckConstraint("gender IN ('male','female')"))
    location = db.Column(db.String(150))
    profile_photos = db.Column(db.JSON, default=list)
    certifications = db.Column(db.JSON, default=list)
    years_of_experience = db.Column(db.Integer)
    specialisations = db.Column(db.JSON, default=list)
    bio = db.Column(db.Text)
    training_philosophy = db.Column(db.Text)
    success_stories = db.Column(db.Text)
    hourly_rate = db.Column(db.Float)
    package_price = db.Column(db.Float)
    availability_type = db.Column(
        db.String(20),
        db.CheckConstraint("availability_type IN ('online_only','in_person','both')"),
    )
    languages_spoken = db.Column(db.JSON, default=list)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="coach_profile")
    clients = db.relationship("ClientProfile", back_populates="coach", lazy="dynamic")
    availability = db.relationship(
        "CoachAvailability", back_populates="coach", cascade="all, delete-orphan",
        order_by="CoachAvailability.day_of_week",
    )
    packages = db.relationship(
        "CoachPackage", back_populates="coach", cascade="all, delete-orphan",
        order_by="CoachPackage.price",
    )
    reviews = db.relationship(
        "CoachReview", back_populates="coach", cascade="all, delete-orphan",
        order_by="CoachReview.created_at.desc()",
    )

    @property
    def main_photo(self):
        return self.profile_photos[0] if self.profile_photos else None

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "full_name": self.full_name,
            "age": self.age,
            "gender": self.gender,
            "location": self.location,
            "profile_photos": self.profile_photos or [],
            "certifications": self.certifications or [],
            "years_of_experience": self.years_of_experience,
            "specialisations": self.specialisations or [],
            "bio": self.bio,
            "training_philosophy": self.training_philosophy,
            "success_stories": self.success_stories,
            "hourly_rate": self.hourly_rate,
            "package_price": self.package_price,
            "availability_type": self.availability_type,
            "languages_spoken": self.languages_spoken or [],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_summary(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "full_name": self.full_name,
            "profile_photos": self.profile_photos or [],
            "bio": self.bio,
            "years_of_experience": self.years_of_experience,
        }


class CoachAvailability(db.Model):
    __tablename__ = "coach_availability"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coach_profiles.id"), nullable=False, index=True)
    day_of_week = db.Column(db.Integer, nullable=False)  # 0 = Sunday
    start_time = db.Column(db.String(5), nullable=False)
    end_time = db.Column(db.String(5), nullable=False)
    is_available = db.Column(db.Boolean, default=True)

    coach = db.relationship("CoachProfile", back_populates="availability")

    def to_dict(self):
        return {
            "day_of_week": self.day_of_week,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "is_available": self.is_available,
        }


class CoachPackage(db.Model):
    __tablename__ = "coach_packages"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coach_profiles.id"), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Float, nullable=False)
    duration_weeks = db.Column(db.Integer)
    sessions_per_week = db.Column(db.Integer)
    features = db.Column(db.JSON, default=list)
    is_popular = db.Column(db.Boolean, default=False)

    coach = db.relationship("CoachProfile", back_populates="packages")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "duration_weeks": self.duration_weeks,
            "sessions_per_week": self.sessions_per_week,
            "features": self.features or [],
            "is_popular": self.is_popular,
        }


class CoachReview(db.Model):
    __tablename__ = "coach_reviews"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coach_profiles.id"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    rating = db.Column(db.Integer, db.CheckConstraint("rating BETWEEN 1 AND 5"), nullable=False)
    review_text = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    coach = db.relationship("CoachProfile", back_populates="reviews")
    client = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("coach_id", "client_id", name="uq_coach_review_client"),
    )

    def to_dict(self):
        client_name = None
        if self.client and self.client.client_profile:
            client_name = self.client.client_profile.full_name
        return {
            "id": self.id,
            "rating": self.rating,
            "review_text": self.review_text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "client_name": client_name,
        }
