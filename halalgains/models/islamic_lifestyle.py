from halalgains.extensions import db

FASTING_HABITS = ("ramadan_only", "mondays_thursdays", "both", "none")
WORKOUT_PRAYER_PREFERENCES = ("between_prayers", "no_preference")
DIETARY_RESTRICTIONS = ("none", "vegetarian", "vegan", "allergies")
COACH_GENDER_PREFERENCES = ("same_gender_only", "no_preference")


class IslamicLifestyle(db.Model):
    __tablename__ = "islamic_lifestyles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    fasting_habit = db.Column(db.String(30), default="ramadan_only")
    workout_prayer_preference = db.Column(db.String(30), default="no_preference")
    dietary_restriction = db.Column(db.String(30), default="none")
    coach_gender_preference = db.Column(db.String(30), default="no_preference")

    user = db.relationship("User", back_populates="islamic_lifestyle")

    def to_dict(self):
        return {
            "fasting_habit": self.fasting_habit,
            "workout_prayer_preference": self.workout_prayer_preference,
            "dietary_restriction": self.dietary_restriction,
            "coach_gender_preference": self.coach_gender_preference,
        }


class UserAllergy(db.Model):
    __tablename__ = "user_allergies"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    allergy_name = db.Column(db.String(100), nullable=False)

    user = db.relationship("User", back_populates="allergies")

    __table_args__ = (
        db.UniqueConstraint("user_id", "allergy_name", name="uq_user_allergy"),
    )
