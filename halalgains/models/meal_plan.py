from datetime import datetime
from halalgains.extensions import db

# (value, label, ramadan_only)
MEAL_TYPES = [
    ("suhoor", "Suhoor", True),
    ("breakfast", "Breakfast", False),
    ("morning_snack", "Morning Snack", False),
    ("lunch", "Lunch", False),
    ("afternoon_snack", "Afternoon Snack", False),
    ("iftar", "Iftar", True),
    ("dinner", "Dinner", False),
    ("evening_snack", "Evening Snack", False),
    ("post_taraweeh_snack", "Post-Taraweeh Snack", True),
]
MEAL_TYPE_VALUES = tuple(value for value, _, _ in MEAL_TYPES)
RAMADAN_MEAL_TYPES = frozenset(value for value, _, ramadan in MEAL_TYPES if ramadan)


class MealPlan(db.Model):
    __tablename__ = "meal_plans"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coach_profiles.id"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True, index=True)

    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    calories_target = db.Column(db.Integer)
    protein_target_g = db.Column(db.Integer)
    carbs_target_g = db.Column(db.Integer)
    fats_target_g = db.Column(db.Integer)
    ramadan_mode = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    coach = db.relationship("CoachProfile")
    client = db.relationship("User", foreign_keys=[client_id])
    days = db.relationship(
        "MealPlanDay", back_populates="plan", cascade="all, delete-orphan",
        order_by="MealPlanDay.day_number",
    )
    week_completions = db.relationship(
        "MealPlanWeekCompletion", back_populates="plan", cascade="all, delete-orphan", lazy="dynamic"
    )
    weights = db.relationship(
        "WeightTracking", back_populates="plan", cascade="all, delete-orphan", lazy="dynamic"
    )

    def allows_meal_type(self, meal_type):
        if meal_type not in MEAL_TYPE_VALUES:
            return False
        return self.ramadan_mode or meal_type not in RAMADAN_MEAL_TYPES

    def to_dict(self):
        return {
            "id": self.id,
            "coach_id": self.coach_id,
            "client_id": self.client_id,
            "name": self.name,
            "description": self.description,
            "calories_target": self.calories_target,
            "protein_target_g": self.protein_target_g,
            "carbs_target_g": self.carbs_target_g,
            "fats_target_g": self.fats_target_g,
            "ramadan_mode": self.ramadan_mode,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class MealPlanDay(db.Model):
    __tablename__ = "meal_plan_days"

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey("meal_plans.id"), nullable=False, index=True)
    day_number = db.Column(db.Integer, nullable=False)
    day_name = db.Column(db.String(50))
    notes = db.Column(db.Text)

    plan = db.relationship("MealPlan", back_populates="days")
    meals = db.relationship(
        "MealPlanMeal", back_populates="day", cascade="all, delete-orphan",
        order_by="MealPlanMeal.meal_order",
    )
    completions = db.relationship(
        "MealPlanDayCompletion", back_populates="day", cascade="all, delete-orphan", lazy="dynamic"
    )

    __table_args__ = (
        db.UniqueConstraint("meal_plan_id", "day_number", name="uq_meal_plan_day_number"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "meal_plan_id": self.meal_plan_id,
            "day_number": self.day_number,
            "day_name": self.day_name,
            "notes": self.notes,
        }


class MealPlanMeal(db.Model):
    __tablename__ = "meal_plan_meals"

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_day_id = db.Column(db.Integer, db.ForeignKey("meal_plan_days.id"), nullable=False, index=True)
    meal_type = db.Column(db.String(30), nullable=False)
    meal_name = db.Column(db.String(150))
    description = db.Column(db.Text)
    total_calories = db.Column(db.Integer)
    meal_time = db.Column(db.String(5))
    notes = db.Column(db.Text)
    meal_order = db.Column(db.Integer, nullable=False, default=0)

    day = db.relationship("MealPlanDay", back_populates="meals")
    foods = db.relationship(
        "MealPlanFood", back_populates="meal", cascade="all, delete-orphan",
        order_by="MealPlanFood.food_order",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "meal_plan_day_id": self.meal_plan_day_id,
            "meal_type": self.meal_type,
            "meal_name": self.meal_name,
            "description": self.description,
            "total_calories": self.total_calories,
            "meal_time": self.meal_time,
            "notes": self.notes,
            "meal_order": self.meal_order,
        }


class MealPlanFood(db.Model):
    __tablename__ = "meal_plan_foods"

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_meal_id = db.Column(db.Integer, db.ForeignKey("meal_plan_meals.id"), nullable=False, index=True)
    food_name = db.Column(db.String(150), nullable=False)
    serving_size = db.Column(db.String(50))
    quantity = db.Column(db.Float)
    calories = db.Column(db.Float)
    protein_g = db.Column(db.Float)
    carbs_g = db.Column(db.Float)
    fats_g = db.Column(db.Float)
    is_halal = db.Column(db.Boolean, default=True, nullable=False)
    notes = db.Column(db.Text)
    food_order = db.Column(db.Integer, nullable=False, default=0)

    meal = db.relationship("MealPlanMeal", back_populates="foods")

    def to_dict(self):
        return {
            "id": self.id,
            "meal_plan_meal_id": self.meal_plan_meal_id,
            "food_name": self.food_name,
            "serving_size": self.serving_size,
            "quantity": self.quantity,
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fats_g": self.fats_g,
            "is_halal": self.is_halal,
            "notes": self.notes,
            "food_order": self.food_order,
        }
