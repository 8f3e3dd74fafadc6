from .user import User
from .client_profile import ClientProfile
from .coach_profile import CoachProfile, CoachAvailability, CoachPackage, CoachReview
from .fitness_assessment import FitnessAssessment
from .islamic_lifestyle import IslamicLifestyle, UserAllergy

from .conversation import Conversation
from .message import Message

from .workout_plan import WorkoutPlan, WorkoutWeek, WorkoutDay, WorkoutExercise
from .workout_completion import WorkoutDayCompletion, ExerciseCompletion, WorkoutWeekCompletion

from .meal_plan import MealPlan, MealPlanDay, MealPlanMeal, MealPlanFood
from .meal_completion import MealPlanDayCompletion, MealPlanWeekCompletion
from .weight_tracking import WeightTracking

from .hydration_reminder import HydrationReminder

__all__ = [
    "User",
    "ClientProfile", "CoachProfile", "CoachAvailability", "CoachPackage", "CoachReview",
    "FitnessAssessment", "IslamicLifestyle", "UserAllergy",
    "Conversation", "Message",
    "WorkoutPlan", "WorkoutWeek", "WorkoutDay", "WorkoutExercise",
    "WorkoutDayCompletion", "ExerciseCompletion", "WorkoutWeekCompletion",
    "MealPlan", "MealPlanDay", "MealPlanMeal", "MealPlanFood",
    "MealPlanDayCompletion", "MealPlanWeekCompletion", "WeightTracking",
    "HydrationReminder",
]
