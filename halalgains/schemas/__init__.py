from .auth import SignUpSchema, LoginSchema
from .coaches import CoachFilterSchema, CoachProfileUpdateSchema, ReviewSchema, AssignCoachSchema
from .chat import StartConversationSchema, SendMessageSchema
from .workouts import (
    WorkoutPlanSchema, WorkoutWeekSchema, WorkoutDaySchema, WorkoutExerciseSchema, WorkoutLogSchema
)
from .meals import (
    MealPlanSchema, MealPlanDaySchema, MealSchema, FoodSchema, BulkDaySchema,
    CompleteWeekSchema
)
from .hydration import HydrationReminderSchema
