from .service import ExerciseService, exercise_to_out, list_items

__all__ = ["ExerciseService", "exercise_to_out", "list_items"]
