"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .model_prediction_use_case import ModelPredictionUseCase
from .model_training_use_case import ModelTrainingUseCase

__all__ = ["ModelPredictionUseCase", "ModelTrainingUseCase"]
