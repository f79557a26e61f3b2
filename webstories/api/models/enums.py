"""Enumerations shared by request and response models."""

from enum import Enum


class StoryCategory(str, Enum):
    """Category a story is filed under."""

    FOOD = "food"
    HEALTH_AND_FITNESS = "health_and_fitness"
    TRAVEL = "travel"
    MOVIE = "movie"
    EDUCATION = "education"
