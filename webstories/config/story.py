"""
Story rule constants.

Slide bounds and paging defaults shared by validation, routes and tests.
"""

# Story aggregate constants
STORY_CONSTANTS = {
    "min_slides": 3,
    "max_slides": 6,
    "default_page": 1,
    "default_page_size": 10,
    "max_page_size": 100,
}

# Allowed story categories (order is the order shown in API docs)
CATEGORIES = (
    "food",
    "health_and_fitness",
    "travel",
    "movie",
    "education",
)
