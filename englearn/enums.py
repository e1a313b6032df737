from enum import Enum
from typing import Dict, List


class Level(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Screen(str, Enum):
    PARAGRAPH = "paragraph"
    TENSE = "tense"
    READING = "reading"
    WRITING = "writing"


OPTION_LETTERS: List[str] = ["A", "B", "C", "D"]
READING_QUESTION_COUNT = 5


TENSE_TYPES: List[str] = [
    "Present Simple",
    "Present Continuous",
    "Past Simple",
    "Past Continuous",
    "Present Perfect",
    "Future Simple",
    "Conditional",
    "Inversion",
]

QUESTION_COUNTS: List[int] = [5, 10, 15, 20]

LEVEL_DESCRIPTIONS: Dict[Level, str] = {
    Level.BEGINNER: "Simple texts with basic vocabulary",
    Level.INTERMEDIATE: "Moderate complexity with varied vocabulary",
    Level.ADVANCED: "Complex texts with advanced vocabulary",
}

READING_TOPICS: List[str] = [
    "Science and Technology",
    "History and Culture",
    "Environment and Nature",
    "Business and Economics",
    "Arts and Entertainment",
    "Health and Wellness",
]

WRITING_TYPES: List[str] = [
    "Essay",
    "Story",
    "Letter",
    "Report",
    "Review",
    "Description",
]

WRITING_TOPICS: List[str] = [
    "Technology and Innovation",
    "Education and Learning",
    "Environment and Climate",
    "Travel and Culture",
    "Food and Health",
    "Social Media and Communication",
    "Work and Career",
    "Hobbies and Entertainment",
]

PARAGRAPH_PROMPTS: List[str] = [
    "Write a short paragraph about climate change",
    "Write a short paragraph about artificial intelligence",
    "Write a short paragraph about sustainable living",
    "Write a short paragraph about cultural diversity",
    "Write a short paragraph about space exploration",
]

# Reading passage length and vocabulary per level
READING_LENGTHS: Dict[Level, str] = {
    Level.BEGINNER: "100-150 words",
    Level.INTERMEDIATE: "150-200 words",
    Level.ADVANCED: "200-250 words",
}

READING_VOCABULARY: Dict[Level, str] = {
    Level.BEGINNER: "Simple, common words",
    Level.INTERMEDIATE: "Mix of common and moderate vocabulary",
    Level.ADVANCED: "Advanced vocabulary with complex sentence structures",
}

# Writing task word count and time limit per level
WRITING_LENGTHS: Dict[Level, str] = {
    Level.BEGINNER: "100-150 words",
    Level.INTERMEDIATE: "150-250 words",
    Level.ADVANCED: "250-400 words",
}

WRITING_TIME_LIMITS: Dict[Level, str] = {
    Level.BEGINNER: "20-30 minutes",
    Level.INTERMEDIATE: "30-45 minutes",
    Level.ADVANCED: "45-60 minutes",
}
