from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Union

from englearn.config import get_settings
from englearn.enums import (
    Level,
    READING_LENGTHS,
    READING_QUESTION_COUNT,
    READING_VOCABULARY,
    WRITING_LENGTHS,
    WRITING_TIME_LIMITS,
)
from englearn.llm.client import CompletionRequest

JSON_ONLY_SYSTEM = (
    "You are a strict JSON generator for an English learning app. "
    "Respond with ONLY valid JSON that matches the requested structure. "
    "Never wrap the JSON in markdown code fences and never add text before or after it."
)

PROMPTS: Dict[str, str] = {
    "translation": "Translate this English text to {target_lang}:\n\n{text}",
    "correction": """Below is an English paragraph and an {target_lang} translation written by a student. Please correct any errors in the {target_lang} translation and provide feedback.

English paragraph:
{english_text}

Student's {target_lang} translation:
{user_translation}

Corrections and feedback:""",
    "tense_questions": """Generate exactly {count} multiple-choice questions to practice the following English tenses: {tense_types}. Distribute the questions evenly among the selected tenses.

For each question:
- provide exactly 4 options, prefixed "A. ", "B. ", "C. " and "D. " in that order
- set "correctAnswer" to exactly one of "A", "B", "C" or "D"
- give a detailed explanation of why the answer is correct

IMPORTANT: Respond with ONLY a JSON array of exactly {count} objects, no surrounding text.

JSON Format:
[
  {
    "question": "_____ you _____ to the party yesterday?",
    "options": ["A. Did, go", "B. Have, gone", "C. Were, going", "D. Are, going"],
    "correctAnswer": "A",
    "explanation": "The correct answer is A (Did, go) because this is a past simple question about a finished time (yesterday)."
  }
]

Number of questions: {count}
Tenses: {tense_types}""",
    "reading": """You are a reading comprehension generator. Create a {level}-level reading passage about "{topic}" for English language learners.

IMPORTANT: Your response must be ONLY a valid JSON object with no additional text, comments, or explanations before or after the JSON.

Requirements:
- Passage: {length}
- Vocabulary: {vocabulary}
- Exactly {question_count} multiple-choice questions with exactly 4 options each (A, B, C, D)
- "correctAnswer" must be exactly one of "A", "B", "C" or "D"
- Each question must test different comprehension skills: main idea, details, inference, vocabulary, and author's purpose

JSON Format (respond with ONLY this JSON, no other text):
{
  "passage": "Your reading passage text here...",
  "questions": [
    {
      "question": "Question text?",
      "options": [
        "A. First option",
        "B. Second option",
        "C. Third option",
        "D. Fourth option"
      ],
      "correctAnswer": "A",
      "explanation": "Brief explanation of why this answer is correct."
    }
  ]
}

Topic: {topic}
Level: {level}

Respond with ONLY the JSON object, no additional text.""",
    "writing_prompt": """You are a writing instructor. Create a {level}-level {writing_type} writing prompt about "{topic}" for English language learners.

IMPORTANT: Your response must be ONLY a valid JSON object with no additional text, comments, or explanations before or after the JSON.

Requirements:
- Create an engaging and clear writing prompt
- Include specific requirements based on the writing type and level
- Provide helpful tips for completing the task
- Set appropriate word count: {word_count}
- Time limit: {time_limit}

JSON Format (respond with ONLY this JSON, no other text):
{
  "title": "Engaging title for the writing task",
  "prompt": "Clear and detailed writing prompt that explains what the student should write about...",
  "requirements": [
    "Specific requirement 1",
    "Specific requirement 2",
    "Specific requirement 3"
  ],
  "wordCount": "{word_count}",
  "timeLimit": "{time_limit}",
  "tips": [
    "Helpful tip 1",
    "Helpful tip 2",
    "Helpful tip 3"
  ]
}

Writing Type: {writing_type_title}
Topic: {topic}
Level: {level}

Respond with ONLY the JSON object, no additional text.""",
    "evaluation": """You are an experienced English writing instructor. Evaluate this {level}-level {writing_type} writing sample and provide detailed feedback.

Original Prompt: "{prompt_text}"
Requirements: {requirements}

Student's Writing:
\"\"\"
{user_text}
\"\"\"

IMPORTANT: Your response must be ONLY a valid JSON object with no additional text, comments, or explanations before or after the JSON.

Provide comprehensive feedback with integer scores from 1 to 10 and specific comments:

JSON Format (respond with ONLY this JSON, no other text):
{
  "overallScore": 8,
  "strengths": [
    "Specific strength 1",
    "Specific strength 2"
  ],
  "improvements": [
    "Specific improvement suggestion 1",
    "Specific improvement suggestion 2"
  ],
  "grammar": {
    "score": 8,
    "issues": [
      "Specific grammar issue 1"
    ]
  },
  "vocabulary": {
    "score": 7,
    "feedback": "Detailed feedback about vocabulary usage..."
  },
  "structure": {
    "score": 8,
    "feedback": "Detailed feedback about text structure and organization..."
  },
  "content": {
    "score": 8,
    "feedback": "Detailed feedback about content quality and relevance..."
  }
}

Level: {level}
Writing Type: {writing_type_title}

Respond with ONLY the JSON object, no additional text.""",
}


def _safe_format(s: str, mapping: Dict[str, str]) -> str:
    """Replace only known {keys} using a safe formatter, leaving all other braces intact.

    Avoids KeyError and preserves embedded JSON examples like {"text": "..."}.
    """

    def repl(m: re.Match[str]) -> str:
        key = m.group(1)
        return str(mapping.get(key, m.group(0)))

    return re.sub(r"\{([a-zA-Z0-9_]+)\}", repl, s)


def get_prompt(key: str, **kwargs) -> str:
    """Get a prompt template by use case key, with formatting."""
    template = PROMPTS.get(key)
    if not template:
        raise ValueError(f"Prompt not found for key={key}")
    return _safe_format(template, kwargs)


def _level(level: Union[str, Level]) -> Level:
    try:
        return Level(str(getattr(level, "value", level)).strip().lower())
    except ValueError:
        allowed = ", ".join(lv.value for lv in Level)
        raise ValueError(f"Unknown level {level!r}; expected one of: {allowed}")


def _join_tenses(tense_types: Union[str, Sequence[str]]) -> str:
    if isinstance(tense_types, str):
        return tense_types.strip()
    return ", ".join(t.strip() for t in tense_types if t and t.strip())


def build_paragraph_request(model: str, topic: str, count: int = 1) -> CompletionRequest:
    prompt = f"Generate {count} paragraphs about: {topic}" if count > 1 else topic
    return CompletionRequest(model=model, prompt=prompt)


def build_translation_request(model: str, text: str, target_lang: Optional[str] = None) -> CompletionRequest:
    lang = target_lang or get_settings().translation_lang
    return CompletionRequest(model=model, prompt=get_prompt("translation", target_lang=lang, text=text))


def build_correction_request(
    model: str,
    english_text: str,
    user_translation: str,
    target_lang: Optional[str] = None,
) -> CompletionRequest:
    lang = target_lang or get_settings().translation_lang
    prompt = get_prompt(
        "correction",
        target_lang=lang,
        english_text=english_text,
        user_translation=user_translation,
    )
    return CompletionRequest(model=model, prompt=prompt)


def build_tense_questions_request(
    model: str, tense_types: Union[str, Sequence[str]], count: int
) -> CompletionRequest:
    """Tense drill: a JSON array of exactly `count` four-option questions."""
    prompt = get_prompt("tense_questions", count=str(count), tense_types=_join_tenses(tense_types))
    return CompletionRequest(
        model=model,
        prompt=prompt,
        system_prompt=JSON_ONLY_SYSTEM,
        max_tokens=2000,
    )


def build_reading_request(model: str, level: Union[str, Level], topic: str) -> CompletionRequest:
    lv = _level(level)
    prompt = get_prompt(
        "reading",
        level=lv.value,
        topic=topic,
        length=READING_LENGTHS[lv],
        vocabulary=READING_VOCABULARY[lv],
        question_count=str(READING_QUESTION_COUNT),
    )
    return CompletionRequest(
        model=model,
        prompt=prompt,
        system_prompt=JSON_ONLY_SYSTEM,
        max_tokens=2500,
        temperature=0.7,
    )


def build_writing_prompt_request(
    model: str, level: Union[str, Level], writing_type: str, topic: str
) -> CompletionRequest:
    lv = _level(level)
    prompt = get_prompt(
        "writing_prompt",
        level=lv.value,
        writing_type=writing_type.lower(),
        writing_type_title=writing_type,
        topic=topic,
        word_count=WRITING_LENGTHS[lv],
        time_limit=WRITING_TIME_LIMITS[lv],
    )
    return CompletionRequest(
        model=model,
        prompt=prompt,
        system_prompt=JSON_ONLY_SYSTEM,
        max_tokens=1500,
        temperature=0.7,
    )


def build_evaluation_request(
    model: str,
    level: Union[str, Level],
    writing_type: str,
    prompt_text: str,
    requirements: Optional[List[str]],
    user_text: str,
) -> CompletionRequest:
    lv = _level(level)
    prompt = get_prompt(
        "evaluation",
        level=lv.value,
        writing_type=writing_type.lower(),
        writing_type_title=writing_type,
        prompt_text=prompt_text,
        requirements=", ".join(requirements or []),
        user_text=user_text,
    )
    return CompletionRequest(
        model=model,
        prompt=prompt,
        system_prompt=JSON_ONLY_SYSTEM,
        max_tokens=2000,
        temperature=0.3,
    )
