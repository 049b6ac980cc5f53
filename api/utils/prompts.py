# utils/prompts.py

LEVEL_NAMES = ["LKG", "Class 1", "Class 2", "Class 3", "Class 4", "Class 5"]

SUBJECT_NAMES = {
    "science": "Science",
    "social": "Social Studies",
}

LEVEL_TOPICS = {
    "science": {
        0: "Animals (cats, dogs, birds), plants (trees, flowers), body parts (eyes, nose, hands), basic concepts (hot/cold, big/small)",
        1: "Animals (farm animals, wild animals), plants (parts of plants, what plants need), body parts (all basic parts), basic concepts (living/non-living)",
        2: "Weather (sunny, rainy, cloudy), basic ecosystems (forest, pond), simple life cycles (butterfly, plant growth)",
        3: "Weather patterns, ecosystems (desert, ocean, forest), complete life cycles, basic physics (push/pull, float/sink)",
        4: "Advanced biology (human body systems, animal habitats), basic physics (light, sound, magnetism), earth science (rocks, soil)",
        5: "Complex biology (digestive system, respiratory system), physics (forces, energy, simple machines), earth science (water cycle, solar system)",
    },
    "social": {
        0: "Family (mom, dad, siblings), community helpers (doctor, teacher, police), basic social concepts (sharing, helping)",
        1: "Family relationships, community (neighborhood, school), basic social concepts (rules, friendship)",
        2: "Geography (maps, directions), transportation (car, bus, airplane), cultural awareness (festivals, traditions)",
        3: "Geography (states, countries), transportation systems, cultural diversity, basic economics (needs vs wants)",
        4: "Government (local leaders, rules and laws), world geography (continents, oceans), global awareness (different countries)",
        5: "Government systems (democracy, voting), world geography (capitals, major landmarks), global awareness (cultures, languages, international cooperation)",
    },
}

QUESTION_PROMPT = """Generate {count} educational {subject_name} questions for {level_name} students (age {min_age}-{max_age}).

Topics to cover: {topics}

Requirements:
1. Questions should be age-appropriate and engaging
2. Each question should have exactly 4 multiple choice options
3. The correctAnswer must be copied exactly from the options
4. Provide a brief image description that would help visualize the concept
5. Include a simple explanation for the correct answer

Respond only with a JSON array. Do not use markdown formatting. Use this structure:
[
  {{
    "question": "What color is the sky on a clear day?",
    "options": ["Red", "Blue", "Green", "Yellow"],
    "correctAnswer": "Blue",
    "imagePrompt": "A clear blue sky with white fluffy clouds on a sunny day",
    "explanation": "The sky appears blue because of how sunlight interacts with our atmosphere."
  }}
]

Make sure questions are varied and cover different aspects of the topics. Keep language simple and appropriate for the age group."""


def level_name(level: int) -> str:
    if 0 <= level < len(LEVEL_NAMES):
        return LEVEL_NAMES[level]
    return LEVEL_NAMES[0]


def level_topics(subject: str, level: int) -> str:
    topics = LEVEL_TOPICS[subject]
    return topics.get(level, topics[0])


def build_question_prompt(subject: str, level: int, count: int) -> str:
    """Format the natural-language request sent to the AI provider."""
    return QUESTION_PROMPT.format(
        count=count,
        subject_name=SUBJECT_NAMES[subject],
        level_name=level_name(level),
        min_age=4 + level,
        max_age=6 + level,
        topics=level_topics(subject, level),
    )
