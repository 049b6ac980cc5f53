import random
from dataclasses import dataclass
from typing import Tuple

from api.utils.distractors import shuffle_options
from api.utils.errors import check_request
from api.v1.schemas.question import Question

ADVANCED_TOPIC_LEVEL = 3


@dataclass(frozen=True)
class TopicTemplate:
    """A topic's questions; ``option_sets[i][0]`` answers ``questions[i]``."""

    topic: str
    questions: Tuple[str, ...]
    option_sets: Tuple[Tuple[str, ...], ...]
    image_hint: str
    min_level: int = 0


SCIENCE_TOPICS = (
    TopicTemplate(
        topic="animals",
        questions=(
            "Which animal is known as the king of the jungle?",
            "Which animal gives us milk?",
            "Which animal can fly?",
            "Which animal lives in water?",
            "Which animal has stripes?",
        ),
        option_sets=(
            ("Lion", "Tiger", "Elephant", "Monkey"),
            ("Cow", "Dog", "Cat", "Horse"),
            ("Bird", "Fish", "Snake", "Rabbit"),
            ("Fish", "Lion", "Dog", "Cat"),
            ("Zebra", "Horse", "Cow", "Sheep"),
        ),
        image_hint="Educational illustration of animals in their natural habitat, colorful and child-friendly",
    ),
    TopicTemplate(
        topic="plants",
        questions=(
            "What do plants need to grow?",
            "Which part of the plant makes food?",
            "What color are most leaves?",
            "What do plants produce that we breathe?",
            "Where do plants get energy from?",
        ),
        option_sets=(
            ("Water and sunlight", "Only water", "Only soil", "Only air"),
            ("Leaves", "Roots", "Flowers", "Bark"),
            ("Green", "Red", "Blue", "Yellow"),
            ("Oxygen", "Carbon dioxide", "Nitrogen", "Hydrogen"),
            ("The sun", "The moon", "The stars", "The earth"),
        ),
        image_hint="Beautiful botanical illustration showing plants and leaves, educational style",
    ),
    TopicTemplate(
        topic="body",
        questions=(
            "How many bones are in an adult human body approximately?",
            "Which organ pumps blood?",
            "What do we use to see?",
            "How many fingers do we have on both hands?",
            "What protects our brain?",
        ),
        option_sets=(
            ("206", "156", "306", "106"),
            ("Heart", "Liver", "Stomach", "Lungs"),
            ("Eyes", "Nose", "Ears", "Mouth"),
            ("10", "8", "12", "20"),
            ("Skull", "Ribs", "Spine", "Skin"),
        ),
        image_hint="Clean medical illustration of human anatomy, educational and appropriate for children",
    ),
    TopicTemplate(
        topic="space",
        questions=(
            "Which planet is closest to the sun?",
            "What do we call a group of stars?",
            "How long does it take Earth to orbit the sun?",
            "What is the largest planet in our solar system?",
            "What causes day and night on Earth?",
        ),
        option_sets=(
            ("Mercury", "Venus", "Earth", "Mars"),
            ("Constellation", "Galaxy", "Meteor", "Comet"),
            ("One year", "One month", "One week", "One day"),
            ("Jupiter", "Saturn", "Earth", "Mars"),
            ("Earth's rotation", "Moon's orbit", "Sun's movement", "Star's light"),
        ),
        image_hint="Beautiful space illustration with planets and stars, educational astronomy art",
        min_level=ADVANCED_TOPIC_LEVEL,
    ),
)

SOCIAL_TOPICS = (
    TopicTemplate(
        topic="geography",
        questions=(
            "What is the capital of our country?",
            "Which is the largest continent?",
            "What do we call a large body of water?",
            "Which direction does the sun rise from?",
            "What are the seven large land masses called?",
        ),
        option_sets=(
            ("New Delhi", "Mumbai", "Kolkata", "Chennai"),
            ("Asia", "Africa", "Europe", "Australia"),
            ("Ocean", "Mountain", "Desert", "Forest"),
            ("East", "West", "North", "South"),
            ("Continents", "Countries", "Islands", "Planets"),
        ),
        image_hint="Educational world map illustration with countries and continents, colorful and child-friendly",
    ),
    TopicTemplate(
        topic="culture",
        questions=(
            "What is a festival of lights?",
            "What do we call the national bird of India?",
            "Which monument is known as a symbol of love?",
            "What are the colors of the Indian flag?",
            "Who do we call the Father of the Nation?",
        ),
        option_sets=(
            ("Diwali", "Holi", "Eid", "Christmas"),
            ("Peacock", "Parrot", "Eagle", "Crow"),
            ("Taj Mahal", "Red Fort", "India Gate", "Qutub Minar"),
            ("Saffron, White, Green", "Red, White, Blue", "Yellow, Red, Green", "Blue, White, Red"),
            ("Mahatma Gandhi", "Jawaharlal Nehru", "Subhash Chandra Bose", "Sardar Patel"),
        ),
        image_hint="Beautiful illustration of Indian culture and traditions, educational and vibrant",
    ),
    TopicTemplate(
        topic="community",
        questions=(
            "Who helps us when we are sick?",
            "Who teaches us in school?",
            "Who protects us from fire?",
            "Where do we go to borrow books?",
            "Who delivers our mail?",
        ),
        option_sets=(
            ("Doctor", "Teacher", "Police", "Farmer"),
            ("Teacher", "Doctor", "Driver", "Cook"),
            ("Firefighter", "Police", "Doctor", "Teacher"),
            ("Library", "Hospital", "School", "Market"),
            ("Postman", "Teacher", "Doctor", "Cook"),
        ),
        image_hint="Illustration of community helpers and their roles, educational and diverse",
    ),
    TopicTemplate(
        topic="history",
        questions=(
            "Who was the first Prime Minister of India?",
            "In which year did India gain independence?",
            "Which freedom fighter is known for non-violence?",
            "What was the ancient name of India?",
            "Which empire built the Taj Mahal?",
        ),
        option_sets=(
            ("Jawaharlal Nehru", "Mahatma Gandhi", "Sardar Patel", "Subhash Bose"),
            ("1947", "1950", "1942", "1945"),
            ("Mahatma Gandhi", "Bhagat Singh", "Chandrashekhar Azad", "Rani Laxmi Bai"),
            ("Bharat", "Hindustan", "India", "All of these"),
            ("Mughal", "British", "Mauryan", "Gupta"),
        ),
        image_hint="Historical illustration of Indian independence and freedom fighters, educational style",
        min_level=ADVANCED_TOPIC_LEVEL,
    ),
)

SUBJECT_TOPICS = {
    "science": SCIENCE_TOPICS,
    "social": SOCIAL_TOPICS,
}


def unlocked_templates(subject: str, level: int) -> list[TopicTemplate]:
    return [t for t in SUBJECT_TOPICS[subject] if t.min_level <= level]


def available_topics(subject: str, level: int) -> list[str]:
    return [t.topic for t in unlocked_templates(subject, level)]


def question_from_template(template: TopicTemplate, level: int, rng=None) -> Question:
    rng = rng or random
    index = rng.randrange(len(template.questions))
    options = template.option_sets[index]

    return Question(
        prompt=template.questions[index],
        options=shuffle_options(options, rng),
        correct_answer=options[0],
        difficulty=level,
        topic=template.topic,
        source="template",
        image_hint=template.image_hint,
    )


def fallback_questions(subject: str, level: int, count: int, rng=None) -> list[Question]:
    """
    Offline question source for science and social studies.

    Picks a topic uniformly among those unlocked at ``level``, then one of
    its entries uniformly. Always returns exactly ``count`` questions.

    Raises:
        InvalidRequest: if ``count <= 0`` or ``level < 0``.
        KeyError: if ``subject`` has no template bank.
    """
    check_request(level, count)
    rng = rng or random
    templates = unlocked_templates(subject, level)

    return [
        question_from_template(rng.choice(templates), level, rng)
        for _ in range(count)
    ]
